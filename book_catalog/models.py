import re
from typing import Annotated

from pydantic import BaseModel, BeforeValidator, Field, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from .errors import ValidationError

_FIELD_MESSAGES = {
    "id": "Invalid book id",
    "year": "Invalid publication year",
}

_INTEGER_LITERAL = re.compile(r"[+-]?[0-9]+")


def _integer_literal(value):
    if isinstance(value, str) and not _INTEGER_LITERAL.fullmatch(value):
        raise ValueError("not an integer literal")
    return value


# form values must be plain decimal literals that fit a 64-bit INTEGER column
SqlInteger = Annotated[int, BeforeValidator(_integer_literal), Field(ge=-(2**63), le=2**63 - 1)]

_book_id = TypeAdapter(SqlInteger)


class BookFields(BaseModel):
    title: str
    author: str
    year: SqlInteger


class Book(BookFields):
    id: SqlInteger


class SearchResult(BaseModel):
    query: str
    books: list[Book]


def _as_catalog_error(exc: PydanticValidationError) -> ValidationError:
    field = exc.errors()[0]["loc"][0]
    return ValidationError(_FIELD_MESSAGES.get(field, f"Invalid {field}"))


def parse_new_book(title: str, author: str, year: str) -> BookFields:
    try:
        return BookFields(title=title, author=author, year=year)
    except PydanticValidationError as exc:
        raise _as_catalog_error(exc) from exc


def parse_book_update(book_id: str, title: str, author: str, year: str) -> Book:
    # id is reported before year when both are malformed
    try:
        parsed_id = _book_id.validate_python(book_id)
    except PydanticValidationError as exc:
        raise ValidationError(_FIELD_MESSAGES["id"]) from exc
    try:
        return Book(id=parsed_id, title=title, author=author, year=year)
    except PydanticValidationError as exc:
        raise _as_catalog_error(exc) from exc


def parse_book_id(raw: str) -> int | None:
    """Return the integer id, or None when no record could carry it."""
    try:
        return _book_id.validate_python(raw)
    except PydanticValidationError:
        return None
