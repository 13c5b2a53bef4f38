import logging
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import Engine, delete, or_, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .db import Base, build_session_factory
from .entities import BookRecord
from .errors import NotFound, StoreError
from .models import Book

logger = logging.getLogger(__name__)


class CatalogStore:
    """All SQL access to the ``books`` table.

    Each operation runs in its own session, committed on success and rolled
    back on failure. Database errors surface as :class:`StoreError` with the
    driver's message.

    ``update`` and ``delete`` do not check that the row exists and carry no
    version column, so concurrent edits of one book can overwrite each other.
    """

    def __init__(self, engine: Engine):
        self.engine = engine
        self._session_factory = build_session_factory(engine)

    @contextmanager
    def _session(self) -> Iterator[Session]:
        session = self._session_factory()
        try:
            yield session
            session.commit()
        except SQLAlchemyError as exc:
            session.rollback()
            raise StoreError(str(exc)) from exc
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def initialize(self) -> None:
        try:
            Base.metadata.create_all(bind=self.engine)
        except SQLAlchemyError as exc:
            raise StoreError(str(exc)) from exc
        logger.info("books table ready", extra={"url": self.engine.url.render_as_string(hide_password=True)})

    def list_all(self) -> list[Book]:
        with self._session() as session:
            records = session.execute(select(BookRecord)).scalars().all()
            return [self._to_schema(record) for record in records]

    def search(self, query: str) -> list[Book]:
        stmt = select(BookRecord).where(
            or_(
                BookRecord.title.contains(query, autoescape=True),
                BookRecord.author.contains(query, autoescape=True),
            )
        )
        with self._session() as session:
            records = session.execute(stmt).scalars().all()
            return [self._to_schema(record) for record in records]

    def get_by_id(self, book_id: int) -> Book:
        with self._session() as session:
            record = session.get(BookRecord, book_id)
            if record is None:
                raise NotFound("Book not found")
            return self._to_schema(record)

    def create(self, title: str, author: str, year: int) -> int:
        with self._session() as session:
            record = BookRecord(title=title, author=author, year=year)
            session.add(record)
            session.flush()
            book_id = record.id
        logger.info("book.created", extra={"book_id": book_id})
        return book_id

    def update(self, book_id: int, title: str, author: str, year: int) -> None:
        stmt = update(BookRecord).where(BookRecord.id == book_id).values(title=title, author=author, year=year)
        with self._session() as session:
            rowcount = session.execute(stmt).rowcount
        logger.info("book.updated", extra={"book_id": book_id, "rows": rowcount})

    def delete(self, book_id: int) -> None:
        with self._session() as session:
            rowcount = session.execute(delete(BookRecord).where(BookRecord.id == book_id)).rowcount
        logger.info("book.deleted", extra={"book_id": book_id, "rows": rowcount})

    @staticmethod
    def _to_schema(record: BookRecord) -> Book:
        return Book.model_validate(record, from_attributes=True)
