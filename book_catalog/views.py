from pathlib import Path

from fastapi import Request
from fastapi.templating import Jinja2Templates
from starlette.responses import Response

from .models import Book, SearchResult

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"


class CatalogViews:
    """Turns handler data into HTML pages; each method takes one data value."""

    def __init__(self, directory: str | Path | None = None):
        self.templates = Jinja2Templates(directory=str(directory or TEMPLATES_DIR))

    def book_list(self, request: Request, books: list[Book]) -> Response:
        return self.templates.TemplateResponse(request, "books.html", {"books": books})

    def search_results(self, request: Request, result: SearchResult) -> Response:
        return self.templates.TemplateResponse(request, "search.html", {"result": result})

    def book_detail(self, request: Request, book: Book) -> Response:
        return self.templates.TemplateResponse(request, "book.html", {"book": book})

    def edit_form(self, request: Request, book: Book) -> Response:
        return self.templates.TemplateResponse(request, "edit.html", {"book": book})
