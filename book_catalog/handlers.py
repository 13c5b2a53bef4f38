import logging

from fastapi import APIRouter, Depends, Form, Request, status
from fastapi.responses import RedirectResponse
from starlette.responses import Response

from .errors import NotFound, ValidationError
from .models import SearchResult, parse_book_id, parse_book_update, parse_new_book
from .store import CatalogStore
from .views import CatalogViews

logger = logging.getLogger(__name__)

router = APIRouter(tags=["books"])


def get_store(request: Request) -> CatalogStore:
    return request.app.state.store


def get_views(request: Request) -> CatalogViews:
    return request.app.state.views


def _redirect_to_list() -> RedirectResponse:
    return RedirectResponse("/", status_code=status.HTTP_303_SEE_OTHER)


def _lookup(store: CatalogStore, raw_id: str):
    book_id = parse_book_id(raw_id)
    if book_id is None:
        raise NotFound("Book not found")
    return store.get_by_id(book_id)


@router.get("/")
def list_books(
    request: Request,
    store: CatalogStore = Depends(get_store),
    views: CatalogViews = Depends(get_views),
) -> Response:
    return views.book_list(request, store.list_all())


@router.get("/search")
def search_books(
    request: Request,
    query: str = "",
    store: CatalogStore = Depends(get_store),
    views: CatalogViews = Depends(get_views),
) -> Response:
    result = SearchResult(query=query, books=store.search(query))
    return views.search_results(request, result)


@router.get("/book")
def show_book(
    request: Request,
    id: str = "",
    store: CatalogStore = Depends(get_store),
    views: CatalogViews = Depends(get_views),
) -> Response:
    return views.book_detail(request, _lookup(store, id))


@router.get("/edit")
def edit_book(
    request: Request,
    id: str = "",
    store: CatalogStore = Depends(get_store),
    views: CatalogViews = Depends(get_views),
) -> Response:
    return views.edit_form(request, _lookup(store, id))


@router.post("/add")
def add_book(
    title: str = Form(""),
    author: str = Form(""),
    year: str = Form(""),
    store: CatalogStore = Depends(get_store),
) -> RedirectResponse:
    logger.info("add.received", extra={"title": title, "author": author, "year": year})
    try:
        fields = parse_new_book(title, author, year)
    except ValidationError:
        logger.info("add.rejected", extra={"year": year})
        raise
    store.create(fields.title, fields.author, fields.year)
    return _redirect_to_list()


@router.post("/update")
def update_book(
    id: str = Form(""),
    title: str = Form(""),
    author: str = Form(""),
    year: str = Form(""),
    store: CatalogStore = Depends(get_store),
) -> RedirectResponse:
    book = parse_book_update(id, title, author, year)
    store.update(book.id, book.title, book.author, book.year)
    return _redirect_to_list()


@router.api_route("/delete", methods=["GET", "POST"])
def delete_book(id: str = "", store: CatalogStore = Depends(get_store)) -> RedirectResponse:
    book_id = parse_book_id(id)
    if book_id is None:
        logger.info("delete.skipped", extra={"raw_id": id})
    else:
        store.delete(book_id)
    return _redirect_to_list()
