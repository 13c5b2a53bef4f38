import pytest
from hypothesis import given, settings, strategies as st
from sqlalchemy import create_engine

from book_catalog.db import build_engine
from book_catalog.errors import NotFound, StoreError
from book_catalog.models import Book
from book_catalog.store import CatalogStore


def test_create_then_get_returns_same_fields(store):
    book_id = store.create("Dune", "Herbert", 1965)
    assert store.get_by_id(book_id) == Book(id=book_id, title="Dune", author="Herbert", year=1965)


def test_create_assigns_fresh_ids(store):
    ids = [store.create(f"t{n}", "a", n) for n in range(5)]
    assert len(set(ids)) == 5


def test_ids_are_not_reused_after_delete(store):
    first = store.create("A", "a", 1)
    store.delete(first)
    second = store.create("B", "b", 2)
    assert second != first


def test_empty_fields_are_stored(store):
    book_id = store.create("", "", 0)
    assert store.get_by_id(book_id) == Book(id=book_id, title="", author="", year=0)


def test_list_all_returns_survivors(store):
    ids = [store.create(f"t{n}", f"a{n}", 2000 + n) for n in range(4)]
    store.delete(ids[1])
    store.delete(ids[3])
    assert {book.id for book in store.list_all()} == {ids[0], ids[2]}


def test_list_all_empty(store):
    assert store.list_all() == []


def test_search_is_case_sensitive(store):
    dune = store.create("Dune", "Herbert", 1965)
    store.create("Foundation", "Asimov", 1951)

    assert store.search("herbert") == []
    assert store.search("Herbert") == [Book(id=dune, title="Dune", author="Herbert", year=1965)]


def test_search_matches_title_or_author(store):
    dune = store.create("Dune", "Herbert", 1965)
    foundation = store.create("Foundation", "Asimov", 1951)
    store.create("Emma", "Austen", 1815)

    assert {book.id for book in store.search("un")} == {dune, foundation}
    assert {book.id for book in store.search("Asim")} == {foundation}


def test_empty_search_returns_everything(store):
    for n in range(3):
        store.create(f"t{n}", "a", n)
    assert {book.id for book in store.search("")} == {book.id for book in store.list_all()}


def test_search_treats_wildcards_literally(store):
    store.create("100% Pure", "Anon", 2001)
    store.create("Plain", "Some_one", 2002)
    store.create("Plainer", "Someone", 2003)

    assert [book.title for book in store.search("%")] == ["100% Pure"]
    assert [book.author for book in store.search("e_o")] == ["Some_one"]


def test_update_overwrites_fields_and_keeps_id(store):
    book_id = store.create("Dune", "Herbert", 1965)
    store.update(book_id, "Dune Messiah", "Frank Herbert", 1969)
    assert store.get_by_id(book_id) == Book(id=book_id, title="Dune Messiah", author="Frank Herbert", year=1969)


def test_update_missing_id_is_noop(store):
    book_id = store.create("Dune", "Herbert", 1965)
    before = store.list_all()
    store.update(book_id + 100, "x", "y", 1)
    assert store.list_all() == before


def test_delete_missing_id_is_noop(store):
    store.create("Dune", "Herbert", 1965)
    before = store.list_all()
    store.delete(999)
    assert store.list_all() == before


def test_delete_then_get_raises_not_found(store):
    book_id = store.create("Dune", "Herbert", 1965)
    store.delete(book_id)
    with pytest.raises(NotFound):
        store.get_by_id(book_id)
    assert book_id not in {book.id for book in store.list_all()}


def test_get_missing_raises_not_found(store):
    with pytest.raises(NotFound):
        store.get_by_id(42)


def test_initialize_is_idempotent(store):
    book_id = store.create("Dune", "Herbert", 1965)
    store.initialize()
    assert store.get_by_id(book_id).title == "Dune"


def test_query_failure_raises_store_error(tmp_path):
    # the table is never created
    store = CatalogStore(build_engine(f"sqlite:///{tmp_path / 'empty.db'}"))
    with pytest.raises(StoreError) as exc:
        store.list_all()
    assert "books" in str(exc.value)


def test_initialize_failure_raises_store_error(tmp_path):
    missing_dir = tmp_path / "missing" / "books.db"
    store = CatalogStore(create_engine(f"sqlite:///{missing_dir}"))
    with pytest.raises(StoreError):
        store.initialize()


def test_memory_store_shares_one_database():
    store = CatalogStore(build_engine("sqlite://"))
    store.initialize()
    book_id = store.create("Dune", "Herbert", 1965)
    assert store.get_by_id(book_id).author == "Herbert"


words = st.text(alphabet="abAB%_/ ", max_size=6)


@settings(max_examples=50, deadline=None)
@given(rows=st.lists(st.tuples(words, words), max_size=6), query=words)
def test_search_equals_substring_filter(rows, query):
    store = CatalogStore(build_engine("sqlite://"))
    store.initialize()
    for title, author in rows:
        store.create(title, author, 2000)

    expected = {book.id for book in store.list_all() if query in book.title or query in book.author}
    assert {book.id for book in store.search(query)} == expected
