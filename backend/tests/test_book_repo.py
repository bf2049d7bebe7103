import os
import sys
from decimal import Decimal

import pytest

# Ensure the 'backend' directory is on sys.path so we can import bookstore modules when running tests from repo root
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, ".."))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from bookstore.core.errors import BadRequestError
from bookstore.core.pagination import PageRequest, parse_sort
from bookstore.models.book import Book
from bookstore.repos.book_repo import SqlAlchemyBookRepo
from bookstore.repos.category_repo import SqlAlchemyCategoryRepo
from bookstore.schemas.book import BookSearchParameters


@pytest.fixture
def repo(db_session, run_sql):
    run_sql("category/add-categories.sql")
    run_sql("book/add-books.sql")
    return SqlAlchemyBookRepo(db_session)


def test_exists_by_isbn(repo):
    assert repo.exists_by_isbn("978-0261103344")
    assert repo.exists_by_isbn("  978-0261103344 ")
    assert not repo.exists_by_isbn("978-0000000000")
    assert not repo.exists_by_isbn("")


def test_find_by_category_id_pages_linked_books(repo):
    first = repo.find_by_category_id(1, PageRequest(page=0, size=1))
    assert [b.id for b in first.content] == [1]
    assert first.total_elements == 2
    assert first.total_pages == 2

    second = repo.find_by_category_id(1, PageRequest(page=1, size=1))
    assert [b.id for b in second.content] == [3]


def test_find_by_category_id_without_books(repo):
    result = repo.find_by_category_id(42, PageRequest())
    assert result.content == []
    assert result.total_elements == 0


def test_list_rejects_unknown_sort_field(repo):
    with pytest.raises(BadRequestError):
        repo.list(PageRequest(sort=parse_sort(["password"])))


def test_search_title_is_case_insensitive_substring(repo):
    result = repo.search(BookSearchParameters(title="HISTORY"), PageRequest())
    assert [b.id for b in result.content] == [2]


def test_search_by_exact_isbn_and_price_range(repo):
    by_isbn = repo.search(BookSearchParameters(isbn="978-0261102736"), PageRequest())
    assert [b.id for b in by_isbn.content] == [3]

    in_range = repo.search(BookSearchParameters(min_price=Decimal("16"), max_price=Decimal("24")), PageRequest())
    assert [b.id for b in in_range.content] == [1, 3]


def test_create_with_duplicate_isbn_raises_value_error(repo, db_session):
    book = Book(title="Copy", author="Someone", isbn="978-0261103344", price=Decimal("1.00"))
    with pytest.raises(ValueError):
        repo.create(book)


def test_create_links_categories(repo, db_session):
    categories = SqlAlchemyCategoryRepo(db_session).get_many([2, 1])
    book = repo.create(
        Book(title="Cosmos", author="Carl Sagan", isbn="978-0345539434", price=Decimal("12.50"), categories=list(categories))
    )

    assert book.id == 4
    assert book.category_ids == [1, 2]
    assert [b.id for b in repo.find_by_category_id(2, PageRequest()).content] == [2, 4]


def test_search_matches_wildcard_characters_literally(repo):
    repo.create(Book(title="100% Pure_Code", author="A_B", isbn="978-1111111111", price=Decimal("5.00")))

    assert [b.title for b in repo.search(BookSearchParameters(title="_"), PageRequest()).content] == ["100% Pure_Code"]
    assert [b.id for b in repo.search(BookSearchParameters(title="%"), PageRequest()).content] == [4]
    assert repo.search(BookSearchParameters(title="100_"), PageRequest()).total_elements == 0
    assert repo.search(BookSearchParameters(author="a_b"), PageRequest()).total_elements == 1
    assert repo.search(BookSearchParameters(author="a%"), PageRequest()).total_elements == 0
