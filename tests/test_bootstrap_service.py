import pytest

from repositories.book_dao import BookDao
from services.bootstrap_service import BootstrapService

pytestmark = pytest.mark.usefixtures("pool")

EXPECTED = {
    "author": 2,
    "book": 2,
    "book_uuid": 2,
    "book_natural": 2,
    "author_composite": 2,
}


def test_run_loads_every_table():
    assert BootstrapService().run() == EXPECTED


def test_run_is_idempotent():
    BootstrapService().run()

    assert BootstrapService().run() == EXPECTED


def test_books_reference_their_authors():
    service = BootstrapService()
    service.run()

    book = BookDao().find_book_by_title("Domain Driven Design")
    author = service.authors.get_by_id(book.author_id)
    assert (author.first_name, author.last_name) == ("Eric", "Evans")
