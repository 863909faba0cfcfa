from datetime import datetime

from library_app.extensions import db
from library_app.models.book import Book
from library_app.models.borrow import BorrowRecord

BORROWED_AT = datetime(2024, 3, 1, 9, 0, 0)
DUE_AT = datetime(2024, 3, 15, 9, 0, 0)


def open_count(book_id: int) -> int:
    return BorrowRecord.query.filter_by(book_id=book_id, is_returned=False).count()


def assert_consistent(book_id: int):
    """0 <= available <= total and total - available == open records."""
    db.session.expire_all()
    book = db.session.get(Book, book_id)
    assert 0 <= book.available_quantity <= book.total_quantity
    assert book.total_quantity - book.available_quantity == open_count(book_id)
    return book
