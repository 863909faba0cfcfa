from library_app.models.book import Book
from library_app.models.student import Student
from library_app.models.borrow import BorrowRecord
from library_app.models.user import User

__all__ = ["Book", "Student", "BorrowRecord", "User"]
