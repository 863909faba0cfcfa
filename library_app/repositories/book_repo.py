from sqlalchemy import func, or_

from library_app.models.book import Book
from library_app.extensions import db
from library_app.repositories.base import BaseRepo

class BookRepo(BaseRepo):
    model = Book
    label = "Kitap"

    @staticmethod
    def search(term: str | None = None, category: str | None = None):
        q = Book.query
        if category:
            q = q.filter(Book.category == category)
        if term:
            like = f"%{term.lower()}%"
            q = q.filter(or_(
                func.lower(Book.title).like(like),
                func.lower(Book.author).like(like),
                Book.isbn.like(f"%{term}%"),
            ))
        return q.order_by(Book.title.asc()).all()

    @staticmethod
    def categories():
        rows = db.session.query(Book.category).distinct().order_by(Book.category.asc()).all()
        return [r[0] for r in rows]
