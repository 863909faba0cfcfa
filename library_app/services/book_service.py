from flask import current_app
from sqlalchemy.orm.exc import StaleDataError

from library_app.errors import Conflict, InvalidRequest
from library_app.repositories.book_repo import BookRepo
from library_app.repositories.borrow_repo import BorrowRepo
from library_app.services.validation import require_count, require_text

TEXT_FIELDS = ("title", "author", "isbn", "category")


class BookService:
    @staticmethod
    def list_books():
        return BookRepo.list_all()

    @staticmethod
    def search(term: str | None = None, category: str | None = None):
        return BookRepo.search((term or "").strip() or None, (category or "").strip() or None)

    @staticmethod
    def categories():
        return BookRepo.categories()

    @staticmethod
    def get_book(book_id: int):
        return BookRepo.get_or_raise(book_id)

    @staticmethod
    def create_book(data: dict):
        fields = {k: require_text(data, k) for k in TEXT_FIELDS}
        total = require_count(data, "total_quantity", 1)
        # yeni kitapta tüm kopyalar rafta
        fields["total_quantity"] = total
        fields["available_quantity"] = total

        book_id = BookRepo.insert(fields)
        current_app.logger.info(f"[catalog] book created id={book_id} total={total}")
        return BookRepo.get(book_id)

    @staticmethod
    def update_book(book_id: int, data: dict):
        """
        Catalog edit. available_quantity is never taken from the caller; a new
        total_quantity re-derives it from the open loan count and may not go
        below that count.
        """
        if "available_quantity" in data:
            raise InvalidRequest("available_quantity doğrudan değiştirilemez")

        book = BookService.get_book(book_id)

        fields = {}
        for k in TEXT_FIELDS:
            if k in data and data[k] is not None:
                fields[k] = require_text(data, k)

        if "total_quantity" in data and data["total_quantity"] is not None:
            total = require_count(data, "total_quantity")
            on_loan = BorrowRepo.count_open_for_book(book.id)
            if total < on_loan:
                raise InvalidRequest(
                    f"Toplam adet ödünçteki kopya sayısının ({on_loan}) altına indirilemez"
                )
            fields["total_quantity"] = total
            fields["available_quantity"] = total - on_loan

        try:
            book = BookRepo.update(book.id, fields)
        except StaleDataError:
            BookRepo.rollback()
            current_app.logger.warning(f"[catalog] book {book_id} changed concurrently, edit rejected")
            raise Conflict("Kitap bu sırada değişti, tekrar deneyin") from None

        current_app.logger.info(f"[catalog] book updated id={book.id} fields={sorted(fields)}")
        return book

    @staticmethod
    def delete_book(book_id: int):
        book = BookService.get_book(book_id)

        active_count = BorrowRepo.count_open_for_book(book.id)
        if active_count > 0:
            raise Conflict("Bu kitap aktif ödünçte. Önce iadeler tamamlanmalı.")

        try:
            BookRepo.delete(book.id)
        except StaleDataError:
            BookRepo.rollback()
            raise Conflict("Kitap bu sırada değişti, tekrar deneyin") from None
        current_app.logger.info(f"[catalog] book deleted id={book_id}")
