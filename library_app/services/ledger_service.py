# library_app/services/ledger_service.py
from __future__ import annotations

from datetime import datetime, timedelta

from flask import current_app
from sqlalchemy import select, update

from library_app.extensions import db
from library_app.errors import (
    AlreadyReturned,
    Conflict,
    InvalidRequest,
    InventoryConsistencyError,
    LedgerError,
    NotFound,
)
from library_app.models.book import Book
from library_app.models.borrow import BorrowRecord
from library_app.models.student import Student
from library_app.repositories.book_repo import BookRepo
from library_app.repositories.borrow_repo import BorrowRepo
from library_app.repositories.student_repo import StudentRepo


def coerce_id(value, label: str) -> int:
    """Accepts positive ints and strings of digits; anything else is a malformed identifier."""
    row_id = None
    if isinstance(value, int) and not isinstance(value, bool):
        row_id = value
    elif isinstance(value, str):
        text = value.strip()
        if text.isascii() and text.isdigit():
            row_id = int(text)
    if row_id is None or row_id < 1:
        raise InvalidRequest(f"Geçersiz {label} kimliği: {value!r}")
    return row_id


def _exists(model, row_id: int) -> bool:
    return db.session.execute(select(model.id).where(model.id == row_id)).first() is not None


class LedgerService:
    """
    Tek yazıcı: available_quantity'yi ödünç/iade ile değiştiren ve
    BorrowRecord oluşturan/kapatan tek yer.

    Her işlem tek transaction: çekişilen satırda koşullu UPDATE, bağlı yazım,
    tek commit. Hata olursa önce rollback yapılır; kayıt stok değişimi
    olmadan görünmez.
    """

    @staticmethod
    def _resolve(repo, ref, label: str):
        if isinstance(ref, repo.model):
            return ref
        return repo.get_or_raise(coerce_id(ref, label))

    @staticmethod
    def _reject(op: str, actor, err: LedgerError):
        db.session.rollback()
        log = current_app.logger
        if isinstance(err, InventoryConsistencyError):
            log.error(f"[ledger] {op} rolled back by {actor}: {err}")
        else:
            log.warning(f"[ledger] {op} rejected for {actor} ({err.code}): {err}")

    @staticmethod
    def borrow(actor, student, book, borrow_date: datetime | None = None, due_date: datetime | None = None) -> int:
        """
        ``student`` / ``book`` are either rows the caller already read or ids.
        The availability check runs against the caller's view of the book;
        if the last copy is gone by commit time the call fails with Conflict.

        Returns the new record id.
        """
        student = LedgerService._resolve(StudentRepo, student, "öğrenci")
        book = LedgerService._resolve(BookRepo, book, "kitap")

        # caller's view, captured before anything else touches the session
        seen_available = book.available_quantity
        snapshot = {
            "student_id": student.id,
            "student_name": student.name,
            "student_roll_number": student.roll_number,
            "book_id": book.id,
            "book_title": book.title,
            "book_author": book.author,
        }

        borrow_date = borrow_date or datetime.utcnow()
        if due_date is None:
            due_date = borrow_date + timedelta(days=current_app.config.get("LOAN_PERIOD_DAYS", 14))

        if due_date <= borrow_date:
            raise InvalidRequest("Teslim tarihi ödünç tarihinden sonra olmalı")
        if seen_available is None or seen_available < 1:
            raise InvalidRequest("Bu kitap şu anda mevcut değil")

        book_id = snapshot["book_id"]
        now = datetime.utcnow()
        try:
            # stok düş: yalnızca hâlâ kopya varsa
            taken = db.session.execute(
                update(Book)
                .where(Book.id == book_id, Book.available_quantity > 0)
                .values(
                    available_quantity=Book.available_quantity - 1,
                    version=Book.version + 1,
                    updated_at=now,
                )
                .execution_options(synchronize_session=False)
            )
            if taken.rowcount != 1:
                if not _exists(Book, book_id):
                    raise NotFound(f"Kitap bulunamadı: {book_id}")
                raise Conflict("Son kopya başka bir işlemle ödünç verildi, tekrar deneyin")

            if not _exists(Student, snapshot["student_id"]):
                raise NotFound(f"Öğrenci bulunamadı: {snapshot['student_id']}")

            record_id = BorrowRepo.insert(
                dict(snapshot, borrow_date=borrow_date, due_date=due_date, is_returned=False),
                commit=False,
            )
            # tek commit noktası
            db.session.commit()
        except LedgerError as e:
            LedgerService._reject("borrow", actor, e)
            raise
        except Exception:
            db.session.rollback()
            current_app.logger.exception(f"[ledger] borrow failed for {actor} (book={book_id})")
            raise

        current_app.logger.info(
            f"[ledger] borrow record={record_id} book={book_id} student={snapshot['student_id']} "
            f"due={due_date.isoformat()} by={actor}"
        )
        return record_id

    @staticmethod
    def return_book(actor, record_id, returned_at: datetime | None = None) -> BorrowRecord:
        """
        Closes an open record and puts the copy back, atomically.

        Not idempotent: a closed record fails with AlreadyReturned and nothing
        changes. A restock that would exceed total_quantity is treated as an
        internal inconsistency and rolls the whole return back.
        """
        record_id = coerce_id(record_id, "ödünç kaydı")
        returned_at = returned_at or datetime.utcnow()
        book_id = None
        try:
            closed = db.session.execute(
                update(BorrowRecord)
                .where(BorrowRecord.id == record_id, BorrowRecord.is_returned.is_(False))
                .values(is_returned=True, return_date=returned_at, updated_at=returned_at)
                .execution_options(synchronize_session=False)
            )
            if closed.rowcount != 1:
                if not _exists(BorrowRecord, record_id):
                    raise NotFound(f"Ödünç kaydı bulunamadı: {record_id}")
                raise AlreadyReturned("Bu kitap zaten iade edilmiş")

            book_id = db.session.execute(
                select(BorrowRecord.book_id).where(BorrowRecord.id == record_id)
            ).scalar_one()

            # stok iade
            restocked = db.session.execute(
                update(Book)
                .where(Book.id == book_id, Book.available_quantity < Book.total_quantity)
                .values(
                    available_quantity=Book.available_quantity + 1,
                    version=Book.version + 1,
                    updated_at=returned_at,
                )
                .execution_options(synchronize_session=False)
            )
            if restocked.rowcount != 1:
                if _exists(Book, book_id):
                    raise InventoryConsistencyError(
                        f"Kitap {book_id} zaten tam stokta; iade stoğu toplamın üstüne çıkarırdı"
                    )
                current_app.logger.warning(
                    f"[ledger] return record={record_id}: book {book_id} no longer exists, restock skipped"
                )

            db.session.commit()
        except LedgerError as e:
            LedgerService._reject("return", actor, e)
            raise
        except Exception:
            db.session.rollback()
            current_app.logger.exception(f"[ledger] return failed for {actor} (record={record_id})")
            raise

        current_app.logger.info(f"[ledger] return record={record_id} book={book_id} by={actor}")
        return BorrowRepo.get(record_id)
