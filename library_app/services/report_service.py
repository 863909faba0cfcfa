# library_app/services/report_service.py
from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime

from flask import current_app
from sqlalchemy import func, select

from library_app.extensions import db
from library_app.errors import InvalidRequest
from library_app.models.book import Book
from library_app.models.borrow import BorrowRecord
from library_app.models.student import Student
from library_app.repositories.borrow_repo import BorrowRepo
from library_app.services.ledger_service import coerce_id
from library_app.services.overdue import classify

RECORD_FILTERS = ("all", "borrowed", "overdue", "returned")


@dataclass(frozen=True)
class LibraryStats:
    total_books: int
    total_borrowed: int
    total_returned: int
    total_students: int
    active_students: int

    def to_dict(self) -> dict:
        return asdict(self)


class ReportService:
    @staticmethod
    def get_stats(actor) -> LibraryStats:
        """
        Dashboard numbers from one SELECT, so all five describe the same
        committed state.

        total_books counts copies (sum of total_quantity), not titles.
        active_students counts everyone who ever borrowed, returned or not.
        """
        open_q = select(func.count(BorrowRecord.id)).where(BorrowRecord.is_returned.is_(False))
        returned_q = select(func.count(BorrowRecord.id)).where(BorrowRecord.is_returned.is_(True))
        stmt = select(
            select(func.coalesce(func.sum(Book.total_quantity), 0)).scalar_subquery().label("total_books"),
            open_q.scalar_subquery().label("total_borrowed"),
            returned_q.scalar_subquery().label("total_returned"),
            select(func.count(Student.id)).scalar_subquery().label("total_students"),
            select(func.count(func.distinct(BorrowRecord.student_id))).scalar_subquery().label("active_students"),
        )
        row = db.session.execute(stmt).one()
        stats = LibraryStats(**{k: int(v or 0) for k, v in row._mapping.items()})

        current_app.logger.debug(f"[report] stats for {actor}: {stats}")
        return stats

    @staticmethod
    def list_records(actor, status: str = "all", search: str | None = None, now: datetime | None = None):
        """Records with their loan status, newest borrow first."""
        status = (status or "all").lower()
        if status not in RECORD_FILTERS:
            raise InvalidRequest(f"Geçersiz durum filtresi: {status}")

        now = now or datetime.utcnow()
        rows = BorrowRepo.filter_records(status, (search or "").strip() or None, now)
        current_app.logger.debug(f"[report] {len(rows)} records status={status} for {actor}")
        return [(r, classify(r, now)) for r in rows]

    @staticmethod
    def list_overdue(actor, now: datetime | None = None):
        now = now or datetime.utcnow()
        return [(r, classify(r, now)) for r in BorrowRepo.find_overdue(now)]

    @staticmethod
    def student_history(actor, student_id, now: datetime | None = None):
        now = now or datetime.utcnow()
        rows = BorrowRepo.list_by_student(coerce_id(student_id, "öğrenci"))
        return [(r, classify(r, now)) for r in rows]
