from datetime import datetime

from sqlalchemy import func, or_

from library_app.models.borrow import BorrowRecord
from library_app.repositories.base import BaseRepo

class BorrowRepo(BaseRepo):
    model = BorrowRecord
    label = "Ödünç kaydı"

    @staticmethod
    def list_by_student(student_id: int):
        return BorrowRepo.query("student_id", student_id, order_by="borrow_date", descending=True)

    @staticmethod
    def count_open_for_book(book_id: int) -> int:
        return BorrowRecord.query.filter(
            BorrowRecord.book_id == book_id,
            BorrowRecord.is_returned.is_(False)
        ).count()

    @staticmethod
    def find_overdue(now: datetime):
        return BorrowRecord.query.filter(
            BorrowRecord.is_returned.is_(False),
            BorrowRecord.due_date < now
        ).order_by(BorrowRecord.due_date.asc()).all()

    @staticmethod
    def filter_records(status: str = "all", term: str | None = None, now: datetime | None = None):
        q = BorrowRecord.query
        if status == "borrowed":
            q = q.filter(BorrowRecord.is_returned.is_(False))
        elif status == "returned":
            q = q.filter(BorrowRecord.is_returned.is_(True))
        elif status == "overdue":
            q = q.filter(BorrowRecord.is_returned.is_(False), BorrowRecord.due_date < now)
        if term:
            like = f"%{term.lower()}%"
            q = q.filter(or_(
                func.lower(BorrowRecord.book_title).like(like),
                func.lower(BorrowRecord.book_author).like(like),
                func.lower(BorrowRecord.student_name).like(like),
                func.lower(BorrowRecord.student_roll_number).like(like),
            ))
        return q.order_by(BorrowRecord.borrow_date.desc(), BorrowRecord.id.desc()).all()
