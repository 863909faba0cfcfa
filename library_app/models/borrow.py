from datetime import datetime
from library_app.extensions import db

class BorrowRecord(db.Model):
    __tablename__ = "borrow_records"
    __table_args__ = (
        db.CheckConstraint("due_date > borrow_date", name="ck_borrow_due_after_borrow"),
    )

    id = db.Column(db.Integer, primary_key=True)

    # snapshot of the student and the book at borrow time; never resynced.
    # the ids are plain columns so a record outlives its source rows.
    student_id = db.Column(db.Integer, nullable=False, index=True)
    student_name = db.Column(db.String(200), nullable=False)
    student_roll_number = db.Column(db.String(50), nullable=False)

    book_id = db.Column(db.Integer, nullable=False, index=True)
    book_title = db.Column(db.String(200), nullable=False)
    book_author = db.Column(db.String(200), nullable=False)

    borrow_date = db.Column(db.DateTime, nullable=False, index=True)
    due_date = db.Column(db.DateTime, nullable=False)
    return_date = db.Column(db.DateTime, nullable=True)
    is_returned = db.Column(db.Boolean, nullable=False, default=False, index=True)

    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        state = "returned" if self.is_returned else "open"
        return f"<BorrowRecord {self.id} book={self.book_id} student={self.student_id} {state}>"
