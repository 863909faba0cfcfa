from datetime import datetime
from library_app.extensions import db

class Book(db.Model):
    __tablename__ = "books"
    __table_args__ = (
        db.CheckConstraint("total_quantity >= 0", name="ck_books_total_non_negative"),
        db.CheckConstraint("available_quantity >= 0", name="ck_books_available_non_negative"),
        db.CheckConstraint("available_quantity <= total_quantity", name="ck_books_available_le_total"),
    )

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(200), nullable=False, index=True)
    author = db.Column(db.String(200), nullable=False, index=True)
    isbn = db.Column(db.String(32), nullable=False, index=True)
    category = db.Column(db.String(100), nullable=False, index=True)

    total_quantity = db.Column(db.Integer, nullable=False, default=1)
    available_quantity = db.Column(db.Integer, nullable=False, default=1)

    # bumped on every write; ORM flushes of a stale row raise StaleDataError
    version = db.Column(db.Integer, nullable=False, default=1)

    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    __mapper_args__ = {"version_id_col": version}

    def __repr__(self):
        return f"<Book {self.id} {self.title!r} {self.available_quantity}/{self.total_quantity}>"
