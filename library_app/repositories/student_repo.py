from sqlalchemy import func, or_

from library_app.models.student import Student
from library_app.repositories.base import BaseRepo

class StudentRepo(BaseRepo):
    model = Student
    label = "Öğrenci"

    @staticmethod
    def search(term: str | None = None):
        q = Student.query
        if term:
            like = f"%{term.lower()}%"
            q = q.filter(or_(
                func.lower(Student.name).like(like),
                func.lower(Student.roll_number).like(like),
                func.lower(Student.email).like(like),
                func.lower(Student.course).like(like),
            ))
        return q.order_by(Student.name.asc()).all()
