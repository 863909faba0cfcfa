from flask import current_app

from library_app.repositories.student_repo import StudentRepo
from library_app.services.validation import require_text

FIELDS = ("name", "roll_number", "email", "course")


class StudentService:
    @staticmethod
    def list_students():
        return StudentRepo.list_all()

    @staticmethod
    def search(term: str | None = None):
        return StudentRepo.search((term or "").strip() or None)

    @staticmethod
    def get_student(student_id: int):
        return StudentRepo.get_or_raise(student_id)

    @staticmethod
    def create_student(data: dict):
        student_id = StudentRepo.insert({k: require_text(data, k) for k in FIELDS})
        current_app.logger.info(f"[roster] student created id={student_id}")
        return StudentRepo.get(student_id)

    @staticmethod
    def update_student(student_id: int, data: dict):
        fields = {k: require_text(data, k) for k in FIELDS if k in data and data[k] is not None}
        student = StudentRepo.update(student_id, fields)
        current_app.logger.info(f"[roster] student updated id={student_id} fields={sorted(fields)}")
        return student

    @staticmethod
    def delete_student(student_id: int):
        # borrow records keep their snapshot; nothing to cascade
        StudentRepo.delete(student_id)
        current_app.logger.info(f"[roster] student deleted id={student_id}")
