from flask import Blueprint, request, jsonify

from library_app.errors import LedgerError
from library_app.services.student_service import StudentService
from library_app.services.report_service import ReportService
from library_app.utils.decorators import admin_required
from library_app.controllers.common import ledger_error, record_json, student_json

student_bp = Blueprint("students", __name__)


@student_bp.get("/")
@admin_required
def list_students(identity):
    q = request.args.get("q")
    students = StudentService.search(q) if q else StudentService.list_students()
    return jsonify({"success": True, "data": [student_json(s) for s in students]})


@student_bp.get("/<int:student_id>")
@admin_required
def get_student(student_id: int, identity):
    try:
        return jsonify({"success": True, "data": student_json(StudentService.get_student(student_id))})
    except LedgerError as e:
        return ledger_error(e)


@student_bp.get("/<int:student_id>/borrows")
@admin_required
def student_borrows(student_id: int, identity):
    try:
        rows = ReportService.student_history(identity, student_id)
        return jsonify({"success": True, "data": [record_json(r, st) for r, st in rows]})
    except LedgerError as e:
        return ledger_error(e)


@student_bp.post("/")
@admin_required
def create_student(identity):
    data = request.get_json(silent=True) or {}
    try:
        s = StudentService.create_student(data)
        return jsonify({"success": True, "id": s.id, "data": student_json(s)}), 201
    except LedgerError as e:
        return ledger_error(e)


@student_bp.put("/<int:student_id>")
@admin_required
def update_student(student_id: int, identity):
    data = request.get_json(silent=True) or {}
    try:
        s = StudentService.update_student(student_id, data)
        return jsonify({"success": True, "data": student_json(s)})
    except LedgerError as e:
        return ledger_error(e)


@student_bp.delete("/<int:student_id>")
@admin_required
def delete_student(student_id: int, identity):
    try:
        StudentService.delete_student(student_id)
        return jsonify({"success": True})
    except LedgerError as e:
        return ledger_error(e)
