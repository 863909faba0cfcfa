from flask import Blueprint, request, jsonify

from library_app.errors import InvalidRequest, LedgerError
from library_app.services.ledger_service import LedgerService
from library_app.services.report_service import ReportService
from library_app.services.overdue import classify
from library_app.utils.decorators import admin_required
from library_app.controllers.common import ledger_error, parse_datetime, record_json
from library_app.repositories.borrow_repo import BorrowRepo

borrow_bp = Blueprint("borrow", __name__)


@borrow_bp.post("/")
@admin_required
def borrow_book(identity):
    data = request.get_json(silent=True) or {}
    try:
        if data.get("student_id") is None or data.get("book_id") is None:
            raise InvalidRequest("student_id ve book_id zorunlu")
        record_id = LedgerService.borrow(
            identity,
            data["student_id"],
            data["book_id"],
            borrow_date=parse_datetime(data.get("borrow_date"), "borrow_date"),
            due_date=parse_datetime(data.get("due_date"), "due_date"),
        )
        r = BorrowRepo.get(record_id)
        return jsonify({"success": True, "borrow_id": record_id, "data": record_json(r, classify(r))}), 201
    except LedgerError as e:
        return ledger_error(e)


@borrow_bp.post("/return/<int:record_id>")
@admin_required
def return_book(record_id, identity):
    try:
        r = LedgerService.return_book(identity, record_id)
        return jsonify({"success": True, "returned_at": r.return_date.isoformat(), "data": record_json(r, classify(r))})
    except LedgerError as e:
        return ledger_error(e)


@borrow_bp.get("/")
@admin_required
def list_records(identity):
    try:
        rows = ReportService.list_records(identity, request.args.get("status", "all"), request.args.get("q"))
        return jsonify({"success": True, "data": [record_json(r, st) for r, st in rows]})
    except LedgerError as e:
        return ledger_error(e)


@borrow_bp.get("/overdue")
@admin_required
def list_overdue(identity):
    rows = ReportService.list_overdue(identity)
    return jsonify({"success": True, "data": [record_json(r, st) for r, st in rows]})
