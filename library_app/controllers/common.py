from datetime import datetime, timezone

from flask import jsonify

from library_app.errors import InvalidRequest, LedgerError


def json_error(message, code=400, error=None):
    body = {"success": False, "message": message}
    if error:
        body["error"] = error
    return jsonify(body), code


def ledger_error(e: LedgerError):
    return json_error(str(e), e.status_code, e.code)


def parse_datetime(value, field: str):
    """ISO date or datetime string -> naive datetime; None stays None."""
    if value in (None, ""):
        return None
    try:
        parsed = datetime.fromisoformat(str(value))
    except ValueError:
        raise InvalidRequest(f"{field} ISO tarih olmalı (YYYY-MM-DD)") from None
    # stored datetimes are naive UTC
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def _dt(value):
    return value.isoformat() if value else None


def book_json(b):
    return {
        "id": b.id,
        "title": b.title,
        "author": b.author,
        "isbn": b.isbn,
        "category": b.category,
        "total_quantity": b.total_quantity,
        "available_quantity": b.available_quantity,
        "created_at": _dt(b.created_at),
        "updated_at": _dt(b.updated_at),
    }


def student_json(s):
    return {
        "id": s.id,
        "name": s.name,
        "roll_number": s.roll_number,
        "email": s.email,
        "course": s.course,
        "created_at": _dt(s.created_at),
        "updated_at": _dt(s.updated_at),
    }


def record_json(r, loan_status=None):
    data = {
        "id": r.id,
        "student_id": r.student_id,
        "student_name": r.student_name,
        "student_roll_number": r.student_roll_number,
        "book_id": r.book_id,
        "book_title": r.book_title,
        "book_author": r.book_author,
        "borrow_date": _dt(r.borrow_date),
        "due_date": _dt(r.due_date),
        "return_date": _dt(r.return_date),
        "is_returned": bool(r.is_returned),
    }
    if loan_status is not None:
        data.update(loan_status.to_dict())
    return data
