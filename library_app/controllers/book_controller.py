# library_app/controllers/book_controller.py

from flask import Blueprint, request, jsonify

from library_app.errors import LedgerError
from library_app.services.book_service import BookService
from library_app.utils.decorators import admin_required
from library_app.controllers.common import book_json, ledger_error

book_bp = Blueprint("books", __name__)


@book_bp.get("/")
@admin_required
def list_books(identity):
    q = request.args.get("q")
    category = request.args.get("category")
    if q or category:
        books = BookService.search(q, category)
    else:
        books = BookService.list_books()
    return jsonify({"success": True, "data": [book_json(b) for b in books]})


@book_bp.get("/categories")
@admin_required
def list_categories(identity):
    return jsonify({"success": True, "data": BookService.categories()})


@book_bp.get("/<int:book_id>")
@admin_required
def get_book(book_id: int, identity):
    try:
        return jsonify({"success": True, "data": book_json(BookService.get_book(book_id))})
    except LedgerError as e:
        return ledger_error(e)


@book_bp.post("/")
@admin_required
def create_book(identity):
    data = request.get_json(silent=True) or {}
    try:
        b = BookService.create_book(data)
        return jsonify({"success": True, "id": b.id, "data": book_json(b)}), 201
    except LedgerError as e:
        return ledger_error(e)


@book_bp.put("/<int:book_id>")
@admin_required
def update_book(book_id: int, identity):
    data = request.get_json(silent=True) or {}
    try:
        b = BookService.update_book(book_id, data)
        return jsonify({"success": True, "data": book_json(b)})
    except LedgerError as e:
        return ledger_error(e)


@book_bp.delete("/<int:book_id>")
@admin_required
def delete_book(book_id: int, identity):
    try:
        BookService.delete_book(book_id)
        return jsonify({"success": True})
    except LedgerError as e:
        return ledger_error(e)
