from datetime import datetime, timedelta

import pytest

from library_app.errors import InvalidRequest
from library_app.services.ledger_service import LedgerService
from library_app.services.overdue import LoanState
from library_app.services.report_service import ReportService
from tests.helpers import BORROWED_AT, DUE_AT


def test_stats_empty_library(admin):
    assert ReportService.get_stats(admin).to_dict() == {
        "total_books": 0,
        "total_borrowed": 0,
        "total_returned": 0,
        "total_students": 0,
        "active_students": 0,
    }


def test_total_books_counts_copies_not_titles(admin, make_book):
    make_book(total=3)
    make_book(total=4)
    assert ReportService.get_stats(admin).total_books == 7


def test_active_students_counts_ever_borrowed(admin, make_book, make_student):
    book = make_book(total=2)
    borrower = make_student()
    make_student()

    LedgerService.borrow(admin, borrower.id, book.id, BORROWED_AT, DUE_AT)
    stats = ReportService.get_stats(admin)
    assert stats.active_students == 1
    assert stats.total_students == 2

    # still counted once everything is back, and only once for repeat borrowers
    record_id = LedgerService.borrow(admin, borrower.id, book.id, BORROWED_AT, DUE_AT)
    LedgerService.return_book(admin, record_id)
    stats = ReportService.get_stats(admin)
    assert stats.active_students == 1
    assert stats.total_borrowed == 1
    assert stats.total_returned == 1


@pytest.fixture
def ledger(admin, make_book, make_student):
    now = datetime(2024, 5, 1, 10, 0, 0)
    dune = make_book(title="Dune", author="Frank Herbert")
    emma = make_book(title="Emma", author="Jane Austen")
    ada = make_student(name="Ada Lovelace", roll_number="CS-001")
    alan = make_student(name="Alan Turing", roll_number="CS-002")

    overdue = LedgerService.borrow(admin, ada.id, dune.id, now - timedelta(days=20), now - timedelta(days=6))
    active = LedgerService.borrow(admin, alan.id, emma.id, now - timedelta(days=2), now + timedelta(days=12))
    returned = LedgerService.borrow(admin, ada.id, emma.id, now - timedelta(days=40), now - timedelta(days=26))
    LedgerService.return_book(admin, returned, now - timedelta(days=27))
    return {"now": now, "overdue": overdue, "active": active, "returned": returned, "ada": ada.id}


def test_list_records_filters(admin, ledger):
    now = ledger["now"]

    def ids(status, search=None):
        return [r.id for r, _ in ReportService.list_records(admin, status, search, now=now)]

    # newest borrow first
    assert ids("all") == [ledger["active"], ledger["overdue"], ledger["returned"]]
    assert ids("borrowed") == [ledger["active"], ledger["overdue"]]
    assert ids("overdue") == [ledger["overdue"]]
    assert ids("returned") == [ledger["returned"]]


def test_list_records_search_and_status(admin, ledger):
    rows = ReportService.list_records(admin, "all", "turing", now=ledger["now"])
    assert [r.id for r, _ in rows] == [ledger["active"]]
    assert rows[0][1].state is LoanState.ACTIVE

    rows = ReportService.list_records(admin, "all", "HERBERT", now=ledger["now"])
    assert rows[0][1].state is LoanState.OVERDUE
    assert rows[0][1].days_late == 6


def test_list_records_rejects_unknown_status(admin):
    with pytest.raises(InvalidRequest):
        ReportService.list_records(admin, "lost")


def test_list_overdue(admin, ledger):
    rows = ReportService.list_overdue(admin, now=ledger["now"])
    assert [r.id for r, _ in rows] == [ledger["overdue"]]


def test_student_history(admin, ledger):
    rows = ReportService.student_history(admin, ledger["ada"], now=ledger["now"])
    assert [r.id for r, _ in rows] == [ledger["overdue"], ledger["returned"]]
    assert [s.state for _, s in rows] == [LoanState.OVERDUE, LoanState.RETURNED]
