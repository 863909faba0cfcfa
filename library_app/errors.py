"""
Ledger error taxonomy.

Every error derives from ``ValueError`` so callers that only know about
``ValueError`` still catch them. ``status_code`` and ``code`` are used by the
HTTP layer to build the JSON response.
"""


class LedgerError(ValueError):
    status_code = 400
    code = "ledger_error"


class InvalidRequest(LedgerError):
    """Caller data violates a precondition. Not retried."""

    status_code = 400
    code = "invalid_request"


class NotFound(LedgerError):
    """A referenced book, student or record is absent."""

    status_code = 404
    code = "not_found"


class Conflict(LedgerError):
    """Another transaction changed the premise first. Safe to retry after a fresh read."""

    status_code = 409
    code = "conflict"


class AlreadyReturned(LedgerError):
    status_code = 409
    code = "already_returned"


class InventoryConsistencyError(LedgerError):
    """A return would push available copies above the total stock."""

    status_code = 500
    code = "inventory_inconsistent"
