# library_app/services/overdue.py
from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum

ONE_DAY = timedelta(days=1)


class LoanState(str, Enum):
    ACTIVE = "active"
    OVERDUE = "overdue"
    RETURNED = "returned"


@dataclass(frozen=True)
class LoanStatus:
    state: LoanState
    days_late: int = 0

    def to_dict(self) -> dict:
        return {"status": self.state.value, "days_late": self.days_late}


def days_late(due_date: datetime, now: datetime) -> int:
    """Started days past ``due_date``, at least 1 once past due; 0 otherwise."""
    if now <= due_date:
        return 0
    return max(1, math.ceil((now - due_date) / ONE_DAY))


def classify(record, now: datetime | None = None) -> LoanStatus:
    """
    Pure function of a borrow record and the clock.

    - RETURNED: record closed, however late it was
    - OVERDUE:  open and now > due_date
    - ACTIVE:   open and now <= due_date
    """
    if record.is_returned:
        return LoanStatus(LoanState.RETURNED)

    now = now or datetime.utcnow()
    if now > record.due_date:
        return LoanStatus(LoanState.OVERDUE, days_late(record.due_date, now))
    return LoanStatus(LoanState.ACTIVE)


def is_overdue(record, now: datetime | None = None) -> bool:
    return classify(record, now).state is LoanState.OVERDUE
