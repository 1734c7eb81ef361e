from dataclasses import dataclass
from datetime import date
from typing import Optional

from academy.utils.amount_parser import try_parse_amount
from academy.utils.session_progress import now_utc


@dataclass
class PayoutForm:
    """Cash payout to a teacher. Bounded by the teacher's net payable."""
    amount: str = ""
    notes: str = ""
    pending: bool = False

    @property
    def value(self) -> Optional[float]:
        return try_parse_amount(self.amount)

    def validation_error(self, balance: float) -> Optional[str]:
        v = self.value
        if v is None:
            return "Enter an amount"
        if v <= 0:
            return "Amount must be greater than zero"
        if v > (balance or 0):
            return "Amount exceeds the payable balance"
        return None

    def can_submit(self, balance: float) -> bool:
        return not self.pending and self.validation_error(balance) is None

    def payload(self) -> dict:
        return {"amount": self.value, "notes": self.notes.strip()}


@dataclass
class CreditForm:
    """
    Manual credit: raises what the academy owes a teacher.
    `balance` is an optional ceiling; None means uncapped.
    """
    amount: str = ""
    description: str = ""
    pending: bool = False

    @property
    def value(self) -> Optional[float]:
        return try_parse_amount(self.amount)

    def validation_error(self, balance: Optional[float] = None) -> Optional[str]:
        v = self.value
        if v is None:
            return "Enter an amount"
        if v <= 0:
            return "Amount must be greater than zero"
        if balance is not None and v > balance:
            return "Amount exceeds the known balance"
        if not self.description.strip():
            return "A note is required"
        return None

    def can_submit(self, balance: Optional[float] = None) -> bool:
        return not self.pending and self.validation_error(balance) is None

    def payload(self) -> dict:
        return {"amount": self.value, "description": self.description.strip()}


def month_options(now=None, count: int = 12) -> list:
    """The current month and the ones after it, e.g. ["October 2026", "November 2026", ...]."""
    now = now or now_utc()
    year, month = now.year, now.month
    out = []
    for _ in range(count):
        out.append(date(year, month, 1).strftime("%B %Y"))
        month += 1
        if month > 12:
            year, month = year + 1, 1
    return out


@dataclass
class FeeCollectionForm:
    """
    Fee payment from a student for one month.
    `balance` is an optional ceiling, normally the student's unpaid fee.
    """
    amount: str = ""
    month: str = ""
    pending: bool = False

    @property
    def value(self) -> Optional[float]:
        return try_parse_amount(self.amount)

    def validation_error(self, balance: Optional[float] = None) -> Optional[str]:
        v = self.value
        if v is None:
            return "Enter an amount"
        if v <= 0:
            return "Please enter a valid fee amount greater than 0."
        if balance is not None and v > balance:
            return "Amount exceeds the remaining balance"
        if not self.month.strip():
            return "Please select a month for this fee collection."
        return None

    def can_submit(self, balance: Optional[float] = None) -> bool:
        return not self.pending and self.validation_error(balance) is None

    def payload(self) -> dict:
        return {"amount": self.value, "month": self.month.strip()}
