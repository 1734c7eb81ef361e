from dataclasses import dataclass
from typing import Optional


def _num(v) -> float:
    try:
        return float(v or 0)
    except (TypeError, ValueError):
        return 0.0


@dataclass
class TeacherBalance:
    """One row of the payroll dashboard; balances are computed server-side."""
    id: str
    name: str
    subject: str
    compensation_type: str
    total_earned: float
    total_withdrawn: float
    net_payable: float

    @staticmethod
    def from_api(doc: dict) -> "TeacherBalance":
        compensation = doc.get("compensation") or {}
        return TeacherBalance(
            id=str(doc.get("_id", "")),
            name=str(doc.get("name", "") or ""),
            subject=str(doc.get("subject", "") or ""),
            compensation_type=str(compensation.get("type") or "percentage"),
            total_earned=_num(doc.get("totalEarned")),
            total_withdrawn=_num(doc.get("totalWithdrawn")),
            net_payable=_num(doc.get("netPayable")),
        )

    def matches(self, query: str) -> bool:
        q = (query or "").strip().lower()
        if not q:
            return True
        return q in self.name.lower() or q in self.subject.lower()


@dataclass
class PayrollDashboard:
    active_session_name: Optional[str]
    total_paid_session: float
    total_teacher_liability: float
    teachers: list

    @property
    def teachers_with_payable(self) -> int:
        return sum(1 for t in self.teachers if t.net_payable > 0)

    @staticmethod
    def from_api(data: dict) -> "PayrollDashboard":
        data = data or {}
        session = data.get("activeSession") or {}
        return PayrollDashboard(
            active_session_name=session.get("sessionName") if isinstance(session, dict) else None,
            total_paid_session=_num(data.get("totalPaidSession")),
            total_teacher_liability=_num(data.get("totalTeacherLiability")),
            teachers=[TeacherBalance.from_api(t) for t in data.get("teachersWithBalances") or []],
        )


@dataclass
class PaymentVoucher:
    voucher_id: str
    teacher_name: str
    subject: str
    amount_paid: float
    remaining_balance: float
    payment_date: str
    description: str
    session_name: str
    compensation_type: str

    @staticmethod
    def from_payout_response(data: dict, compensation_type: str = "percentage") -> Optional["PaymentVoucher"]:
        """None when the backend did not return a voucher."""
        voucher = (data or {}).get("voucher")
        if not voucher:
            return None
        return PaymentVoucher(
            voucher_id=str(voucher.get("voucherId", "")),
            teacher_name=str(voucher.get("teacherName", "")),
            subject=str(voucher.get("subject", "") or ""),
            amount_paid=_num(voucher.get("amountPaid")),
            remaining_balance=_num(data.get("remainingBalance")),
            payment_date=str(voucher.get("paymentDate", "") or ""),
            description=voucher.get("notes") or "Teacher payout",
            session_name=voucher.get("sessionName") or "N/A",
            compensation_type=compensation_type or "percentage",
        )
