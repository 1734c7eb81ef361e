from academy.config import CURRENCY
from academy.models.teacher import PaymentVoucher
from academy.utils.amount_parser import format_money
from academy.utils.session_progress import format_date


def render_voucher_text(v: PaymentVoucher) -> str:
    lines = [
        "TEACHER PAYMENT VOUCHER",
        "=" * 32,
        f"Voucher:      {v.voucher_id}",
        f"Date:         {format_date(v.payment_date)}",
        f"Session:      {v.session_name}",
        "",
        f"Teacher:      {v.teacher_name}",
        f"Subject:      {v.subject or '-'}",
        f"Compensation: {v.compensation_type}",
        "",
        f"Amount paid:  {format_money(v.amount_paid, CURRENCY)}",
        f"Remaining:    {format_money(v.remaining_balance, CURRENCY)}",
        f"Description:  {v.description}",
        "=" * 32,
        "Signature: ______________________",
    ]
    return "\n".join(lines) + "\n"


def voucher_filename(v: PaymentVoucher) -> str:
    return f"voucher_{v.voucher_id or 'payout'}.txt"
