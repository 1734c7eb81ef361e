import logging

import pandas as pd

from academy.config import PAYROLL_HEADERS
from academy.models.teacher import PayrollDashboard
from academy.services.api_client import get_api_client, unwrap

logger = logging.getLogger(__name__)


def load_dashboard(client=None) -> PayrollDashboard:
    client = client or get_api_client()
    body = client.get("/payroll/dashboard", fallback="Failed to fetch payroll data")
    return PayrollDashboard.from_api(unwrap(body, {}))


def pay_teacher(teacher_id: str, amount: float, notes: str, client=None) -> dict:
    """Cash payout. Returns the whole envelope (message + data.voucher)."""
    client = client or get_api_client()
    body = client.post(
        "/finance/teacher-payout",
        json={"teacherId": teacher_id, "amount": amount, "notes": notes},
        fallback="Failed to process payout",
    )
    logger.info("Payout of %.2f to teacher %s", amount, teacher_id)
    return body


def credit_teacher(teacher_id: str, amount: float, description: str, client=None) -> dict:
    client = client or get_api_client()
    body = client.post(
        "/payroll/credit",
        json={"teacherId": teacher_id, "amount": amount, "description": description},
        fallback="Failed to credit teacher",
    )
    logger.info("Manual credit of %.2f to teacher %s", amount, teacher_id)
    return body


def load_payroll_df(teachers: list) -> pd.DataFrame:
    rows = [
        {
            "name": t.name,
            "subject": t.subject or "-",
            "compensation": t.compensation_type,
            "total_earned": t.total_earned,
            "total_withdrawn": t.total_withdrawn,
            "net_payable": t.net_payable,
        }
        for t in teachers
    ]
    return pd.DataFrame(rows) if rows else pd.DataFrame(columns=PAYROLL_HEADERS)
