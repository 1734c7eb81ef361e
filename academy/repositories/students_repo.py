import logging
from typing import Optional

import pandas as pd

from academy.config import STUDENTS_HEADERS
from academy.models.student import StudentRow
from academy.services.api_client import get_api_client, unwrap

logger = logging.getLogger(__name__)


def list_students(client=None) -> list:
    client = client or get_api_client()
    body = client.get("/students", fallback="Failed to fetch students")
    return [StudentRow.from_api(d) for d in unwrap(body, [])]


def filter_students(students: list, search: str = "", class_id: Optional[str] = None) -> list:
    """In-memory filter on name / student id / father name, and class."""
    q = (search or "").strip().lower()
    out = []
    for s in students:
        if class_id and s.class_id != class_id:
            continue
        if q and not (q in s.name.lower() or q in s.student_id.lower() or q in s.father_name.lower()):
            continue
        out.append(s)
    return out


def load_students_df(students: list) -> pd.DataFrame:
    rows = [
        {
            "student_id": s.student_id,
            "name": s.name,
            "father_name": s.father_name,
            "class": s.class_name,
            "group": s.group,
            "gender": s.gender,
            "seat": s.seat_number,
            "total_fee": s.total_fee,
            "paid": s.paid_amount,
            "balance": s.balance,
        }
        for s in students
    ]
    return pd.DataFrame(rows) if rows else pd.DataFrame(columns=STUDENTS_HEADERS)


def register_student(payload: dict, client=None) -> dict:
    """POST a public/kiosk application. Returns the envelope's data."""
    client = client or get_api_client()
    body = client.post("/public/register", json=payload, fallback="Registration failed")
    logger.info("Registration submitted for %s", payload.get("studentName"))
    return unwrap(body, {})


def collect_fee(student_id: str, amount: float, month: str, client=None) -> dict:
    """Record a fee payment. Returns the envelope's data, which holds `feeRecord`."""
    client = client or get_api_client()
    body = client.post(
        f"/students/{student_id}/collect-fee",
        json={"amount": amount, "month": month},
        fallback="Failed to collect fee",
    )
    logger.info("Collected %s for %s from student %s", amount, month, student_id)
    return unwrap(body, {})
