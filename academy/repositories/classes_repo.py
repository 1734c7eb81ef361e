import pandas as pd

from academy.config import CLASSES_HEADERS
from academy.models.classes import ClassRecord
from academy.services.api_client import get_api_client, unwrap


def list_classes(status=None, client=None) -> list:
    client = client or get_api_client()
    params = {"status": status} if status else None
    body = client.get("/classes", params=params, fallback="Failed to fetch classes")
    return [ClassRecord.from_api(d) for d in unwrap(body, [])]


def active_classes(classes: list) -> list:
    return [c for c in classes if c.status == "active"]


def class_options(classes: list) -> dict:
    """id -> display title, for selectboxes."""
    return {c.id: (f"{c.title} ({c.group})" if c.group else c.title) for c in classes}


def load_classes_df(classes: list) -> pd.DataFrame:
    rows = [
        {
            "class_id": c.class_id,
            "title": c.title,
            "group": c.group,
            "status": c.status,
            "session": c.session_name,
            "teacher": c.teacher_name,
            "seats": "Configured" if c.has_seat_config else "Not set",
        }
        for c in classes
    ]
    return pd.DataFrame(rows) if rows else pd.DataFrame(columns=CLASSES_HEADERS)
