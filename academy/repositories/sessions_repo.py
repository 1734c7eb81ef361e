# academy/repositories/sessions_repo.py
import logging
from typing import Optional

import pandas as pd

from academy.config import SESSIONS_HEADERS
from academy.models.session import AcademicSession
from academy.services.api_client import get_api_client, unwrap
from academy.utils.session_progress import format_date

logger = logging.getLogger(__name__)


def list_sessions(status: Optional[str] = None, client=None) -> list:
    client = client or get_api_client()
    params = {"status": status} if status and status != "all" else None
    body = client.get("/sessions", params=params, fallback="Failed to fetch sessions")
    return [AcademicSession.from_api(d) for d in unwrap(body, [])]


def create_session(payload: dict, client=None) -> AcademicSession:
    client = client or get_api_client()
    body = client.post("/sessions", json=payload, fallback="Failed to create session")
    logger.info("Created session %s", payload.get("sessionName"))
    return AcademicSession.from_api(unwrap(body, {}))


def update_session(session_id: str, payload: dict, client=None) -> AcademicSession:
    client = client or get_api_client()
    body = client.put(f"/sessions/{session_id}", json=payload, fallback="Failed to update session")
    logger.info("Updated session %s", session_id)
    return AcademicSession.from_api(unwrap(body, {}))


def delete_session(session_id: str, client=None) -> None:
    client = client or get_api_client()
    client.delete(f"/sessions/{session_id}", fallback="Failed to delete session")
    logger.info("Deleted session %s", session_id)


def sessions_df(sessions: list, now=None) -> pd.DataFrame:
    rows = [
        {
            "session_id": s.session_id,
            "name": s.name,
            "start": format_date(s.start_date),
            "end": format_date(s.end_date),
            "status": s.style["label"],
            "duration_days": s.duration_days,
            "progress": s.progress(now),
            "days_left": s.days_remaining(now) if s.status == "active" else None,
        }
        for s in sessions
    ]
    return pd.DataFrame(rows) if rows else pd.DataFrame(columns=SESSIONS_HEADERS)
