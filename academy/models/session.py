from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from academy.utils.session_progress import (
    calculate_days_remaining,
    display_progress,
    format_date,
    status_style,
    to_utc,
)


@dataclass
class AcademicSession:
    id: str
    session_id: str
    name: str
    description: str
    start_date: Optional[datetime]
    end_date: Optional[datetime]
    status: str              # computed by the backend
    duration_days: int

    @staticmethod
    def from_api(doc: dict) -> "AcademicSession":
        try:
            duration = int(doc.get("durationDays") or 0)
        except (TypeError, ValueError):
            duration = 0
        return AcademicSession(
            id=str(doc.get("_id", "")),
            session_id=str(doc.get("sessionId", "") or ""),
            name=str(doc.get("sessionName", "") or ""),
            description=str(doc.get("description", "") or ""),
            start_date=to_utc(doc.get("startDate")),
            end_date=to_utc(doc.get("endDate")),
            status=str(doc.get("status", "") or ""),
            duration_days=duration,
        )

    @property
    def style(self) -> dict:
        return status_style(self.status)

    def progress(self, now=None) -> int:
        return display_progress(self.status, self.start_date, self.end_date, now)

    def days_remaining(self, now=None) -> int:
        return calculate_days_remaining(self.end_date, now)

    def date_range(self) -> str:
        return f"{format_date(self.start_date)} — {format_date(self.end_date)}"


def session_payload(name: str, description: str, start: Optional[date], end: Optional[date]) -> dict:
    """Request body for create/update; dates as YYYY-MM-DD."""
    return {
        "sessionName": name.strip(),
        "description": (description or "").strip(),
        "startDate": start.isoformat() if start else "",
        "endDate": end.isoformat() if end else "",
    }
