from dataclasses import dataclass
from typing import Optional


# -----------------------------
# Data model
# -----------------------------
@dataclass
class ClassRecord:
    id: str
    class_id: str
    title: str
    group: str
    status: str
    session_id: Optional[str]
    session_name: str
    teacher_name: str
    seats_initialized: bool

    @property
    def has_seat_config(self) -> bool:
        return self.seats_initialized

    @staticmethod
    def from_api(doc: dict) -> "ClassRecord":
        session = doc.get("session")
        if isinstance(session, dict):
            session_id = session.get("_id")
            session_name = session.get("sessionName") or session.get("name") or ""
        else:
            session_id = session or None
            session_name = ""

        seat_config = doc.get("seatConfig") or {}
        return ClassRecord(
            id=str(doc.get("_id", "")),
            class_id=str(doc.get("classId", "") or ""),
            title=(doc.get("classTitle") or doc.get("className") or doc.get("name") or "").strip(),
            group=str(doc.get("group", "") or ""),
            status=str(doc.get("status", "") or ""),
            session_id=str(session_id) if session_id else None,
            session_name=session_name,
            teacher_name=str(doc.get("teacherName", "") or ""),
            seats_initialized=bool(seat_config.get("seatsInitialized", False)),
        )
