from dataclasses import dataclass, field
from typing import Optional


@dataclass
class StudentInfo:
    """
    The signed-in student as kept in on-device storage.
    Field names on the wire are camelCase; `to_storage` writes them back the
    same way so other clients can read the stored object.
    """
    id: str
    name: str
    student_id: str
    gender: str
    class_name: str
    class_id: Optional[str] = None
    section: Optional[str] = None
    seat_number: Optional[str] = None
    session_id: Optional[str] = None
    session_name: Optional[str] = None
    extra: dict = field(default_factory=dict)

    _KNOWN = ("_id", "name", "studentId", "gender", "class", "classId", "section", "seatNumber", "session")

    @staticmethod
    def from_storage(doc: dict) -> "StudentInfo":
        session = doc.get("session") or {}
        if not isinstance(session, dict):
            session = {"_id": session}
        return StudentInfo(
            id=str(doc.get("_id", "")),
            name=str(doc.get("name", "") or ""),
            student_id=str(doc.get("studentId", "") or ""),
            gender=str(doc.get("gender", "Male") or "Male"),
            class_name=str(doc.get("class", "") or ""),
            class_id=doc.get("classId") or None,
            section=doc.get("section") or None,
            seat_number=doc.get("seatNumber") or None,
            session_id=session.get("_id") or None,
            session_name=session.get("name") or None,
            extra={k: v for k, v in doc.items() if k not in StudentInfo._KNOWN},
        )

    def to_storage(self) -> dict:
        doc = dict(self.extra)
        doc.update({
            "_id": self.id,
            "name": self.name,
            "studentId": self.student_id,
            "gender": self.gender,
            "class": self.class_name,
        })
        if self.class_id:
            doc["classId"] = self.class_id
        if self.section:
            doc["section"] = self.section
        if self.seat_number:
            doc["seatNumber"] = self.seat_number
        if self.session_id:
            doc["session"] = {"_id": self.session_id, "name": self.session_name or ""}
        return doc

    @property
    def grid_class_id(self) -> str:
        return self.class_id or self.class_name


@dataclass
class StudentRow:
    id: str
    student_id: str
    name: str
    father_name: str
    class_name: str
    class_id: Optional[str]
    group: str
    gender: str
    seat_number: str
    total_fee: float
    paid_amount: float

    @property
    def balance(self) -> float:
        return max(0.0, self.total_fee - self.paid_amount)

    @property
    def fee_ceiling(self) -> Optional[float]:
        """Most a single collection may take; None when no total fee is set."""
        return self.balance if self.total_fee > 0 else None

    @staticmethod
    def from_api(doc: dict) -> "StudentRow":
        class_ref = doc.get("classRef")
        class_id = class_ref.get("_id") if isinstance(class_ref, dict) else class_ref

        def _num(v) -> float:
            try:
                return float(v or 0)
            except (TypeError, ValueError):
                return 0.0

        return StudentRow(
            id=str(doc.get("_id", "")),
            student_id=str(doc.get("studentId", "") or ""),
            name=str(doc.get("studentName", "") or ""),
            father_name=str(doc.get("fatherName", "") or ""),
            class_name=str(doc.get("class", "") or ""),
            class_id=str(class_id) if class_id else None,
            group=str(doc.get("group", "") or ""),
            gender=str(doc.get("gender", "") or ""),
            seat_number=str(doc.get("seatNumber", "") or ""),
            total_fee=_num(doc.get("totalFee")),
            paid_amount=_num(doc.get("paidAmount")),
        )


# Demo profile shown when nothing is stored on this device
MOCK_STUDENT = {
    "_id": "675e55fc5aa09e3a5c51adef",
    "name": "Muhammad Muzammil",
    "studentId": "STU-2024-001",
    "gender": "Male",
    "class": "10th Grade",
    "session": {"_id": "675e3bb75aa09e3a5c51adb3", "name": "2024-2025"},
}
