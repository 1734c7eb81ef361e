from dataclasses import dataclass
from typing import Optional


@dataclass
class Seat:
    id: str
    seat_number: int
    seat_label: str
    wing: str        # Left / Right
    side: str
    row: int
    column: int
    is_taken: bool
    is_reserved: bool
    reserved_reason: Optional[str]
    student_id: Optional[str]
    student_name: Optional[str]

    @property
    def display_label(self) -> str:
        return self.seat_label or f"Seat-{self.seat_number}"

    def on_side(self, allowed_side: str) -> bool:
        return self.side == allowed_side or self.wing == allowed_side

    def held_by(self, student_id: Optional[str]) -> bool:
        return bool(student_id) and self.is_taken and self.student_id == student_id

    @staticmethod
    def from_api(doc: dict) -> "Seat":
        student = doc.get("student")
        if isinstance(student, dict):
            student_id = student.get("_id")
            student_name = student.get("name") or student.get("studentName")
        else:
            student_id = student or None
            student_name = None

        position = doc.get("position") or {}
        try:
            number = int(doc.get("seatNumber") or 0)
        except (TypeError, ValueError):
            number = 0

        return Seat(
            id=str(doc.get("_id", "")),
            seat_number=number,
            seat_label=str(doc.get("seatLabel", "") or ""),
            wing=str(doc.get("wing", "") or ""),
            side=str(doc.get("side", "") or ""),
            row=int(position.get("row") or 0),
            column=int(position.get("column") or 0),
            is_taken=bool(doc.get("isTaken", False)),
            is_reserved=bool(doc.get("isReserved", False)),
            reserved_reason=doc.get("reservedReason") or None,
            student_id=str(student_id) if student_id else None,
            student_name=student_name,
        )


@dataclass
class SeatMap:
    seats: list
    allowed_side: str
    seat_change_count: int

    @staticmethod
    def from_api(body: dict) -> "SeatMap":
        return SeatMap(
            seats=[Seat.from_api(s) for s in body.get("seats") or []],
            allowed_side=str(body.get("allowedSide") or "Right"),
            seat_change_count=int(body.get("seatChangeCount") or 0),
        )

    def booked_by(self, student_id: Optional[str]) -> Optional[Seat]:
        for s in self.seats:
            if s.held_by(student_id):
                return s
        return None

    def rows(self) -> dict:
        """Seats grouped by row number, each row ordered by column."""
        out = {}
        for s in sorted(self.seats, key=lambda x: (x.row, x.column, x.seat_number)):
            out.setdefault(s.row, []).append(s)
        return out
