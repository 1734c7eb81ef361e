import logging
from dataclasses import dataclass
from typing import Optional

from academy.config import MAX_SEAT_CHANGES, STUDENT_INFO_KEY, WING_BY_GENDER
from academy.models.seat import Seat, SeatMap
from academy.models.student import MOCK_STUDENT, StudentInfo
from academy.services.local_store import LocalStore

logger = logging.getLogger(__name__)


class SeatSelectionController:
    """
    View state for the student seat page: who the student is and which
    seat label they hold. Every change is written back to local storage.
    """

    def __init__(self, store: LocalStore):
        self.store = store
        self.student_info: Optional[StudentInfo] = None
        self.booked_seat_label: Optional[str] = None

    def load(self) -> StudentInfo:
        stored = self.store.get_json(STUDENT_INFO_KEY)
        if isinstance(stored, dict):
            self.student_info = StudentInfo.from_storage(stored)
        else:
            logger.info("No stored student profile, using demo profile")
            self.student_info = StudentInfo.from_storage(dict(MOCK_STUDENT))
        self.booked_seat_label = self.student_info.seat_number
        return self.student_info

    def on_seat_booked(self, seat: Seat) -> str:
        label = seat.display_label
        self.booked_seat_label = label
        if self.student_info is not None:
            self.student_info.seat_number = label
            self.store.set_json(STUDENT_INFO_KEY, self.student_info.to_storage())
        return label

    def on_seat_released(self) -> None:
        self.booked_seat_label = None
        if self.student_info is not None:
            self.student_info.seat_number = None
            self.store.set_json(STUDENT_INFO_KEY, self.student_info.to_storage())

    @property
    def allowed_wing(self) -> str:
        gender = self.student_info.gender if self.student_info else "Male"
        return WING_BY_GENDER.get(gender, "Right")


@dataclass
class ClickResult:
    ok: bool
    level: str = "info"     # info / warning / error
    message: str = ""


def _wing_name(side: str) -> str:
    return "Girls Wing (Left)" if side == "Left" else "Boys Wing (Right)"


def check_seat_click(seat: Seat, booked: Optional[Seat], allowed_side: str) -> ClickResult:
    """Decide whether a click on `seat` may open the booking confirmation."""
    if booked and booked.id != seat.id:
        return ClickResult(False, "warning", "Please release your current seat before selecting a new one")
    if booked and booked.id == seat.id:
        return ClickResult(False, "info", "This is your current seat")
    if seat.is_taken:
        return ClickResult(False, "error", "This seat is already taken")
    if seat.is_reserved:
        reason = f": {seat.reserved_reason}" if seat.reserved_reason else ""
        return ClickResult(False, "error", f"Seat reserved{reason}")
    if not seat.on_side(allowed_side):
        seat_wing = "Girls" if seat.side == "Left" else "Boys"
        return ClickResult(
            False,
            "error",
            f"This seat is in the {seat_wing} Wing. You can only select seats in the {_wing_name(allowed_side)}.",
        )
    return ClickResult(True)


def friendly_booking_error(message: str, status_code: Optional[int] = None) -> str:
    msg = message or ""
    if "release your current seat" in msg or status_code == 400:
        return "Please release your current seat first before selecting a new one"
    if "already taken" in msg or status_code == 409:
        return "Seat was just taken by someone else!"
    if "Access Denied" in msg or status_code == 403:
        return "You cannot book this seat (gender restriction)"
    if "already selected" in msg:
        return "You already have a seat assigned"
    return msg or "Booking failed"


def remaining_changes(change_count: int, max_changes: int = MAX_SEAT_CHANGES) -> int:
    return max(0, max_changes - (change_count or 0))


def release_message(response: dict, max_changes: int = MAX_SEAT_CHANGES) -> str:
    remaining = response.get("remaining_changes")
    if remaining is None:
        remaining = max_changes - (response.get("change_count") or 0)
    if remaining > 0:
        return f"Seat released! {remaining} change{'' if remaining == 1 else 's'} remaining"
    return "Seat released! No more changes allowed"


def can_release(seat_change_count: int, max_changes: int = MAX_SEAT_CHANGES) -> bool:
    return seat_change_count < max_changes


def grid_stats(seat_map: SeatMap) -> dict:
    side = seat_map.allowed_side
    available = sum(1 for s in seat_map.seats if not s.is_taken and not s.is_reserved and s.on_side(side))
    taken = sum(1 for s in seat_map.seats if s.is_taken and s.on_side(side))
    return {"available": available, "taken": taken}


def seat_glyph(seat: Seat, student_id: Optional[str], allowed_side: str) -> str:
    """One-character state for the text seat grid."""
    if seat.held_by(student_id):
        return "🟦"
    if seat.is_reserved:
        return "⬛"
    if seat.is_taken:
        return "🟥"
    if seat.on_side(allowed_side):
        return "🟩"
    return "⬜"


def seat_layout_status(class_record) -> str:
    if class_record is not None and class_record.has_seat_config:
        return "Initialized"
    return "Not Initialized"


def seat_admin_action(class_record) -> Optional[str]:
    """
    What the admin can do for the selected class: "load" its seat grid once
    a layout exists, otherwise "initialize" one. None when nothing is selected.
    """
    if class_record is None:
        return None
    return "load" if class_record.has_seat_config else "initialize"
