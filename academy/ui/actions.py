"""
One function per user action that changes backend state.

Each sends a single request, invalidates the cached queries the change
affects, and returns an ActionResult for the view to toast. Views own the
widgets and the rerun; nothing here touches Streamlit.
"""
from dataclasses import dataclass
from typing import Any, Optional

from academy.models.session import session_payload
from academy.models.teacher import PaymentVoucher
from academy.repositories.payroll_repo import credit_teacher, pay_teacher
from academy.repositories.seats_repo import (
    book_seat,
    initialize_seats,
    release_seat,
    toggle_reservation,
    vacate_seat,
)
from academy.repositories.sessions_repo import create_session, delete_session, update_session
from academy.repositories.students_repo import collect_fee, register_student
from academy.services.api_client import ApiError
from academy.ui.registration import SubmitResult, submit
from academy.ui.seat_selection import SeatSelectionController, friendly_booking_error, release_message
from academy.ui.state import (
    QK_ADMIN_SEATS,
    QK_CLASSES,
    QK_PAYROLL,
    QK_SEATS,
    QK_SESSIONS,
    QK_STUDENTS,
    QueryCache,
)


@dataclass
class ActionResult:
    ok: bool
    message: str = ""
    data: Any = None


def missing_session_fields(name: str, start, end) -> bool:
    return not (name or "").strip() or start is None or end is None


# -----------------------------
# Sessions
# -----------------------------
def save_new_session(cache: QueryCache, name: str, description: str, start, end) -> ActionResult:
    if missing_session_fields(name, start, end):
        return ActionResult(False, "Missing required fields")
    try:
        created = create_session(session_payload(name, description, start, end))
    except ApiError as e:
        return ActionResult(False, f"Failed to create session: {e.message}")
    cache.invalidate(QK_SESSIONS)
    return ActionResult(True, f"{created.name or name.strip()} has been created successfully.", created)


def save_session_changes(cache: QueryCache, session_id: str, name: str, description: str, start, end) -> ActionResult:
    if missing_session_fields(name, start, end):
        return ActionResult(False, "Missing required fields")
    try:
        updated = update_session(session_id, session_payload(name, description, start, end))
    except ApiError as e:
        return ActionResult(False, f"Failed to update session: {e.message}")
    cache.invalidate(QK_SESSIONS)
    return ActionResult(True, f"{updated.name or name.strip()} has been updated successfully.", updated)


def remove_session(cache: QueryCache, session_id: str) -> ActionResult:
    try:
        delete_session(session_id)
    except ApiError as e:
        return ActionResult(False, f"Failed to delete session: {e.message}")
    cache.invalidate(QK_SESSIONS)
    return ActionResult(True, "Session has been removed.")


# -----------------------------
# Payroll and fees
# -----------------------------
def pay_out(cache: QueryCache, teacher, form) -> ActionResult:
    """Cash payout to `teacher`. On success `data` is the PaymentVoucher, or None."""
    error = form.validation_error(teacher.net_payable)
    if error:
        return ActionResult(False, error)
    payload = form.payload()
    try:
        body = pay_teacher(teacher.id, payload["amount"], payload["notes"])
    except ApiError as e:
        return ActionResult(False, f"Payout Failed: {e.message}")
    cache.invalidate(QK_PAYROLL)
    voucher = PaymentVoucher.from_payout_response(body.get("data") or {}, teacher.compensation_type)
    return ActionResult(True, body.get("message") or "Payout Processed", voucher)


def add_credit(cache: QueryCache, teacher, form) -> ActionResult:
    error = form.validation_error()
    if error:
        return ActionResult(False, error)
    payload = form.payload()
    try:
        body = credit_teacher(teacher.id, payload["amount"], payload["description"])
    except ApiError as e:
        return ActionResult(False, f"Credit Failed: {e.message}")
    cache.invalidate(QK_PAYROLL)
    return ActionResult(True, body.get("message") or "Credit Added")


def take_fee(cache: QueryCache, student, form) -> ActionResult:
    """Fee payment from `student`. On success `data` is the backend's fee record."""
    error = form.validation_error(student.fee_ceiling)
    if error:
        return ActionResult(False, error)
    payload = form.payload()
    try:
        data = collect_fee(student.id, payload["amount"], payload["month"])
    except ApiError as e:
        return ActionResult(False, f"Fee Collection Failed: {e.message}")
    cache.invalidate(QK_STUDENTS)
    record = data.get("feeRecord") or {"amount": payload["amount"], "month": payload["month"]}
    return ActionResult(True, "Fee Collected!", record)


# -----------------------------
# Registration
# -----------------------------
def register(cache: QueryCache, form) -> SubmitResult:
    result = submit(form, register_student)
    if result.ok:
        cache.invalidate(QK_STUDENTS)
    return result


# -----------------------------
# Seats
# -----------------------------
def book(cache: QueryCache, ctrl: SeatSelectionController, seat_id: str) -> ActionResult:
    try:
        result = book_seat(seat_id)
    except ApiError as e:
        # the grid is stale whenever a booking is refused
        cache.invalidate(QK_SEATS)
        return ActionResult(False, friendly_booking_error(e.message, e.status_code))
    label = ctrl.on_seat_booked(result["seat"])
    cache.invalidate(QK_SEATS)
    return ActionResult(True, f"Seat {label} booked!", label)


def release(cache: QueryCache, ctrl: SeatSelectionController, seat_id: str) -> ActionResult:
    try:
        result = release_seat(seat_id)
    except ApiError as e:
        return ActionResult(False, e.message or "Failed to release seat")
    ctrl.on_seat_released()
    cache.invalidate(QK_SEATS)
    return ActionResult(True, release_message(result))


def start_seat_layout(cache: QueryCache, class_id: str, session_id: str) -> ActionResult:
    if not (class_id and session_id):
        return ActionResult(False, "Please select both a class and a session")
    try:
        count = initialize_seats(class_id, session_id)
    except ApiError as e:
        return ActionResult(False, f"Initialization failed: {e.message}")
    cache.invalidate(QK_CLASSES)
    cache.invalidate(QK_ADMIN_SEATS + (class_id, session_id))
    return ActionResult(True, f"{count} seats initialized successfully!", count)


def vacate(cache: QueryCache, seat_id: str, reason: str) -> ActionResult:
    if not (reason or "").strip():
        return ActionResult(False, "A reason is required to vacate a seat")
    try:
        vacate_seat(seat_id, reason.strip())
    except ApiError as e:
        return ActionResult(False, e.message)
    cache.invalidate(QK_ADMIN_SEATS)
    cache.invalidate(QK_SEATS)
    return ActionResult(True, "Seat vacated successfully")


def set_reservation(cache: QueryCache, seat_id: str, reserved: bool, reason: Optional[str]) -> ActionResult:
    try:
        toggle_reservation(seat_id, reserved, (reason or "").strip() or None)
    except ApiError as e:
        return ActionResult(False, e.message)
    cache.invalidate(QK_ADMIN_SEATS)
    cache.invalidate(QK_SEATS)
    return ActionResult(True, "Seat reserved" if reserved else "Reservation removed")
