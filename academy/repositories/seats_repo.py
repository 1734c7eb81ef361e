import logging
from typing import Optional

from academy.models.seat import Seat, SeatMap
from academy.services.api_client import get_api_client

logger = logging.getLogger(__name__)

# Seat endpoints answer with bare objects rather than {data, message}


def get_seats(class_id: str, session_id: str, client=None) -> SeatMap:
    client = client or get_api_client()
    body = client.get(f"/seats/{class_id}/{session_id}", fallback="Failed to fetch seats")
    return SeatMap.from_api(body)


def book_seat(seat_id: str, client=None) -> dict:
    """Returns {"message", "seat": Seat, "seat_label"}."""
    client = client or get_api_client()
    body = client.post("/seats/book", json={"seatId": seat_id}, fallback="Failed to book seat")
    seat = Seat.from_api(body.get("seat") or {})
    logger.info("Booked seat %s", seat.display_label)
    return {
        "message": body.get("message", ""),
        "seat": seat,
        "seat_label": body.get("seatLabel") or seat.display_label,
    }


def release_seat(seat_id: str, client=None) -> dict:
    client = client or get_api_client()
    body = client.post("/seats/release", json={"seatId": seat_id}, fallback="Failed to release seat")
    logger.info("Released seat %s", seat_id)
    return {
        "message": body.get("message", ""),
        "seat": Seat.from_api(body.get("seat") or {}),
        "change_count": body.get("changeCount"),
        "remaining_changes": body.get("remainingChanges"),
    }


def get_admin_seats(class_id: str, session_id: str, client=None) -> dict:
    client = client or get_api_client()
    body = client.get(f"/seats/admin/{class_id}/{session_id}", fallback="Failed to fetch admin seats")
    return {
        "seats": [Seat.from_api(s) for s in body.get("seats") or []],
        "stats": body.get("stats") or {},
    }


def initialize_seats(class_id: str, session_id: str, client=None) -> int:
    client = client or get_api_client()
    body = client.post(
        "/seats/initialize",
        json={"classId": class_id, "sessionId": session_id},
        fallback="Failed to initialize seats",
    )
    count = int(body.get("count") or 0)
    logger.info("Initialized %d seats for class %s / session %s", count, class_id, session_id)
    return count


def vacate_seat(seat_id: str, reason: str, client=None) -> Seat:
    client = client or get_api_client()
    body = client.post(f"/seats/vacate/{seat_id}", json={"reason": reason}, fallback="Failed to vacate seat")
    logger.info("Vacated seat %s: %s", seat_id, reason)
    return Seat.from_api(body.get("seat") or {})


def toggle_reservation(seat_id: str, is_reserved: bool, reason: Optional[str], client=None) -> Seat:
    client = client or get_api_client()
    body = client.patch(
        f"/seats/reserve/{seat_id}",
        json={"isReserved": is_reserved, "reason": reason},
        fallback="Failed to toggle reservation",
    )
    return Seat.from_api(body.get("seat") or {})
