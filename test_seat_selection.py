#!/usr/bin/env python3
"""
Tests for the student seat page: local persistence, click rules and
booking/release messages.
"""

import tempfile
import unittest
from pathlib import Path
from unittest.mock import Mock

from academy.config import STUDENT_INFO_KEY
from academy.models.seat import Seat, SeatMap
from academy.models.student import MOCK_STUDENT
from academy.repositories import seats_repo
from academy.services.local_store import LocalStore
from academy.ui.seat_selection import (
    SeatSelectionController,
    can_release,
    check_seat_click,
    friendly_booking_error,
    grid_stats,
    release_message,
    seat_glyph,
)


def make_seat(seat_id, number, side="Right", taken=False, reserved=False, label=None, student=None, reason=None, row=1, col=1):
    return Seat.from_api({
        "_id": seat_id,
        "seatNumber": number,
        "seatLabel": label if label is not None else f"{side[0]}-{number}",
        "wing": side,
        "side": side,
        "position": {"row": row, "column": col},
        "isTaken": taken,
        "isReserved": reserved,
        "reservedReason": reason,
        "student": {"_id": student, "name": "Someone"} if student else None,
    })


STORED_STUDENT = {
    "_id": "stu-1",
    "name": "Ayesha Khan",
    "studentId": "STU-2025-014",
    "gender": "Female",
    "class": "11th Grade",
    "classId": "cls-9",
    "session": {"_id": "ses-1", "name": "2025-2026"},
    "feeStatus": "paid",
}


class TestSeatSelectionController(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.store = LocalStore(Path(self.tmp.name) / "storage.json")

    def tearDown(self):
        self.tmp.cleanup()

    def test_falls_back_to_mock_when_nothing_stored(self):
        ctrl = SeatSelectionController(self.store)
        info = ctrl.load()
        self.assertEqual(info.id, MOCK_STUDENT["_id"])
        self.assertIsNone(ctrl.booked_seat_label)
        self.assertEqual(ctrl.allowed_wing, "Right")

    def test_falls_back_to_mock_on_corrupt_value(self):
        self.store.set_item(STUDENT_INFO_KEY, "{not json")
        info = SeatSelectionController(self.store).load()
        self.assertEqual(info.name, MOCK_STUDENT["name"])

    def test_loads_stored_student_and_seat(self):
        self.store.set_json(STUDENT_INFO_KEY, dict(STORED_STUDENT, seatNumber="L-3"))
        ctrl = SeatSelectionController(self.store)
        info = ctrl.load()
        self.assertEqual(info.name, "Ayesha Khan")
        self.assertEqual(info.grid_class_id, "cls-9")
        self.assertEqual(ctrl.booked_seat_label, "L-3")
        self.assertEqual(ctrl.allowed_wing, "Left")

    def test_booking_persists_label(self):
        self.store.set_json(STUDENT_INFO_KEY, STORED_STUDENT)
        ctrl = SeatSelectionController(self.store)
        ctrl.load()

        label = ctrl.on_seat_booked(make_seat("seat-5", 5, side="Left", label="L-5"))

        self.assertEqual(label, "L-5")
        self.assertEqual(ctrl.booked_seat_label, "L-5")
        stored = self.store.get_json(STUDENT_INFO_KEY)
        self.assertEqual(stored["seatNumber"], "L-5")
        self.assertEqual(stored["name"], "Ayesha Khan")
        self.assertEqual(stored["session"], {"_id": "ses-1", "name": "2025-2026"})
        self.assertEqual(stored["feeStatus"], "paid")

    def test_booking_without_label_uses_seat_number(self):
        ctrl = SeatSelectionController(self.store)
        ctrl.load()
        ctrl.on_seat_booked(make_seat("seat-7", 7, label=""))
        self.assertEqual(self.store.get_json(STUDENT_INFO_KEY)["seatNumber"], "Seat-7")

    def test_release_clears_seat(self):
        self.store.set_json(STUDENT_INFO_KEY, dict(STORED_STUDENT, seatNumber="L-3"))
        ctrl = SeatSelectionController(self.store)
        ctrl.load()

        ctrl.on_seat_released()

        self.assertIsNone(ctrl.booked_seat_label)
        stored = self.store.get_json(STUDENT_INFO_KEY)
        self.assertNotIn("seatNumber", stored)
        self.assertEqual(stored["studentId"], "STU-2025-014")

    def test_reload_after_booking_sees_new_label(self):
        ctrl = SeatSelectionController(self.store)
        ctrl.load()
        ctrl.on_seat_booked(make_seat("seat-2", 2, label="R-2"))
        again = SeatSelectionController(self.store)
        again.load()
        self.assertEqual(again.booked_seat_label, "R-2")


class TestSeatClickRules(unittest.TestCase):

    def test_must_release_before_picking_another(self):
        mine = make_seat("a", 1, taken=True, student="me")
        other = make_seat("b", 2)
        res = check_seat_click(other, mine, "Right")
        self.assertFalse(res.ok)
        self.assertEqual(res.level, "warning")
        self.assertIn("release your current seat", res.message)

    def test_own_seat_is_informational(self):
        mine = make_seat("a", 1, taken=True, student="me")
        res = check_seat_click(mine, mine, "Right")
        self.assertFalse(res.ok)
        self.assertEqual(res.message, "This is your current seat")

    def test_taken_reserved_and_wrong_wing(self):
        self.assertEqual(check_seat_click(make_seat("a", 1, taken=True, student="x"), None, "Right").message,
                         "This seat is already taken")
        self.assertEqual(check_seat_click(make_seat("b", 2, reserved=True, reason="Staff"), None, "Right").message,
                         "Seat reserved: Staff")
        self.assertEqual(check_seat_click(make_seat("c", 3, reserved=True), None, "Right").message,
                         "Seat reserved")
        res = check_seat_click(make_seat("d", 4, side="Left"), None, "Right")
        self.assertFalse(res.ok)
        self.assertIn("Boys Wing (Right)", res.message)

    def test_free_seat_on_allowed_side(self):
        self.assertTrue(check_seat_click(make_seat("e", 5, side="Left"), None, "Left").ok)

    def test_wing_or_side_match_is_enough(self):
        seat = Seat.from_api({"_id": "f", "seatNumber": 6, "wing": "Left", "side": "Right"})
        self.assertTrue(check_seat_click(seat, None, "Left").ok)


class TestSeatMessages(unittest.TestCase):

    def test_friendly_booking_error(self):
        self.assertEqual(friendly_booking_error("Seat already taken or reserved", 409),
                         "Seat was just taken by someone else!")
        self.assertEqual(friendly_booking_error("Access Denied: Male students...", 403),
                         "You cannot book this seat (gender restriction)")
        self.assertIn("release your current seat", friendly_booking_error("x", 400))
        self.assertEqual(friendly_booking_error("Server exploded", 500), "Server exploded")
        self.assertEqual(friendly_booking_error("", None), "Booking failed")

    def test_release_message(self):
        self.assertEqual(release_message({"remaining_changes": 1}), "Seat released! 1 change remaining")
        self.assertEqual(release_message({"change_count": 0}), "Seat released! 2 changes remaining")
        self.assertEqual(release_message({"remaining_changes": 0}), "Seat released! No more changes allowed")

    def test_change_limit(self):
        self.assertTrue(can_release(0))
        self.assertTrue(can_release(1))
        self.assertFalse(can_release(2))


class TestSeatMap(unittest.TestCase):

    def setUp(self):
        self.body = {
            "seats": [
                {"_id": "1", "seatNumber": 1, "seatLabel": "R-1", "side": "Right", "wing": "Right",
                 "position": {"row": 1, "column": 2}, "isTaken": True, "student": {"_id": "me"}},
                {"_id": "2", "seatNumber": 2, "seatLabel": "R-2", "side": "Right", "wing": "Right",
                 "position": {"row": 1, "column": 1}},
                {"_id": "3", "seatNumber": 3, "seatLabel": "R-3", "side": "Right", "wing": "Right",
                 "position": {"row": 2, "column": 1}, "isReserved": True},
                {"_id": "4", "seatNumber": 4, "seatLabel": "L-4", "side": "Left", "wing": "Left",
                 "position": {"row": 2, "column": 2}},
            ],
            "allowedSide": "Right",
            "studentGender": "Male",
            "seatChangeCount": 1,
        }

    def test_from_api(self):
        m = SeatMap.from_api(self.body)
        self.assertEqual(m.allowed_side, "Right")
        self.assertEqual(m.seat_change_count, 1)
        self.assertEqual(m.booked_by("me").id, "1")
        self.assertIsNone(m.booked_by("someone-else"))

    def test_rows_are_ordered(self):
        rows = SeatMap.from_api(self.body).rows()
        self.assertEqual([s.id for s in rows[1]], ["2", "1"])
        self.assertEqual([s.id for s in rows[2]], ["3", "4"])

    def test_stats_count_allowed_side_only(self):
        self.assertEqual(grid_stats(SeatMap.from_api(self.body)), {"available": 1, "taken": 1})

    def test_glyphs(self):
        m = SeatMap.from_api(self.body)
        by_id = {s.id: s for s in m.seats}
        self.assertEqual(seat_glyph(by_id["1"], "me", "Right"), "🟦")
        self.assertEqual(seat_glyph(by_id["2"], "me", "Right"), "🟩")
        self.assertEqual(seat_glyph(by_id["3"], "me", "Right"), "⬛")
        self.assertEqual(seat_glyph(by_id["4"], "me", "Right"), "⬜")


class TestSeatsRepo(unittest.TestCase):

    def test_book_seat_posts_seat_id(self):
        client = Mock()
        client.post.return_value = {
            "message": "Seat booked successfully",
            "seat": {"_id": "s9", "seatNumber": 9, "seatLabel": "R-9"},
            "seatLabel": "R-9",
        }
        result = seats_repo.book_seat("s9", client=client)
        client.post.assert_called_once_with("/seats/book", json={"seatId": "s9"}, fallback="Failed to book seat")
        self.assertEqual(result["seat_label"], "R-9")
        self.assertEqual(result["seat"].id, "s9")

    def test_release_seat_reports_changes(self):
        client = Mock()
        client.post.return_value = {"message": "ok", "seat": {"_id": "s9"}, "changeCount": 1, "remainingChanges": 1}
        result = seats_repo.release_seat("s9", client=client)
        self.assertEqual(result["remaining_changes"], 1)

    def test_get_seats_path(self):
        client = Mock()
        client.get.return_value = {"seats": [], "allowedSide": "Left"}
        m = seats_repo.get_seats("cls", "ses", client=client)
        client.get.assert_called_once_with("/seats/cls/ses", fallback="Failed to fetch seats")
        self.assertEqual(m.allowed_side, "Left")


if __name__ == "__main__":
    unittest.main()
