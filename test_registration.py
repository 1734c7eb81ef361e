#!/usr/bin/env python3
"""
Tests for kiosk and public registration: required fields are checked
before any request is sent.
"""

import unittest
from dataclasses import replace
from unittest.mock import Mock

from academy.repositories import students_repo
from academy.services.api_client import ApiError
from academy.ui.registration import KioskForm, PublicForm, submit


def valid_kiosk():
    return KioskForm(
        student_name=" Bilal Ahmed ",
        father_name="Ahmed Raza",
        parent_cell="03001234567",
        gender="Male",
        session_id="ses-1",
        class_id="cls-1",
        group="Pre-Medical",
    )


def valid_public():
    return PublicForm(
        student_name="Hina",
        father_name="Tariq",
        parent_cell="03111234567",
        class_id="cls-2",
    )


class TestKioskValidation(unittest.TestCase):

    def test_each_required_field_blocks_submission(self):
        cases = [
            ({"student_name": ""}, "Please fill in all required fields"),
            ({"father_name": "   "}, "Please fill in all required fields"),
            ({"parent_cell": ""}, "Please fill in all required fields"),
            ({"class_id": ""}, "Please select a class"),
            ({"session_id": ""}, "Please select a session"),
            ({"group": ""}, "Please select a group"),
        ]
        for changes, message in cases:
            post = Mock()
            result = submit(replace(valid_kiosk(), **changes), post)
            self.assertFalse(result.ok, changes)
            self.assertEqual(result.error, message)
            post.assert_not_called()

    def test_valid_form_posts_once_with_trimmed_payload(self):
        post = Mock(return_value={"studentName": "Bilal Ahmed", "applicationId": "APP-77"})
        result = submit(valid_kiosk(), post)

        self.assertTrue(result.ok)
        self.assertEqual(result.submitted_name, "Bilal Ahmed")
        self.assertEqual(result.application_id, "APP-77")
        post.assert_called_once()
        payload = post.call_args[0][0]
        self.assertEqual(payload["studentName"], "Bilal Ahmed")
        self.assertEqual(payload["class"], "cls-1")
        self.assertEqual(payload["session"], "ses-1")
        self.assertEqual(payload["referralSource"], "")

    def test_name_falls_back_to_form_value(self):
        result = submit(valid_kiosk(), Mock(return_value={}))
        self.assertEqual(result.submitted_name, "Bilal Ahmed")


class TestPublicValidation(unittest.TestCase):

    def test_required_fields(self):
        for field in ("student_name", "father_name", "parent_cell", "class_id"):
            post = Mock()
            result = submit(replace(valid_public(), **{field: ""}), post)
            self.assertEqual(result.error, "Please fill all required fields")
            post.assert_not_called()

    def test_optional_fields_may_be_empty(self):
        post = Mock(return_value={"studentName": "Hina"})
        self.assertTrue(submit(valid_public(), post).ok)
        self.assertEqual(post.call_args[0][0]["email"], "")

    def test_backend_error_is_reported_inline(self):
        post = Mock(side_effect=ApiError("This student is already registered with this phone number", 409))
        result = submit(valid_public(), post)
        self.assertFalse(result.ok)
        self.assertEqual(result.error, "This student is already registered with this phone number")

    def test_resubmitting_posts_again(self):
        post = Mock(side_effect=[ApiError("Registration failed"), {"studentName": "Hina"}])
        form = valid_public()
        self.assertFalse(submit(form, post).ok)
        self.assertTrue(submit(form, post).ok)
        self.assertEqual(post.call_count, 2)


class TestRegisterStudent(unittest.TestCase):

    def test_posts_to_public_register(self):
        client = Mock()
        client.post.return_value = {"success": True, "data": {"applicationId": "APP-1"}}
        data = students_repo.register_student({"studentName": "Hina"}, client=client)
        client.post.assert_called_once_with(
            "/public/register", json={"studentName": "Hina"}, fallback="Registration failed"
        )
        self.assertEqual(data, {"applicationId": "APP-1"})


class TestStudentFilter(unittest.TestCase):

    def setUp(self):
        client = Mock()
        client.get.return_value = {"data": [
            {"_id": "1", "studentId": "STU-1", "studentName": "Ali Khan", "fatherName": "Imran",
             "classRef": {"_id": "c1"}, "totalFee": 10000, "paidAmount": 4000},
            {"_id": "2", "studentId": "STU-2", "studentName": "Zara", "fatherName": "Khalid",
             "classRef": "c2", "totalFee": 8000, "paidAmount": 9000},
        ]}
        self.students = students_repo.list_students(client=client)

    def test_search_by_name_id_or_father(self):
        self.assertEqual([s.id for s in students_repo.filter_students(self.students, "khan")], ["1"])
        self.assertEqual([s.id for s in students_repo.filter_students(self.students, "stu-2")], ["2"])
        self.assertEqual([s.id for s in students_repo.filter_students(self.students, "khalid")], ["2"])
        self.assertEqual(len(students_repo.filter_students(self.students, "")), 2)

    def test_filter_by_class(self):
        self.assertEqual([s.id for s in students_repo.filter_students(self.students, class_id="c2")], ["2"])

    def test_balance_not_negative(self):
        df = students_repo.load_students_df(self.students)
        self.assertEqual(list(df["balance"]), [6000.0, 0.0])


if __name__ == "__main__":
    unittest.main()
