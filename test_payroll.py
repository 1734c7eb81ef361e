#!/usr/bin/env python3
"""
Tests for payout / credit dialog bounds, payroll models and vouchers.
"""

import unittest
from unittest.mock import Mock

from academy.models.teacher import PaymentVoucher, PayrollDashboard, TeacherBalance
from academy.repositories import payroll_repo
from academy.services.receipts import render_voucher_text, voucher_filename
from academy.ui.dialogs import CreditForm, PayoutForm
from academy.utils.amount_parser import format_money, parse_amount, try_parse_amount


class TestPayoutForm(unittest.TestCase):

    def test_disabled_for_non_positive_amounts(self):
        for amount in ("0", "-500", "0.0", "-0"):
            self.assertFalse(PayoutForm(amount=amount).can_submit(10000), amount)

    def test_disabled_for_empty_or_garbage(self):
        for amount in ("", "   ", "abc", "1000/0", "__import__('os')"):
            self.assertFalse(PayoutForm(amount=amount).can_submit(10000), amount)

    def test_disabled_when_exceeding_balance(self):
        self.assertFalse(PayoutForm(amount="10001").can_submit(10000))
        self.assertFalse(PayoutForm(amount="1").can_submit(0))

    def test_enabled_within_balance(self):
        self.assertTrue(PayoutForm(amount="10000").can_submit(10000))
        self.assertTrue(PayoutForm(amount="2,500").can_submit(10000))

    def test_disabled_while_pending(self):
        self.assertFalse(PayoutForm(amount="100", pending=True).can_submit(10000))

    def test_payload(self):
        self.assertEqual(PayoutForm(amount="14,000", notes=" cash ").payload(), {"amount": 14000.0, "notes": "cash"})


class TestCreditForm(unittest.TestCase):

    def test_requires_positive_amount_and_note(self):
        self.assertFalse(CreditForm(amount="0", description="Jan share").can_submit())
        self.assertFalse(CreditForm(amount="5000", description="   ").can_submit())
        self.assertTrue(CreditForm(amount="5000", description="Jan share").can_submit())

    def test_optional_balance_ceiling(self):
        form = CreditForm(amount="5000", description="Jan share")
        self.assertFalse(form.can_submit(balance=4000))
        self.assertTrue(form.can_submit(balance=5000))

    def test_validation_messages(self):
        self.assertEqual(CreditForm(amount="").validation_error(), "Enter an amount")
        self.assertEqual(CreditForm(amount="100").validation_error(), "A note is required")


class TestAmountParser(unittest.TestCase):

    def test_parse(self):
        self.assertEqual(parse_amount("14,000"), 14000.0)
        self.assertEqual(parse_amount("12000+2000"), 14000.0)
        self.assertEqual(parse_amount(250), 250.0)

    def test_rejects(self):
        for bad in (None, "", "abc", "2**10", "1/0", True):
            self.assertIsNone(try_parse_amount(bad), bad)

    def test_format_money(self):
        self.assertEqual(format_money(1234567), "PKR 1,234,567")
        self.assertEqual(format_money(None), "PKR 0")


class TestPayrollModels(unittest.TestCase):

    def setUp(self):
        self.data = {
            "activeSession": {"_id": "s1", "sessionName": "2025-2026"},
            "totalPaidSession": 50000,
            "totalTeacherLiability": 32000,
            "teachersWithBalances": [
                {"_id": "t1", "name": "Sir Ahmed", "subject": "Physics", "compensation": {"type": "fixed"},
                 "totalEarned": 40000, "totalWithdrawn": 8000, "netPayable": 32000},
                {"_id": "t2", "name": "Miss Sara", "subject": "Chemistry",
                 "totalEarned": 0, "totalWithdrawn": 0, "netPayable": 0},
            ],
        }

    def test_dashboard(self):
        d = PayrollDashboard.from_api(self.data)
        self.assertEqual(d.active_session_name, "2025-2026")
        self.assertEqual(d.teachers_with_payable, 1)
        self.assertEqual(d.teachers[1].compensation_type, "percentage")
        df = payroll_repo.load_payroll_df(d.teachers)
        self.assertEqual(list(df["net_payable"]), [32000.0, 0.0])

    def test_search(self):
        t = TeacherBalance.from_api(self.data["teachersWithBalances"][0])
        self.assertTrue(t.matches("ahmed"))
        self.assertTrue(t.matches("PHYS"))
        self.assertTrue(t.matches(""))
        self.assertFalse(t.matches("chem"))

    def test_pay_teacher_request(self):
        client = Mock()
        client.post.return_value = {"success": True, "message": "Payout recorded", "data": {}}
        payroll_repo.pay_teacher("t1", 5000.0, "cash", client=client)
        client.post.assert_called_once_with(
            "/finance/teacher-payout",
            json={"teacherId": "t1", "amount": 5000.0, "notes": "cash"},
            fallback="Failed to process payout",
        )

    def test_credit_teacher_request(self):
        client = Mock()
        client.post.return_value = {"success": True, "message": "Credit added"}
        payroll_repo.credit_teacher("t1", 1000.0, "Dec classes", client=client)
        args, kwargs = client.post.call_args
        self.assertEqual(args[0], "/payroll/credit")
        self.assertEqual(kwargs["json"]["description"], "Dec classes")


class TestVoucher(unittest.TestCase):

    def test_from_response(self):
        data = {
            "voucher": {
                "voucherId": "TP-001",
                "teacherName": "Sir Ahmed",
                "subject": "Physics",
                "amountPaid": 5000,
                "paymentDate": "2025-02-01T10:00:00.000Z",
            },
            "remainingBalance": 27000,
        }
        v = PaymentVoucher.from_payout_response(data, "fixed")
        self.assertEqual(v.voucher_id, "TP-001")
        self.assertEqual(v.description, "Teacher payout")
        self.assertEqual(v.session_name, "N/A")
        text = render_voucher_text(v)
        self.assertIn("PKR 5,000", text)
        self.assertIn("PKR 27,000", text)
        self.assertIn("Feb 1, 2025", text)
        self.assertEqual(voucher_filename(v), "voucher_TP-001.txt")

    def test_no_voucher(self):
        self.assertIsNone(PaymentVoucher.from_payout_response({}))


if __name__ == "__main__":
    unittest.main()
