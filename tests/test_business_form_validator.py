from __future__ import annotations

import unittest
from datetime import date

from app.schemas.business import BusinessCreateRequest
from app.validators.business_form_validator import BusinessFormError, BusinessFormValidator


def _request(**overrides: object) -> BusinessCreateRequest:
    values: dict[str, object] = {
        "name": "Acme Ltd",
        "registration_number": "SL-2020-000123",
        "registration_date": date(2020, 3, 15),
        "address": "12 Siaka Stevens St, Freetown",
    }
    values.update(overrides)
    return BusinessCreateRequest(**values)


class TestBusinessFormValidator(unittest.TestCase):
    def setUp(self) -> None:
        self.validator = BusinessFormValidator(today=lambda: date(2026, 10, 19))

    def test_minimal_entry_defaults_status(self) -> None:
        record = self.validator.validate(_request())

        self.assertEqual(record.status, "unverified")
        self.assertEqual(record.registration_number, "SL-2020-000123")
        self.assertIsNone(record.email)
        self.assertEqual(record.authenticity_score, 0)

    def test_full_entry_is_trimmed(self) -> None:
        record = self.validator.validate(
            _request(
                name="  Acme Ltd ",
                status="Verified",
                phone="+232 76 123 456",
                email="info@acme.sl",
                website="https://acme.sl",
                sector=" Mining ",
                region="",
                authenticity_score=80,
            )
        )

        self.assertEqual(record.name, "Acme Ltd")
        self.assertEqual(record.status, "verified")
        self.assertEqual(record.phone, "+232 76 123 456")
        self.assertEqual(record.sector, "Mining")
        self.assertIsNone(record.region)
        self.assertEqual(record.authenticity_score, 80)

    def test_registration_number_format(self) -> None:
        for value in ("SL-001", "sl-2020-000123", "SL-2020-12345", "XX-2020-000123"):
            with self.subTest(value=value):
                with self.assertRaises(BusinessFormError) as ctx:
                    self.validator.validate(_request(registration_number=value))
                self.assertEqual([e.column for e in ctx.exception.errors], ["registration_number"])

    def test_every_failed_rule_is_reported(self) -> None:
        with self.assertRaises(BusinessFormError) as ctx:
            self.validator.validate(
                _request(
                    name="A",
                    address="Bo",
                    registration_date=date(2030, 1, 1),
                    email="not-an-email",
                    phone="076123456",
                    website="acme.sl",
                    status="approved",
                )
            )

        columns = [error.column for error in ctx.exception.errors]
        self.assertEqual(
            columns,
            ["name", "address", "registration_date", "status", "email", "phone", "website"],
        )
        self.assertIn("Business name must be at least 2 characters", str(ctx.exception))

    def test_phone_accepts_compact_and_spaced_forms(self) -> None:
        for value in ("+23276123456", "+232 76 123 4567"):
            with self.subTest(value=value):
                record = self.validator.validate(_request(phone=value))
                self.assertEqual(record.phone, value)

    def test_registration_date_today_is_allowed(self) -> None:
        record = self.validator.validate(_request(registration_date=date(2026, 10, 19)))
        self.assertEqual(record.registration_date, date(2026, 10, 19))


if __name__ == "__main__":
    unittest.main()
