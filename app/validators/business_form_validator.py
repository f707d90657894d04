"""
app/validators/business_form_validator.py

Field rules for a business entered by hand, stricter than bulk upload rows.

Rules
-----
- name: at least 2 characters
- registration_number: SL-YYYY-XXXXXX
- address: at least 5 characters
- registration_date: not in the future
- email, phone (+232), website: checked only when given
- status: one of the directory statuses, blank means unverified
"""

from __future__ import annotations

import re
from collections.abc import Callable, Sequence
from datetime import date
from urllib.parse import urlsplit

from app.domain.business_record import BusinessRecord
from app.schemas.business import BusinessCreateRequest
from app.validators.business_row_validator import FieldError
from db.models.business import BusinessStatus

REGISTRATION_NUMBER_PATTERN = re.compile(r"^SL-\d{4}-\d{6}$")
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE_PATTERN = re.compile(r"^\+232\d{2}\d{3}\d{3,4}$")

MIN_NAME_LENGTH = 2
MIN_ADDRESS_LENGTH = 5


class BusinessFormError(ValueError):
    """
    Raised when a hand-entered business fails one or more field rules.
    """

    def __init__(self, errors: Sequence[FieldError]) -> None:
        self.errors = tuple(errors)
        super().__init__("; ".join(f"{error.column}: {error.message}" for error in self.errors))


class BusinessFormValidator:
    def __init__(self, *, today: Callable[[], date] = date.today) -> None:
        self._today = today

    def validate(self, payload: BusinessCreateRequest) -> BusinessRecord:
        """
        Return the record to insert or raise BusinessFormError listing every problem.
        """

        errors: list[FieldError] = []

        name = payload.name.strip()
        if len(name) < MIN_NAME_LENGTH:
            errors.append(FieldError("name", "Business name must be at least 2 characters", payload.name))

        registration_number = payload.registration_number.strip()
        if not REGISTRATION_NUMBER_PATTERN.match(registration_number):
            errors.append(
                FieldError(
                    "registration_number",
                    "Invalid registration number format (SL-YYYY-XXXXXX)",
                    payload.registration_number,
                )
            )

        address = payload.address.strip()
        if len(address) < MIN_ADDRESS_LENGTH:
            errors.append(FieldError("address", "Address must be at least 5 characters", payload.address))

        if payload.registration_date > self._today():
            errors.append(
                FieldError(
                    "registration_date",
                    "Registration date cannot be in the future",
                    payload.registration_date.isoformat(),
                )
            )

        status = (payload.status or "").strip().lower() or BusinessStatus.UNVERIFIED
        if status not in BusinessStatus.ALL:
            errors.append(FieldError("status", "Unsupported status", payload.status))

        email = _optional(payload.email)
        if email is not None and not EMAIL_PATTERN.match(email):
            errors.append(FieldError("email", "Invalid email address", email))

        phone = _optional(payload.phone)
        if phone is not None and not PHONE_PATTERN.match(re.sub(r"\s", "", phone)):
            errors.append(FieldError("phone", "Invalid phone number format (+232 XX XXX XXX)", phone))

        website = _optional(payload.website)
        if website is not None and not _is_url(website):
            errors.append(FieldError("website", "Invalid website URL", website))

        if errors:
            raise BusinessFormError(errors)

        return BusinessRecord(
            name=name,
            registration_number=registration_number,
            status=status,
            registration_date=payload.registration_date,
            address=address,
            phone=phone,
            email=email,
            website=website,
            sector=_optional(payload.sector),
            region=_optional(payload.region),
            authenticity_score=payload.authenticity_score,
        )


def _optional(value: str | None) -> str | None:
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None


def _is_url(value: str) -> bool:
    parts = urlsplit(value)
    return bool(parts.scheme) and bool(parts.netloc)
