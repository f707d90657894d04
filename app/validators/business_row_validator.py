"""
app/validators/business_row_validator.py

Decodes positional CSV cells into typed business records.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Sequence

from app.domain.business_record import CSV_COLUMNS, BusinessRecord
from db.models.business import BusinessStatus

DATE_FORMATS: tuple[str, ...] = (
    "%Y-%m-%d",
    "%Y/%m/%d",
    "%d/%m/%Y",
    "%m/%d/%Y",
)

ALLOWED_STATUSES = set(BusinessStatus.ALL)

# Leading integer, the way the registry export tools have always read scores.
_LEADING_INT = re.compile(r"^[+-]?\d+")

# authenticity_score is a PostgreSQL INTEGER column.
SCORE_MIN = -(2**31)
SCORE_MAX = 2**31 - 1
_SCORE_MAX_DIGITS = len(str(SCORE_MAX))


@dataclass(frozen=True)
class FieldError:
    """
    One field-level decode problem.
    """

    column: str
    message: str
    value: str | None = None


class BusinessRowError(ValueError):
    """
    Raised when a CSV row cannot be decoded into a BusinessRecord.
    """

    def __init__(self, *, row_number: int, errors: Sequence[FieldError]) -> None:
        self.row_number = row_number
        self.errors = tuple(errors)
        super().__init__("; ".join(f"{error.column}: {error.message}" for error in self.errors))


class BusinessRowValidator:
    """
    Maps positional columns onto BusinessRecord fields and validates them.

    Missing trailing columns read as blank and extra columns are ignored.
    """

    def is_blank_line(self, line: str) -> bool:
        """
        Return True for a line that is empty once whitespace is trimmed.

        ``",,,"`` is not blank: it is a row of empty cells and still counts.
        """

        return not line.strip()

    def decode_row(self, *, cells: Sequence[str], row_number: int) -> BusinessRecord:
        """
        Decode one data row or raise BusinessRowError listing every problem.
        """

        values = self._map_columns(cells)
        errors: list[FieldError] = []

        name = self._parse_required_string(values["name"], column="name", errors=errors)
        registration_number = self._parse_required_string(
            values["registration_number"],
            column="registration_number",
            errors=errors,
        )
        status = self._parse_status(values["status"], errors=errors)
        registration_date = self._parse_date(values["registration_date"], errors=errors)
        authenticity_score = self._parse_score(values["authenticity_score"], errors=errors)

        if errors:
            raise BusinessRowError(row_number=row_number, errors=errors)

        return BusinessRecord(
            name=name,
            registration_number=registration_number,
            status=status,
            registration_date=registration_date,
            address=self._parse_optional_string(values["address"]),
            phone=self._parse_optional_string(values["phone"]),
            email=self._parse_optional_string(values["email"]),
            website=self._parse_optional_string(values["website"]),
            sector=self._parse_optional_string(values["sector"]),
            region=self._parse_optional_string(values["region"]),
            authenticity_score=authenticity_score,
        )

    @staticmethod
    def parse_authenticity_score(value: str | None) -> int:
        """
        Parse the score's leading integer; anything unreadable becomes 0.

        The 0-100 scale is not enforced. Raises ValueError only for a value
        the INTEGER column cannot hold.
        """

        if value is None:
            return 0
        match = _LEADING_INT.match(value.strip())
        if match is None:
            return 0

        digits = match.group(0).lstrip("+-").lstrip("0")
        if len(digits) > _SCORE_MAX_DIGITS:
            raise ValueError("Score does not fit an integer column.")
        score = int(match.group(0))
        if not SCORE_MIN <= score <= SCORE_MAX:
            raise ValueError("Score does not fit an integer column.")
        return score

    def _parse_score(self, value: str | None, *, errors: list[FieldError]) -> int:
        try:
            return self.parse_authenticity_score(value)
        except ValueError as exc:
            errors.append(FieldError(column="authenticity_score", message=str(exc), value=value))
            return 0

    def _map_columns(self, cells: Sequence[str]) -> dict[str, str | None]:
        return {
            column: cells[index] if index < len(cells) else None
            for index, column in enumerate(CSV_COLUMNS)
        }

    def _parse_required_string(
        self,
        value: str | None,
        *,
        column: str,
        errors: list[FieldError],
    ) -> str:
        if self._is_blank(value):
            errors.append(FieldError(column=column, message="Required value is missing.", value=value))
            return ""
        return str(value).strip()

    def _parse_optional_string(self, value: str | None) -> str | None:
        if self._is_blank(value):
            return None
        return str(value).strip()

    def _parse_status(self, value: str | None, *, errors: list[FieldError]) -> str:
        if self._is_blank(value):
            return BusinessStatus.UNVERIFIED

        normalized = str(value).strip().lower()
        if normalized not in ALLOWED_STATUSES:
            allowed = ", ".join(BusinessStatus.ALL)
            errors.append(
                FieldError(
                    column="status",
                    message=f"Unsupported status. Allowed values: {allowed}.",
                    value=value,
                )
            )
        return normalized

    def _parse_date(self, value: str | None, *, errors: list[FieldError]) -> date | None:
        if self._is_blank(value):
            return None

        raw = str(value).strip()
        for fmt in DATE_FORMATS:
            try:
                return datetime.strptime(raw, fmt).date()
            except ValueError:
                continue

        errors.append(
            FieldError(
                column="registration_date",
                message="Invalid calendar date.",
                value=raw,
            )
        )
        return None

    @staticmethod
    def _is_blank(value: Any) -> bool:
        return value is None or str(value).strip() == ""
