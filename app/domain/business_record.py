"""
app/domain/business_record.py

Domain models used by the bulk business upload flow.
"""

from __future__ import annotations

import uuid
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date

# Positional CSV contract for bulk uploads.
CSV_COLUMNS: tuple[str, ...] = (
    "name",
    "registration_number",
    "status",
    "registration_date",
    "address",
    "phone",
    "email",
    "website",
    "sector",
    "region",
    "authenticity_score",
)


@dataclass(frozen=True)
class BusinessRecord:
    """
    Typed business entry, decoded from a CSV data row or a create request.
    """

    name: str
    registration_number: str
    status: str
    registration_date: date | None
    address: str | None
    phone: str | None
    email: str | None
    website: str | None
    sector: str | None
    region: str | None
    authenticity_score: int


@dataclass(frozen=True)
class RowSucceeded:
    """
    A data row that was persisted.
    """

    row_number: int
    business_id: uuid.UUID | None = None


@dataclass(frozen=True)
class RowFailed:
    """
    A data row that was not persisted.
    """

    row_number: int
    message: str


RowOutcome = RowSucceeded | RowFailed


@dataclass(frozen=True)
class RowError:
    """
    Row-level error entry reported back to the uploader.
    """

    row: int
    message: str


@dataclass(frozen=True)
class IngestionReport:
    """
    End-of-upload summary.

    ``errors`` keeps file order and may be truncated to a configured cap;
    ``failed`` always counts every failed row.
    """

    succeeded: int = 0
    failed: int = 0
    errors: list[RowError] = field(default_factory=list)

    @property
    def message(self) -> str:
        return f"Upload complete: {self.succeeded} successful, {self.failed} failed"

    @classmethod
    def from_outcomes(
        cls,
        outcomes: Iterable[RowOutcome],
        *,
        max_errors: int | None = None,
    ) -> IngestionReport:
        succeeded = 0
        failed = 0
        errors: list[RowError] = []
        for outcome in outcomes:
            if isinstance(outcome, RowSucceeded):
                succeeded += 1
                continue
            failed += 1
            if max_errors is None or len(errors) < max_errors:
                errors.append(RowError(row=outcome.row_number, message=outcome.message))
        return cls(succeeded=succeeded, failed=failed, errors=errors)
