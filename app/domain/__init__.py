"""
app/domain package marker.
"""

from app.domain.business_record import (
    CSV_COLUMNS,
    BusinessRecord,
    IngestionReport,
    RowError,
    RowFailed,
    RowOutcome,
    RowSucceeded,
)
from app.domain.identity import AuthenticatedUser, VerifierSession

__all__ = [
    "AuthenticatedUser",
    "BusinessRecord",
    "CSV_COLUMNS",
    "IngestionReport",
    "RowError",
    "RowFailed",
    "RowOutcome",
    "RowSucceeded",
    "VerifierSession",
]
