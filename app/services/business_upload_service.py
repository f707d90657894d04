"""
app/services/business_upload_service.py

Bulk registry upload: CSV rows in, one committed business per good row.

Every data row is handled on its own. A row that fails to decode or that the
database rejects becomes a ``RowFailed`` outcome and the upload carries on;
no transaction spans more than one row. The report is a fold over the
per-row outcomes, so ``succeeded + failed`` always equals the number of
non-blank data lines.
"""

from __future__ import annotations

import csv
import io
import logging
import uuid
from collections.abc import Callable, Iterable, Iterator
from functools import lru_cache
from typing import TextIO

from fastapi import UploadFile
from sqlalchemy.exc import DBAPIError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.config import get_upload_settings
from app.domain.business_record import BusinessRecord, IngestionReport, RowFailed, RowOutcome, RowSucceeded
from app.repositories.business_repository import BusinessRepository
from app.validators.business_row_validator import BusinessRowError, BusinessRowValidator, FieldError

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class UploadReadError(ValueError):
    """
    Raised when the uploaded payload itself cannot be read as CSV text.
    """


class BusinessPersistenceError(RuntimeError):
    """
    Raised when the database rejects one business row.
    """


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------


class BusinessUploadService:
    """
    Coordinates row splitting, decoding, and per-row persistence.
    """

    def __init__(
        self,
        *,
        max_reported_errors: int,
        log_row_errors: bool,
        validator: BusinessRowValidator | None = None,
        repository_factory: Callable[[Session], BusinessRepository] = BusinessRepository,
    ) -> None:
        self._max_reported_errors = max(1, max_reported_errors)
        self._log_row_errors = log_row_errors
        self._validator = validator or BusinessRowValidator()
        self._repository_factory = repository_factory

    def ingest_upload(self, *, upload_file: UploadFile, db: Session) -> IngestionReport:
        """
        Stream an uploaded file as UTF-8 text (BOM tolerated) and ingest it.
        """

        raw_file = upload_file.file
        raw_file.seek(0)
        text_stream = io.TextIOWrapper(raw_file, encoding="utf-8-sig", newline="")
        try:
            return self.ingest_stream(text_stream, db=db)
        finally:
            try:
                text_stream.detach()
            except ValueError:
                pass

    def ingest_stream(self, stream: TextIO | Iterable[str], *, db: Session) -> IngestionReport:
        """
        Ingest CSV text whose first line is a header.

        The header is discarded without looking at it; columns are positional.
        """

        repository = self._repository_factory(db)
        outcomes = self.process_rows(self.iter_data_lines(stream), repository=repository, db=db)
        report = IngestionReport.from_outcomes(outcomes, max_errors=self._max_reported_errors)
        logger.info(
            "Business upload finished succeeded=%s failed=%s",
            report.succeeded,
            report.failed,
        )
        return report

    def iter_data_lines(self, stream: TextIO | Iterable[str]) -> Iterator[tuple[int, str]]:
        """
        Yield ``(line_number, line)`` for each non-blank physical data line.

        ``line_number`` is 1-based against the whole file, header included.
        A record never spans lines, so one line is always one outcome.
        """

        lines = iter(stream)
        try:
            if next(lines, None) is None:
                return
            for line_number, line in enumerate(lines, start=2):
                if self._validator.is_blank_line(line):
                    continue
                yield line_number, line
        except UnicodeDecodeError as exc:
            raise UploadReadError("Upload must be UTF-8 encoded text.") from exc

    def process_rows(
        self,
        rows: Iterable[tuple[int, str]],
        *,
        repository: BusinessRepository,
        db: Session,
    ) -> Iterator[RowOutcome]:
        for line_number, line in rows:
            yield self._process_row(
                line_number=line_number,
                line=line,
                repository=repository,
                db=db,
            )

    # ------------------------------------------------------------------
    # Row internals
    # ------------------------------------------------------------------

    def _process_row(
        self,
        *,
        line_number: int,
        line: str,
        repository: BusinessRepository,
        db: Session,
    ) -> RowOutcome:
        try:
            cells = split_csv_line(line, row_number=line_number)
            record = self._validator.decode_row(cells=cells, row_number=line_number)
        except BusinessRowError as exc:
            return self._row_failed(line_number, str(exc))
        except Exception as exc:  # noqa: BLE001
            logger.exception("Business upload row could not be decoded row=%s", line_number)
            return self._row_failed(line_number, f"Row could not be decoded: {exc}")

        try:
            business_id = self._persist_row(repository=repository, db=db, record=record)
        except BusinessPersistenceError as exc:
            return self._row_failed(line_number, str(exc))
        return RowSucceeded(row_number=line_number, business_id=business_id)

    def _persist_row(
        self,
        *,
        repository: BusinessRepository,
        db: Session,
        record: BusinessRecord,
    ) -> uuid.UUID | None:
        try:
            business = repository.insert(record)
            db.commit()
        except SQLAlchemyError as exc:
            db.rollback()
            raise BusinessPersistenceError(_describe_store_error(exc)) from exc
        return business.id

    def _row_failed(self, line_number: int, message: str) -> RowFailed:
        if self._log_row_errors:
            logger.warning("Business upload row failed row=%s message=%s", line_number, message)
        return RowFailed(row_number=line_number, message=message)


def split_csv_line(line: str, *, row_number: int) -> list[str]:
    """
    Split one physical line into cells, honouring quoted commas.

    An unterminated quote runs to the end of the line only.
    """

    try:
        return next(csv.reader([line]), [])
    except csv.Error as exc:
        raise BusinessRowError(
            row_number=row_number,
            errors=[FieldError(column="row", message=f"Invalid CSV format: {exc}")],
        ) from exc


def _describe_store_error(exc: SQLAlchemyError) -> str:
    """
    First line of the driver's message, e.g. the violated constraint.
    """

    source = exc.orig if isinstance(exc, DBAPIError) and exc.orig is not None else exc
    text = str(source).strip()
    return text.splitlines()[0] if text else exc.__class__.__name__


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------


@lru_cache(maxsize=1)
def get_business_upload_service() -> BusinessUploadService:
    """
    Build and cache the upload service with env-driven settings.
    """
    settings = get_upload_settings()
    return BusinessUploadService(
        max_reported_errors=settings.max_reported_errors,
        log_row_errors=settings.log_row_errors,
    )
