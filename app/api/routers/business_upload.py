"""
app/api/routers/business_upload.py

Bulk registry upload endpoint.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, UploadFile
from sqlalchemy.orm import Session

from app.api.dependencies import get_business_upload, require_verifier
from app.api.errors import UploadProcessingError
from app.domain.identity import VerifierSession
from app.schemas.business_upload import BusinessUploadResponse, UploadRowErrorResponse
from app.services.business_upload_service import (
    BusinessUploadService,
    UploadReadError,
    get_business_upload_service,
)
from db.session import get_db

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["upload"])


@router.post("/upload", response_model=BusinessUploadResponse)
def upload_businesses(
    file: UploadFile = Depends(get_business_upload),
    session: VerifierSession = Depends(require_verifier),
    db: Session = Depends(get_db),
    upload_service: BusinessUploadService = Depends(get_business_upload_service),
) -> BusinessUploadResponse:
    """
    Ingest one CSV of registry entries, one insert per data row.

    Columns are positional: name, registration_number, status,
    registration_date, address, phone, email, website, sector, region,
    authenticity_score. The first line is a header and is skipped.
    """

    logger.info(
        "Business upload started filename=%r verifier_id=%s",
        file.filename,
        session.user.id,
    )
    try:
        report = upload_service.ingest_upload(upload_file=file, db=db)
    except UploadReadError as exc:
        raise UploadProcessingError(str(exc)) from exc
    finally:
        file.file.close()

    return BusinessUploadResponse(
        success=report.succeeded,
        failed=report.failed,
        errors=[UploadRowErrorResponse(row=error.row, message=error.message) for error in report.errors],
        message=report.message,
    )
