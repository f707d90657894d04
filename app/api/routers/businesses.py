"""
app/api/routers/businesses.py

Directory entries: search, statistics, look-alike names, detail, and
verifier-only creation of a single business.
"""

from __future__ import annotations

import logging
import uuid
from typing import Literal

from fastapi import APIRouter, Depends, Query
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.api.dependencies import get_business_repository, require_verifier
from app.api.errors import BadRequestError, ConflictError, NotFoundError
from app.config import DirectorySettings, get_directory_settings
from app.domain.identity import VerifierSession
from app.repositories.business_repository import SEARCH_BY_NAME, BusinessRepository
from app.schemas.business import (
    BusinessCreateRequest,
    BusinessResponse,
    BusinessSearchResponse,
    BusinessStatsResponse,
    SimilarBusinessResponse,
)
from app.services.name_similarity import NameSimilarityService
from app.validators.business_form_validator import BusinessFormError, BusinessFormValidator
from db.models.business import BusinessStatus
from db.session import get_db

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/businesses", tags=["businesses"])


@router.get("/search", response_model=BusinessSearchResponse)
def search_businesses(
    query: str | None = Query(default=None, description="Name or registration number fragment"),
    search_by: Literal["name", "number"] = Query(default=SEARCH_BY_NAME, alias="type"),
    status: str | None = Query(default=None),
    region: str | None = Query(default=None),
    sector: str | None = Query(default=None),
    limit: int | None = Query(default=None, ge=1),
    offset: int = Query(default=0, ge=0),
    repository: BusinessRepository = Depends(get_business_repository),
    settings: DirectorySettings = Depends(get_directory_settings),
) -> BusinessSearchResponse:
    if status and status not in BusinessStatus.ALL:
        raise BadRequestError(f"Unknown status {status!r}.")

    page_size = min(limit or settings.page_size, settings.max_page_size)
    results = repository.search(
        query=(query or "").strip() or None,
        search_by=search_by,
        status=status,
        region=region,
        sector=sector,
        limit=page_size,
        offset=offset,
    )
    return BusinessSearchResponse(
        results=[BusinessResponse.model_validate(business) for business in results],
        count=len(results),
        limit=page_size,
        offset=offset,
    )


@router.get("/stats", response_model=BusinessStatsResponse)
def business_stats(
    repository: BusinessRepository = Depends(get_business_repository),
) -> BusinessStatsResponse:
    counts = repository.count_by_status()
    return BusinessStatsResponse(total=sum(counts.values()), **counts)


@router.get("/similar", response_model=list[SimilarBusinessResponse])
def similar_businesses(
    name: str = Query(..., min_length=1),
    limit: int = Query(default=10, ge=1, le=50),
    repository: BusinessRepository = Depends(get_business_repository),
    settings: DirectorySettings = Depends(get_directory_settings),
) -> list[SimilarBusinessResponse]:
    service = NameSimilarityService(
        repository,
        threshold=settings.similarity_threshold,
        candidate_limit=settings.similarity_candidate_limit,
    )
    return [
        SimilarBusinessResponse(
            id=match.business_id,
            name=match.name,
            registration_number=match.registration_number,
            similarity_score=match.similarity_score,
            risk_level=match.risk_level,
        )
        for match in service.find_similar(name, limit=limit)
    ]


@router.get("/{business_id}", response_model=BusinessResponse)
def get_business(
    business_id: str,
    repository: BusinessRepository = Depends(get_business_repository),
) -> BusinessResponse:
    try:
        parsed_id = uuid.UUID(business_id)
    except ValueError as exc:
        raise NotFoundError("Business not found") from exc

    business = repository.get_by_id(parsed_id)
    if business is None:
        raise NotFoundError("Business not found")
    return BusinessResponse.model_validate(business)


@router.post("", response_model=BusinessResponse, status_code=201)
def create_business(
    payload: BusinessCreateRequest,
    session: VerifierSession = Depends(require_verifier),
    db: Session = Depends(get_db),
    repository: BusinessRepository = Depends(get_business_repository),
) -> BusinessResponse:
    """
    Register one business entered by a verifier.

    400 lists every failed field rule; 409 means the registration number is taken.
    """

    try:
        record = BusinessFormValidator().validate(payload)
    except BusinessFormError as exc:
        raise BadRequestError(str(exc)) from exc

    try:
        business = repository.insert(record)
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise ConflictError("A business with this registration number already exists.") from exc
    except SQLAlchemyError:
        db.rollback()
        raise

    logger.info(
        "Business created registration_number=%s verifier_id=%s",
        record.registration_number,
        session.user.id,
    )
    return BusinessResponse.model_validate(business)
