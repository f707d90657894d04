"""
app/api/routers/badge_status.py

Verification badge data for embedding on business websites.
"""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends

from app.api.dependencies import get_business_repository
from app.api.errors import NotFoundError
from app.config import DirectorySettings, get_directory_settings
from app.repositories.business_repository import BusinessRepository
from app.schemas.business import BadgeStatusResponse
from db.models.business import BusinessStatus

router = APIRouter(prefix="/api", tags=["badges"])


@router.get("/badge-status/{business_id}", response_model=BadgeStatusResponse)
def get_badge_status(
    business_id: str,
    repository: BusinessRepository = Depends(get_business_repository),
    settings: DirectorySettings = Depends(get_directory_settings),
) -> BadgeStatusResponse:
    try:
        parsed_id = uuid.UUID(business_id)
    except ValueError as exc:
        raise NotFoundError("Business not found") from exc

    business = repository.get_by_id(parsed_id)
    if business is None:
        raise NotFoundError("Business not found")

    return BadgeStatusResponse(
        id=business.id,
        name=business.name,
        registration_number=business.registration_number,
        status=business.status,
        authenticity_score=business.authenticity_score,
        verified=business.status == BusinessStatus.VERIFIED,
        badge_url=f"{settings.public_url}/business/{business.id}",
    )
