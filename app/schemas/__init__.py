"""
app/schemas package marker.
"""

from app.schemas.business import (
    BadgeStatusResponse,
    BusinessCreateRequest,
    BusinessResponse,
    BusinessSearchResponse,
    BusinessStatsResponse,
    SimilarBusinessResponse,
)
from app.schemas.business_upload import BusinessUploadResponse, UploadRowErrorResponse

__all__ = [
    "BadgeStatusResponse",
    "BusinessCreateRequest",
    "BusinessResponse",
    "BusinessSearchResponse",
    "BusinessStatsResponse",
    "BusinessUploadResponse",
    "SimilarBusinessResponse",
    "UploadRowErrorResponse",
]
