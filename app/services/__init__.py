"""
app/services package marker.
"""

from app.services.business_upload_service import (
    BusinessPersistenceError,
    BusinessUploadService,
    UploadReadError,
    get_business_upload_service,
)
from app.services.name_similarity import NameSimilarityService

__all__ = [
    "BusinessPersistenceError",
    "BusinessUploadService",
    "NameSimilarityService",
    "UploadReadError",
    "get_business_upload_service",
]
