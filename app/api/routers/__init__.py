"""
app/api/routers package marker.
"""

from app.api.routers.badge_status import router as badge_status_router
from app.api.routers.business_upload import router as business_upload_router
from app.api.routers.businesses import router as businesses_router

__all__ = [
    "badge_status_router",
    "business_upload_router",
    "businesses_router",
]
