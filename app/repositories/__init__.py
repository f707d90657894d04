"""
app/repositories package marker.
"""

from app.repositories.business_repository import BusinessRepository

__all__ = [
    "BusinessRepository",
]
