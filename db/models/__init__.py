"""
Model package exports.

Importing this package registers every table on Base.metadata for the
startup schema check and Alembic.
"""

from db.models.business import Business, BusinessStatus

__all__ = [
    "Business",
    "BusinessStatus",
]
