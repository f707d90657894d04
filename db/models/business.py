"""
db/models/business.py

Registered business as stored in the public directory.
"""

from __future__ import annotations

from datetime import date

from sqlalchemy import CheckConstraint, Date, Index, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from db.base import Base, TimestampMixin, UUIDPrimaryKeyMixin


class BusinessStatus:
    VERIFIED = "verified"
    PROVISIONALLY_VERIFIED = "provisionally_verified"
    UNVERIFIED = "unverified"
    UNDER_REVIEW = "under_review"

    ALL = (VERIFIED, PROVISIONALLY_VERIFIED, UNVERIFIED, UNDER_REVIEW)


class Business(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """
    One registry entry.

    Identity (id) is assigned here on insert; registration_number is unique
    across the directory and that uniqueness is enforced only by the table.
    """

    __tablename__ = "businesses"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    registration_number: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        comment="Registry identifier, e.g. SL-2020-000123",
    )
    status: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
        default=BusinessStatus.UNVERIFIED,
        server_default=BusinessStatus.UNVERIFIED,
        comment="verified, provisionally_verified, unverified, under_review",
    )
    registration_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    address: Mapped[str | None] = mapped_column(Text, nullable=True)
    phone: Mapped[str | None] = mapped_column(String(64), nullable=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    website: Mapped[str | None] = mapped_column(String(255), nullable=True)
    sector: Mapped[str | None] = mapped_column(String(120), nullable=True)
    region: Mapped[str | None] = mapped_column(String(120), nullable=True)
    authenticity_score: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        server_default="0",
    )

    __table_args__ = (
        UniqueConstraint("registration_number", name="uq_businesses_registration_number"),
        CheckConstraint(
            "status IN ('verified', 'provisionally_verified', 'unverified', 'under_review')",
            name="ck_businesses_status",
        ),
        Index("ix_businesses_name", "name"),
        Index("ix_businesses_status", "status"),
        Index("ix_businesses_region", "region"),
        Index("ix_businesses_sector", "sector"),
    )
