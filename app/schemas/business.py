"""
app/schemas/business.py

Request and response schemas for directory entries and badges.
"""

from __future__ import annotations

import uuid
from datetime import date, datetime

from pydantic import BaseModel, Field


class BusinessCreateRequest(BaseModel):
    """
    One business entered by a verifier.
    """

    name: str
    registration_number: str
    registration_date: date
    address: str
    status: str | None = None
    phone: str | None = None
    email: str | None = None
    website: str | None = None
    sector: str | None = None
    region: str | None = None
    authenticity_score: int = Field(default=0, ge=0, le=100)


class BusinessResponse(BaseModel):
    id: uuid.UUID
    name: str
    registration_number: str
    status: str
    registration_date: date | None = None
    address: str | None = None
    phone: str | None = None
    email: str | None = None
    website: str | None = None
    sector: str | None = None
    region: str | None = None
    authenticity_score: int
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}


class BusinessSearchResponse(BaseModel):
    results: list[BusinessResponse] = Field(default_factory=list)
    count: int = Field(..., ge=0)
    limit: int = Field(..., ge=1)
    offset: int = Field(..., ge=0)


class BusinessStatsResponse(BaseModel):
    total: int = Field(..., ge=0)
    verified: int = Field(..., ge=0)
    provisionally_verified: int = Field(..., ge=0)
    under_review: int = Field(..., ge=0)
    unverified: int = Field(..., ge=0)


class SimilarBusinessResponse(BaseModel):
    id: uuid.UUID
    name: str
    registration_number: str
    similarity_score: int = Field(..., ge=0, le=100)
    risk_level: str


class BadgeStatusResponse(BaseModel):
    """
    Badge-friendly view of one business.
    """

    id: uuid.UUID
    name: str
    registration_number: str
    status: str
    authenticity_score: int
    verified: bool
    badge_url: str
