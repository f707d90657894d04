"""
app/repositories/business_repository.py

Persistence layer for directory businesses.
"""

from __future__ import annotations

import uuid
from collections.abc import Sequence

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.domain.business_record import BusinessRecord
from db.models.business import Business, BusinessStatus

SEARCH_BY_NAME = "name"
SEARCH_BY_NUMBER = "number"


class BusinessRepository:
    """
    Repository for single-row writes and directory lookups.

    Writes only flush; the caller owns commit and rollback.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def insert(self, record: BusinessRecord) -> Business:
        """
        Stage one business and flush so constraint violations surface here.
        """

        business = Business(
            name=record.name,
            registration_number=record.registration_number,
            status=record.status,
            registration_date=record.registration_date,
            address=record.address,
            phone=record.phone,
            email=record.email,
            website=record.website,
            sector=record.sector,
            region=record.region,
            authenticity_score=record.authenticity_score,
        )
        self._session.add(business)
        self._session.flush()
        return business

    def get_by_id(self, business_id: uuid.UUID) -> Business | None:
        return self._session.get(Business, business_id)

    def search(
        self,
        *,
        query: str | None,
        search_by: str = SEARCH_BY_NAME,
        status: str | None = None,
        region: str | None = None,
        sector: str | None = None,
        limit: int = 20,
        offset: int = 0,
    ) -> Sequence[Business]:
        """
        Case-insensitive substring search on name or registration number.
        """

        stmt = select(Business)
        if query:
            column = Business.registration_number if search_by == SEARCH_BY_NUMBER else Business.name
            stmt = stmt.where(column.icontains(query, autoescape=True))
        if status:
            stmt = stmt.where(Business.status == status)
        if region:
            stmt = stmt.where(Business.region == region)
        if sector:
            stmt = stmt.where(Business.sector == sector)

        stmt = stmt.order_by(Business.name, Business.registration_number).limit(limit).offset(offset)
        return self._session.scalars(stmt).all()

    def count_by_status(self) -> dict[str, int]:
        """
        Return a count per status, including zero counts.
        """

        counts = {status: 0 for status in BusinessStatus.ALL}
        rows = self._session.execute(
            select(Business.status, func.count(Business.id)).group_by(Business.status)
        ).all()
        for status, count in rows:
            counts[status] = int(count)
        return counts

    def list_name_candidates(self, *, limit: int) -> Sequence[tuple[uuid.UUID, str, str]]:
        """
        Return (id, name, registration_number) rows for name comparison.
        """

        stmt = (
            select(Business.id, Business.name, Business.registration_number)
            .order_by(Business.created_at.desc())
            .limit(limit)
        )
        return [tuple(row) for row in self._session.execute(stmt).all()]
