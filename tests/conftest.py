"""
tests/conftest.py

In-memory stand-ins for the database session, the business repository and
the identity provider, plus a test application wired with them.
"""

from __future__ import annotations

import uuid
from collections.abc import Iterator
from dataclasses import dataclass, field
from datetime import datetime, timezone
from types import SimpleNamespace

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.exc import IntegrityError

from app.api.dependencies import get_business_repository, get_identity_provider
from app.api.errors import register_error_handlers
from app.api.routers import badge_status_router, business_upload_router, businesses_router
from app.config import AuthSettings, DirectorySettings, get_auth_settings, get_directory_settings
from app.domain.business_record import BusinessRecord
from app.domain.identity import AuthenticatedUser
from app.services.business_upload_service import BusinessUploadService, get_business_upload_service
from db.models.business import BusinessStatus
from db.session import get_db

VERIFIER_TOKEN = "verifier-token"
CITIZEN_TOKEN = "citizen-token"


# ---------------------------------------------------------------------------
# Fakes
# ---------------------------------------------------------------------------


@dataclass
class FakeSession:
    """
    Tracks staged vs committed businesses the way a real transaction would.
    """

    staged: list[SimpleNamespace] = field(default_factory=list)
    committed: list[SimpleNamespace] = field(default_factory=list)
    insert_calls: int = 0
    commits: int = 0
    rollbacks: int = 0

    def commit(self) -> None:
        self.commits += 1
        self.committed.extend(self.staged)
        self.staged.clear()

    def rollback(self) -> None:
        self.rollbacks += 1
        self.staged.clear()

    def close(self) -> None:
        pass

    def registration_numbers(self) -> set[str]:
        return {business.registration_number for business in self.committed}


def make_business(**overrides: object) -> SimpleNamespace:
    now = datetime(2026, 1, 1, tzinfo=timezone.utc)
    values: dict[str, object] = {
        "id": uuid.uuid4(),
        "name": "Acme Ltd",
        "registration_number": "SL-2020-000001",
        "status": BusinessStatus.UNVERIFIED,
        "registration_date": None,
        "address": None,
        "phone": None,
        "email": None,
        "website": None,
        "sector": None,
        "region": None,
        "authenticity_score": 0,
        "created_at": now,
        "updated_at": now,
    }
    values.update(overrides)
    return SimpleNamespace(**values)


class FakeBusinessRepository:
    """
    Mirrors BusinessRepository against a FakeSession.

    registration_number is unique, as enforced by the real table.
    """

    def __init__(self, session: FakeSession) -> None:
        self._session = session

    def insert(self, record: BusinessRecord) -> SimpleNamespace:
        self._session.insert_calls += 1
        taken = self._session.registration_numbers() | {
            business.registration_number for business in self._session.staged
        }
        if record.registration_number in taken:
            raise IntegrityError(
                "INSERT INTO businesses",
                None,
                Exception(
                    'duplicate key value violates unique constraint "uq_businesses_registration_number"\n'
                    f"DETAIL:  Key (registration_number)=({record.registration_number}) already exists."
                ),
            )
        business = make_business(
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
        self._session.staged.append(business)
        return business

    # Lookup side, backed by committed rows.

    def get_by_id(self, business_id: uuid.UUID) -> SimpleNamespace | None:
        return next((b for b in self._session.committed if b.id == business_id), None)

    def search(self, *, query, search_by="name", status=None, region=None, sector=None, limit=20, offset=0):
        results = list(self._session.committed)
        if query:
            attribute = "registration_number" if search_by == "number" else "name"
            results = [b for b in results if query.lower() in getattr(b, attribute).lower()]
        if status:
            results = [b for b in results if b.status == status]
        if region:
            results = [b for b in results if b.region == region]
        if sector:
            results = [b for b in results if b.sector == sector]
        results.sort(key=lambda b: (b.name, b.registration_number))
        return results[offset : offset + limit]

    def count_by_status(self) -> dict[str, int]:
        counts = {status: 0 for status in BusinessStatus.ALL}
        for business in self._session.committed:
            counts[business.status] += 1
        return counts

    def list_name_candidates(self, *, limit: int):
        return [(b.id, b.name, b.registration_number) for b in self._session.committed[:limit]]


class FakeIdentityProvider:
    def __init__(self, users: dict[str, AuthenticatedUser]) -> None:
        self._users = users
        self.lookups: list[str] = []

    def get_user(self, access_token: str) -> AuthenticatedUser | None:
        self.lookups.append(access_token)
        return self._users.get(access_token)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def fake_session() -> FakeSession:
    return FakeSession()


@pytest.fixture()
def upload_service() -> BusinessUploadService:
    return BusinessUploadService(
        max_reported_errors=1000,
        log_row_errors=False,
        repository_factory=FakeBusinessRepository,
    )


@pytest.fixture()
def identity_provider() -> FakeIdentityProvider:
    return FakeIdentityProvider(
        {
            VERIFIER_TOKEN: AuthenticatedUser(id="user-verifier", email="v@registry.gov.sl", role="verifier"),
            CITIZEN_TOKEN: AuthenticatedUser(id="user-citizen", email="c@example.com", role=None),
        }
    )


@pytest.fixture()
def test_app(
    fake_session: FakeSession,
    upload_service: BusinessUploadService,
    identity_provider: FakeIdentityProvider,
) -> FastAPI:
    application = FastAPI()
    register_error_handlers(application)
    application.include_router(business_upload_router)
    application.include_router(badge_status_router)
    application.include_router(businesses_router)

    def _get_db() -> Iterator[FakeSession]:
        yield fake_session

    application.dependency_overrides[get_db] = _get_db
    application.dependency_overrides[get_business_upload_service] = lambda: upload_service
    application.dependency_overrides[get_identity_provider] = lambda: identity_provider
    application.dependency_overrides[get_auth_settings] = lambda: AuthSettings(
        url="https://auth.test",
        anon_key="anon",
        verifier_role="verifier",
    )
    application.dependency_overrides[get_directory_settings] = lambda: DirectorySettings(
        public_url="https://directory.test",
    )
    application.dependency_overrides[get_business_repository] = lambda: FakeBusinessRepository(fake_session)
    return application


@pytest.fixture()
def client(test_app: FastAPI) -> TestClient:
    return TestClient(test_app)
