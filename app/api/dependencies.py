"""
app/api/dependencies.py

Shared FastAPI dependencies: upload presence, caller identity, capabilities.
"""

from __future__ import annotations

import logging
from functools import lru_cache

from fastapi import Depends, File, Header, UploadFile
from sqlalchemy.orm import Session

from app.api.errors import NoFileProvidedError, UnauthorizedError, VerifierRoleRequiredError
from app.config import AuthSettings, get_auth_settings
from app.connectors.identity_provider import HostedIdentityProvider, IdentityProvider, IdentityProviderError
from app.domain.identity import AuthenticatedUser, VerifierSession
from app.repositories.business_repository import BusinessRepository
from db.session import get_db

logger = logging.getLogger(__name__)

_BEARER_PREFIX = "bearer "


def get_business_upload(file: UploadFile | None = File(default=None)) -> UploadFile:
    """
    Require a multipart `file` field before anything else is checked.
    """

    if file is None or not (file.filename or "").strip():
        raise NoFileProvidedError()
    return file


def get_access_token(authorization: str | None = Header(default=None)) -> str | None:
    """
    Extract the bearer token from the Authorization header, if any.
    """

    if not authorization:
        return None
    value = authorization.strip()
    if not value.lower().startswith(_BEARER_PREFIX):
        return None
    token = value[len(_BEARER_PREFIX) :].strip()
    return token or None


@lru_cache(maxsize=1)
def _build_identity_provider() -> IdentityProvider:
    return HostedIdentityProvider(settings=get_auth_settings())


def get_identity_provider() -> IdentityProvider:
    """
    Shared identity provider; a misconfigured one rejects the caller with 401.
    """

    try:
        return _build_identity_provider()
    except IdentityProviderError as exc:
        logger.error("Identity provider unavailable: %s", exc)
        raise UnauthorizedError() from exc


def get_current_user(
    access_token: str | None = Depends(get_access_token),
    identity_provider: IdentityProvider = Depends(get_identity_provider),
) -> AuthenticatedUser:
    """
    Resolve the caller or reject the request with 401.
    """

    if access_token is None:
        raise UnauthorizedError()
    try:
        user = identity_provider.get_user(access_token)
    except IdentityProviderError as exc:
        logger.warning("Identity lookup failed: %s", exc)
        raise UnauthorizedError() from exc
    if user is None:
        raise UnauthorizedError()
    return user


def require_verifier(
    user: AuthenticatedUser = Depends(get_current_user),
    access_token: str | None = Depends(get_access_token),
    settings: AuthSettings = Depends(get_auth_settings),
) -> VerifierSession:
    """
    Grant the verifier capability or reject the request with 403.
    """

    if user.role != settings.verifier_role:
        logger.warning("Verifier capability denied user_id=%s role=%r", user.id, user.role)
        raise VerifierRoleRequiredError()
    return VerifierSession(user=user, access_token=access_token or "")


def get_business_repository(db: Session = Depends(get_db)) -> BusinessRepository:
    return BusinessRepository(db)
