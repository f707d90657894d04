"""
app/connectors/identity_provider.py

Client for the hosted auth provider (GoTrue-compatible `/auth/v1/user`).
"""

from __future__ import annotations

import logging
from typing import Any, Protocol

import requests

from app.config import AuthSettings
from app.domain.identity import AuthenticatedUser

logger = logging.getLogger(__name__)


class IdentityProviderError(RuntimeError):
    """
    Raised when the identity provider cannot be reached or misbehaves.
    """


class IdentityProvider(Protocol):
    def get_user(self, access_token: str) -> AuthenticatedUser | None:
        """
        Return the principal behind ``access_token``, or None if it is not valid.
        """


class HostedIdentityProvider:
    """
    Resolves bearer tokens by asking the hosted auth service who they belong to.

    One request per call, no retries.
    """

    def __init__(
        self,
        *,
        settings: AuthSettings,
        session: requests.Session | None = None,
    ) -> None:
        if not settings.url or not settings.anon_key:
            raise IdentityProviderError("AUTH_URL and AUTH_ANON_KEY must be configured.")
        self._user_url = f"{settings.url.rstrip('/')}/auth/v1/user"
        self._anon_key = settings.anon_key
        self._timeout_seconds = settings.timeout_seconds
        self._session = session or requests.Session()

    def get_user(self, access_token: str) -> AuthenticatedUser | None:
        try:
            response = self._session.get(
                self._user_url,
                headers={
                    "apikey": self._anon_key,
                    "Authorization": f"Bearer {access_token}",
                },
                timeout=self._timeout_seconds,
            )
        except (requests.Timeout, requests.ConnectionError) as exc:
            raise IdentityProviderError("Identity provider is unreachable.") from exc

        if response.status_code in {401, 403}:
            return None
        if response.status_code >= 400:
            logger.error(
                "Identity provider request failed status=%s url=%s",
                response.status_code,
                self._user_url,
            )
            raise IdentityProviderError(f"Identity provider returned HTTP {response.status_code}.")

        try:
            payload = response.json()
        except ValueError as exc:
            raise IdentityProviderError("Identity provider response was not valid JSON.") from exc

        return parse_user_payload(payload)


def parse_user_payload(payload: Any) -> AuthenticatedUser | None:
    """
    Decode a provider user object; the role lives in ``user_metadata.role``.
    """

    if not isinstance(payload, dict):
        return None
    user_id = payload.get("id")
    if not isinstance(user_id, str) or not user_id.strip():
        return None

    metadata = payload.get("user_metadata")
    role = metadata.get("role") if isinstance(metadata, dict) else None
    email = payload.get("email")
    return AuthenticatedUser(
        id=user_id,
        email=email if isinstance(email, str) else None,
        role=role if isinstance(role, str) else None,
    )
