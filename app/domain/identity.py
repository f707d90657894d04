"""
app/domain/identity.py

Caller identity as seen by request handlers.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class AuthenticatedUser:
    """
    Principal resolved by the hosted identity provider.
    """

    id: str
    email: str | None = None
    role: str | None = None


@dataclass(frozen=True)
class VerifierSession:
    """
    Proof that the caller holds the verifier capability.

    Handlers that write registry data take this as an explicit input.
    """

    user: AuthenticatedUser
    access_token: str
