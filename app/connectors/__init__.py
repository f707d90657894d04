"""
app/connectors package marker.
"""

from app.connectors.identity_provider import (
    HostedIdentityProvider,
    IdentityProvider,
    IdentityProviderError,
)

__all__ = [
    "HostedIdentityProvider",
    "IdentityProvider",
    "IdentityProviderError",
]
