"""
Signed identity tokens.

The Innovation Sandbox API trusts HS256 JWTs whose ``user`` claim names
the caller. These helpers mint such tokens for an administrator or for a
regular user being impersonated.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any

import jwt

JWT_ALGORITHM = "HS256"


class Role(str, Enum):
    """Roles recognised by the service. Claims may carry other strings."""
    ADMIN = "Admin"
    MANAGER = "Manager"
    USER = "User"


@dataclass(frozen=True)
class UserClaims:
    """User information embedded in the ``user`` claim."""

    display_name: str
    user_name: str
    email: str
    roles: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "displayName": self.display_name,
            "userName": self.user_name,
            "email": self.email,
            "roles": list(self.roles),
        }


def generate_jwt(user: UserClaims, secret: str, expires_in: timedelta) -> str:
    """
    Sign a token for ``user`` valid for ``expires_in`` from now.

    Args:
        user: Identity to embed
        secret: HMAC secret shared with the service
        expires_in: Token validity

    Returns:
        Encoded JWT string
    """
    now = datetime.now(timezone.utc)
    payload = {
        "user": user.to_dict(),
        "iat": now,
        "exp": now + expires_in,
    }
    return jwt.encode(payload, secret, algorithm=JWT_ALGORITHM)


def new_admin_user_claims(email: str) -> UserClaims:
    return UserClaims(
        display_name="Admin",
        user_name=email,
        email=email,
        roles=[Role.ADMIN.value],
    )


def new_user_user_claims(email: str) -> UserClaims:
    return UserClaims(
        display_name="GitHub",
        user_name=email,
        email=email,
        roles=[Role.USER.value],
    )
