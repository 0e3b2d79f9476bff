"""
Identity tokens for the Innovation Sandbox API.

- generate_jwt: sign a UserClaims payload with a shared secret
- new_admin_user_claims / new_user_user_claims: canned identities
"""

from isb_client.auth.tokens import (
    JWT_ALGORITHM,
    Role,
    UserClaims,
    generate_jwt,
    new_admin_user_claims,
    new_user_user_claims,
)

__all__ = [
    "JWT_ALGORITHM",
    "Role",
    "UserClaims",
    "generate_jwt",
    "new_admin_user_claims",
    "new_user_user_claims",
]
