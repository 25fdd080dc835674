"""Verification of signed auth tokens."""

from __future__ import annotations

import time
from typing import Any

import jwt

from voda import logger
from voda.domain.entities import AuthCodeClaims

_HMAC_ALGORITHMS = ["HS256", "HS384", "HS512"]


class TokenError(Exception):
    """Raised when a token cannot be accepted."""


def _int_claim(payload: dict[str, Any], key: str) -> int:
    value = payload.get(key, 0)
    try:
        return int(value or 0)
    except (TypeError, ValueError):
        raise TokenError("the token is invalid") from None


def _str_claim(payload: dict[str, Any], key: str) -> str:
    value = payload.get(key, "")
    if value is None:
        return ""
    if not isinstance(value, str):
        raise TokenError("the token is invalid")
    return value


class TokenVerifier:
    """Checks HMAC-signed tokens against a shared secret."""

    def __init__(self, secret_key: str) -> None:
        self.secret_key = secret_key

    def verify(self, auth_code: str) -> AuthCodeClaims:
        """Return the claims of a valid, unexpired token; raise TokenError otherwise."""
        try:
            payload = jwt.decode(
                auth_code,
                self.secret_key,
                algorithms=_HMAC_ALGORITHMS,
                options={"verify_exp": False, "verify_aud": False},
            )
        except jwt.InvalidAlgorithmError as exc:
            raise TokenError(f"Unexpected signing method: {exc}") from exc
        except jwt.PyJWTError as exc:
            raise TokenError(f"the token is invalid: {exc}") from exc

        claims = AuthCodeClaims(
            auth_type=_str_claim(payload, "auth_type"),
            id=_int_claim(payload, "id"),
            email=_str_claim(payload, "email"),
            name=_str_claim(payload, "name"),
            expires_at=_int_claim(payload, "exp"),
            issued_at=_int_claim(payload, "iat"),
            not_before=_int_claim(payload, "nbf"),
            issuer=_str_claim(payload, "iss"),
            subject=_str_claim(payload, "sub"),
            audience=_str_claim(payload, "aud"),
            jwt_id=_str_claim(payload, "jti"),
        )
        if claims.expires_at < int(time.time()):
            logger.info("Token is Expired", expiredAt=claims.expires_at)
            raise TokenError("token is expired")
        return claims