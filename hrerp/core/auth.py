"""Supabase access-token validation (HS256, project JWT secret)."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import HTTPException, status
from jose import jwt
from jose.constants import Algorithms
from jose.exceptions import ExpiredSignatureError, JWTClaimsError, JWTError

from hrerp.models.auth import Principal, TokenPayload

logger = logging.getLogger("supabase_auth")


def validate_token(token: str, secret: str, audience: str) -> dict[str, Any]:
    if not secret:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Missing Supabase JWT configuration",
        )

    options = {
        "verify_signature": True,
        "verify_aud": True,
        "verify_exp": True,
        "require_exp": True,
        "require_sub": True,
    }

    try:
        return jwt.decode(
            token,
            secret,
            algorithms=[Algorithms.HS256],
            audience=audience,
            options=options,
        )
    except ExpiredSignatureError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token is expired",
        ) from e
    except JWTClaimsError as e:
        detail = "Invalid authentication credentials"
        if "audience" in str(e).lower():
            detail = f"Invalid token audience. Expected: {audience}"
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
        ) from e
    except JWTError as e:
        logger.debug("Token rejected: %s", e)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication credentials",
        ) from e


def principal_from_payload(payload: dict[str, Any]) -> Principal:
    claims = TokenPayload.model_validate(payload)
    if not claims.sub:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token has no subject",
        )
    return Principal(id=claims.sub, email=claims.email)
