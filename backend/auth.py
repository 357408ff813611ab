"""
Request authentication for the workout session API.

Two credentials are accepted. An `X-API-Key` header carries a service key
from API_KEYS, optionally suffixed with `:<owner id>` to act for a user.
Otherwise `Authorization: Bearer <jwt>` must hold an HS256 token signed
with JWT_SECRET whose `sub` (or legacy `id`) claim names the owner.
"""
import logging
from typing import Any, Dict, Optional

import jwt
from fastapi import Header, HTTPException

from backend.settings import get_settings

logger = logging.getLogger(__name__)

JWT_ALGORITHM = "HS256"
SERVICE_USER_ID = "admin"
BEARER_PREFIX = "Bearer "


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(status_code=401, detail=detail)


async def get_current_user(
    authorization: Optional[str] = Header(None),
    x_api_key: Optional[str] = Header(None, alias="X-API-Key"),
) -> str:
    """Resolve the owner id for a request; the API key wins when both are sent."""
    if x_api_key:
        return validate_api_key(x_api_key)
    if authorization:
        return validate_jwt(authorization)
    raise _unauthorized("Missing authentication. Provide Authorization header or X-API-Key.")


def validate_api_key(api_key: str) -> str:
    """
    Check a service key and return the owner it acts for.

    "sk_live_x" acts as the service user; "sk_live_x:user_42" acts as user_42.
    """
    valid_keys = get_settings().api_keys_list
    if not valid_keys:
        logger.warning("API key presented but API_KEYS is empty")
        raise _unauthorized("API key authentication not configured")

    key, _, owner_id = api_key.partition(":")
    if key not in valid_keys:
        raise _unauthorized("Invalid API key")
    return owner_id or SERVICE_USER_ID


def _owner_from_claims(payload: Dict[str, Any]) -> str:
    owner_id = payload.get("sub") or payload.get("id")
    if owner_id in (None, ""):
        raise _unauthorized("Token missing user ID")
    return str(owner_id)


def validate_jwt(authorization: str) -> str:
    if not authorization.startswith(BEARER_PREFIX):
        raise _unauthorized("Invalid authorization header format")

    token = authorization[len(BEARER_PREFIX):].strip()
    if not token:
        raise _unauthorized("Missing token")

    try:
        payload = jwt.decode(
            token,
            get_settings().jwt_secret,
            algorithms=[JWT_ALGORITHM],
            options={"verify_aud": False},
        )
    except jwt.ExpiredSignatureError as e:
        raise _unauthorized("Token expired") from e
    except jwt.InvalidTokenError as e:
        logger.warning(f"Rejected bearer token: {e}")
        raise _unauthorized("Invalid token") from e

    owner_id = _owner_from_claims(payload)
    logger.debug(f"Bearer token accepted for owner {owner_id}")
    return owner_id
