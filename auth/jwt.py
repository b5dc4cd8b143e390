"""
JWT-style access token creation and verification.

Tokens are base64-encoded JSON payloads signed with HMAC-SHA256::

    b64(json({"user": {...}, "iat": ..., "exp": ...})) + "." + hexsig

Secret key is loaded from ``config.access_token_secret``
(env var: ``ACCESS_TOKEN_SECRET``).  Tokens live for 15 minutes.
"""

from __future__ import annotations

import binascii
import hashlib
import hmac
import json
import time
from base64 import b64decode, b64encode
from typing import Any, Dict, Optional

from config.settings import config

TOKEN_EXPIRY_SECONDS = 15 * 60


class TokenError(Exception):
    """Base class for every token verification failure."""


class MalformedTokenError(TokenError):
    pass


class InvalidSignatureError(TokenError):
    pass


class TokenExpiredError(TokenError):
    pass


def _sign(secret: str, raw: bytes) -> str:
    return hmac.new(secret.encode(), raw, hashlib.sha256).hexdigest()


def create_token(
    claims: Dict[str, Any],
    secret: Optional[str] = None,
    now: Optional[float] = None,
) -> str:
    """Create a signed token carrying ``claims`` under the ``user`` key."""
    issued_at = int(now if now is not None else time.time())
    payload = {
        "user": claims,
        "iat": issued_at,
        "exp": issued_at + TOKEN_EXPIRY_SECONDS,
    }
    raw = json.dumps(payload, separators=(",", ":")).encode()
    return b64encode(raw).decode() + "." + _sign(secret or config.access_token_secret, raw)


def verify_token(
    token: str,
    secret: Optional[str] = None,
    now: Optional[float] = None,
) -> Dict[str, Any]:
    """
    Verify ``token`` and return its user claims.

    The signature is checked before the expiry, so a forged expired token
    reports :class:`InvalidSignatureError`.
    """
    parts = token.split(".")
    if len(parts) != 2 or not all(parts):
        raise MalformedTokenError("bad format")
    try:
        raw = b64decode(parts[0], validate=True)
    except (binascii.Error, ValueError) as exc:
        raise MalformedTokenError("bad encoding") from exc

    expected_sig = _sign(secret or config.access_token_secret, raw)
    if not hmac.compare_digest(parts[1].encode(), expected_sig.encode()):
        raise InvalidSignatureError("bad signature")

    try:
        payload = json.loads(raw)
    except ValueError as exc:
        raise MalformedTokenError("bad payload") from exc
    if not isinstance(payload, dict) or not isinstance(payload.get("user"), dict):
        raise MalformedTokenError("missing claims")

    current = now if now is not None else time.time()
    if payload.get("exp", 0) < current:
        raise TokenExpiredError("token expired")
    return payload["user"]
