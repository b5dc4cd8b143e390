"""
Tests for access token issuance and verification.
"""

import json
import time
from base64 import b64decode, b64encode

import pytest

from auth.jwt import (
    TOKEN_EXPIRY_SECONDS,
    InvalidSignatureError,
    MalformedTokenError,
    TokenError,
    TokenExpiredError,
    create_token,
    verify_token,
)

CLAIMS = {"username": "alice", "email": "alice@example.com", "id": "42"}


class TestTokenRoundTrip:
    def test_verify_returns_claims(self):
        token = create_token(CLAIMS, secret="k")
        assert verify_token(token, secret="k") == CLAIMS

    def test_expiry_is_fifteen_minutes(self):
        token = create_token(CLAIMS, secret="k", now=1_000)
        payload = json.loads(b64decode(token.split(".")[0]))
        assert TOKEN_EXPIRY_SECONDS == 900
        assert payload["iat"] == 1_000
        assert payload["exp"] == 1_900

    def test_uses_configured_secret_by_default(self):
        token = create_token(CLAIMS)
        assert verify_token(token) == CLAIMS


class TestTokenFailures:
    def test_wrong_secret(self):
        token = create_token(CLAIMS, secret="k")
        with pytest.raises(InvalidSignatureError):
            verify_token(token, secret="other")

    def test_tampered_payload(self):
        token = create_token(CLAIMS, secret="k")
        _, sig = token.split(".")
        forged = dict(CLAIMS, username="mallory")
        raw = json.dumps({"user": forged, "iat": 0, "exp": 2 ** 40}).encode()
        with pytest.raises(InvalidSignatureError):
            verify_token(b64encode(raw).decode() + "." + sig, secret="k")

    def test_expired(self):
        issued = time.time() - TOKEN_EXPIRY_SECONDS - 60
        token = create_token(CLAIMS, secret="k", now=issued)
        with pytest.raises(TokenExpiredError):
            verify_token(token, secret="k")

    def test_still_valid_just_before_expiry(self):
        token = create_token(CLAIMS, secret="k", now=1_000)
        assert verify_token(token, secret="k", now=1_000 + TOKEN_EXPIRY_SECONDS - 1) == CLAIMS

    def test_signature_checked_before_expiry(self):
        token = create_token(CLAIMS, secret="k", now=0)
        with pytest.raises(InvalidSignatureError):
            verify_token(token, secret="other")

    @pytest.mark.parametrize("token", ["", "abc", "a.b.c", "!!!.deadbeef", ".sig"])
    def test_malformed(self, token):
        with pytest.raises(MalformedTokenError):
            verify_token(token, secret="k")

    def test_all_failures_share_base_class(self):
        for cls in (MalformedTokenError, InvalidSignatureError, TokenExpiredError):
            assert issubclass(cls, TokenError)
