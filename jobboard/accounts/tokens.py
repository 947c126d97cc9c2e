"""Bearer tokens for the JSON API.

A token is a salted, timestamped signature (``django.core.signing``) over the
user's id and role, so verifying one needs no database round trip.
"""
from __future__ import annotations

from django.conf import settings
from django.core import signing


def issue_token(user) -> str:
    return signing.dumps({"id": user.pk, "role": user.role}, salt=settings.AUTH_TOKEN_SALT)


def verify_token(token: str) -> dict:
    """Return the token claims; raises ``signing.BadSignature`` (or its
    ``SignatureExpired`` subclass) for tampered or stale tokens."""
    claims = signing.loads(token, salt=settings.AUTH_TOKEN_SALT, max_age=settings.AUTH_TOKEN_MAX_AGE)
    if not isinstance(claims, dict) or "id" not in claims or "role" not in claims:
        raise signing.BadSignature("Token payload is incomplete")
    return claims
