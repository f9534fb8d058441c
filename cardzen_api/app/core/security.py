"""
Security helpers for password hashing and token authentication.

This module implements a lightweight JSON Web Token (JWT) mechanism
using HMAC‑SHA256 signatures and base64url encoding.  Tokens embed the
user's ``id``, ``username`` and ``email`` plus an expiration timestamp
(``exp``).  The application's signing secret is used to sign and
verify the token.  Passwords are hashed with salted PBKDF2‑HMAC‑SHA256;
the iteration count is stored alongside the salt so the work factor can
be raised without invalidating existing hashes.
"""

import base64
import hashlib
import hmac
import json
import os
import time
from typing import Any, Dict, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .exceptions import AuthInvalidError, AuthRequiredError


DEFAULT_ITERATIONS = 100_000

TOKEN_CLAIMS = ("id", "username", "email")


def _b64_url_encode(data: bytes) -> str:
    """Base64‑url encode bytes without padding."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("utf-8")


def _b64_url_decode(data: str) -> bytes:
    """Decode base64‑url encoded string, adding padding if necessary."""
    padding = '=' * (-len(data) % 4)
    return base64.urlsafe_b64decode(data + padding)


def _sign(message: bytes, secret: str) -> bytes:
    """Compute HMAC‑SHA256 signature of a message using the given secret."""
    return hmac.new(secret.encode("utf-8"), message, hashlib.sha256).digest()


def create_access_token(data: Dict[str, Any], secret_key: str, expires_in: int = 3600) -> str:
    """Create a signed JWT token with the given payload.

    The payload is extended with an ``exp`` field representing the
    expiration time as a UNIX timestamp.  A standard header with
    algorithm HS256 is used.  The token is a string of the form
    ``header.payload.signature``, where each part is base64url
    encoded.  Clients send it as ``Authorization: Bearer <token>``.

    Parameters
    ----------
    data : dict
        Claims to embed in the token (``id``, ``username``, ``email``).
    secret_key : str
        HMAC signing secret.
    expires_in : int
        Lifetime of the token in seconds.  Defaults to one hour.

    Returns
    -------
    str
        A signed JWT token.
    """
    to_encode = data.copy()
    to_encode["exp"] = int(time.time()) + expires_in
    header = {"alg": "HS256", "typ": "JWT"}
    header_b64 = _b64_url_encode(json.dumps(header, separators=(',', ':')).encode("utf-8"))
    payload_b64 = _b64_url_encode(json.dumps(to_encode, separators=(',', ':')).encode("utf-8"))
    signing_input = f"{header_b64}.{payload_b64}".encode("utf-8")
    signature_b64 = _b64_url_encode(_sign(signing_input, secret_key))
    return f"{header_b64}.{payload_b64}.{signature_b64}"


def decode_access_token(token: str, secret_key: str) -> Optional[Dict[str, Any]]:
    """Verify and decode a JWT token.

    Splits the token into header, payload and signature, verifies the
    HMAC signature and checks the ``exp`` field.  If validation
    succeeds, returns the payload dictionary; otherwise returns
    ``None``.
    """
    try:
        parts = token.split('.')
        if len(parts) != 3:
            return None
        header_b64, payload_b64, signature_b64 = parts
        signing_input = f"{header_b64}.{payload_b64}".encode("utf-8")
        expected_sig = _sign(signing_input, secret_key)
        actual_sig = _b64_url_decode(signature_b64)
        # Constant‑time comparison to prevent timing attacks
        if not hmac.compare_digest(expected_sig, actual_sig):
            return None
        data = json.loads(_b64_url_decode(payload_b64).decode("utf-8"))
        if not isinstance(data, dict):
            return None
        if data.get("exp") is None or int(data["exp"]) < int(time.time()):
            return None
        return data
    except (ValueError, TypeError):
        return None


security = HTTPBearer(auto_error=False)


def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Dict[str, Any]:
    """Dependency that returns the authenticated caller.

    A missing ``Authorization: Bearer`` header raises
    ``AuthRequiredError`` (401) and the route handler is never called.
    A token with a bad signature, a malformed body or a past ``exp``
    raises ``AuthInvalidError`` (403).  On success the ``id``,
    ``username`` and ``email`` claims are returned.
    """
    if credentials is None or not credentials.credentials:
        raise AuthRequiredError("Token required")
    payload = decode_access_token(credentials.credentials, request.app.state.secret_key)
    if not payload or payload.get("id") is None:
        raise AuthInvalidError("Invalid or expired token")
    return {claim: payload.get(claim) for claim in TOKEN_CLAIMS}


def hash_password(password: str, iterations: int = DEFAULT_ITERATIONS) -> str:
    """Hash a password using PBKDF2‑HMAC with SHA‑256.

    A 16‑byte random salt is generated for each password.  The
    resulting string holds the iteration count, the salt and the hash
    separated by ``$`` (salt and hash in hex).
    """
    salt = os.urandom(16)
    dk = hashlib.pbkdf2_hmac('sha256', password.encode('utf-8'), salt, iterations)
    return f"{iterations}${salt.hex()}${dk.hex()}"


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain password against a stored ``iterations$salt$hash`` string.

    Recomputes the PBKDF2‑HMAC digest and compares it using
    constant‑time comparison.  Malformed stored values never match.
    """
    try:
        iterations_str, salt_hex, hash_hex = hashed_password.split('$', 2)
        salt = bytes.fromhex(salt_hex)
        stored_hash = bytes.fromhex(hash_hex)
        dk = hashlib.pbkdf2_hmac(
            'sha256', plain_password.encode('utf-8'), salt, int(iterations_str)
        )
        return hmac.compare_digest(dk, stored_hash)
    except (ValueError, TypeError, AttributeError):
        return False
