"""
Password hashing, credential generation and the access-control gateway.

Session tokens are opaque strings of the form ``mock-token-<random>``.
They are issued at registration and are only ever checked for that
prefix: no lookup, signature or expiry is involved, and the acting
user is whatever email the caller puts in the payload.  Admin access
is checked separately against the static admin list, either by
credential pair (login) or by exact token match (fee lookup).

Passwords are hashed with PBKDF2-HMAC-SHA256 and a random salt.
"""

import hashlib
import hmac
import os
import secrets
import string
from typing import Any, Dict, Iterable, Optional

from .errors import AuthError, ForbiddenError

TOKEN_PREFIX = "mock-token-"
ADDRESS_PREFIX = "0x"

_PBKDF2_ITERATIONS = 100_000
_TOKEN_ALPHABET = string.ascii_lowercase + string.digits


def hash_password(password: str) -> str:
    """Hash a password using PBKDF2-HMAC with SHA-256.

    A 16-byte random salt is generated for each password.  The result
    holds the salt and the digest in hex, separated by ``$``.
    """
    salt = os.urandom(16)
    dk = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, _PBKDF2_ITERATIONS)
    return f"{salt.hex()}${dk.hex()}"


def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    """Check a plain password against a ``salt$hash`` string.

    Returns False for anything that is not a well-formed hash rather
    than raising, so a corrupt record simply fails to authenticate.
    """
    if not hashed_password or "$" not in hashed_password:
        return False
    salt_hex, hash_hex = hashed_password.split("$", 1)
    try:
        salt = bytes.fromhex(salt_hex)
        stored_hash = bytes.fromhex(hash_hex)
    except ValueError:
        return False
    dk = hashlib.pbkdf2_hmac("sha256", plain_password.encode("utf-8"), salt, _PBKDF2_ITERATIONS)
    return hmac.compare_digest(dk, stored_hash)


def generate_session_token() -> str:
    """Return a fresh ``mock-token-`` string."""
    suffix = "".join(secrets.choice(_TOKEN_ALPHABET) for _ in range(11))
    return TOKEN_PREFIX + suffix


def generate_address() -> str:
    """Return a pseudo wallet address such as ``0x3fa94c1b2d07e8``."""
    return ADDRESS_PREFIX + secrets.token_hex(7)


# ---------------------------------------------------------------------------
# Access-control gateway
# ---------------------------------------------------------------------------

def is_session_token(token: Optional[str]) -> bool:
    """True when ``token`` is non-empty and carries the session prefix.

    This is a format check only.  Any well-formed token may act on
    behalf of any email.
    """
    return bool(token) and token.startswith(TOKEN_PREFIX)


def require_session_token(token: Optional[str]) -> str:
    """Return ``token`` or raise ``AuthError`` when it is not a session token."""
    if not is_session_token(token):
        raise AuthError("Unauthorized")
    return token


def _looks_hashed(value: str) -> bool:
    salt_hex, sep, hash_hex = value.partition("$")
    if not sep or len(salt_hex) != 32 or not hash_hex:
        return False
    return all(c in string.hexdigits for c in salt_hex + hash_hex)


def _admin_password_matches(stored: Optional[str], supplied: str) -> bool:
    if not stored:
        return False
    if _looks_hashed(stored):
        return verify_password(supplied, stored)
    return hmac.compare_digest(stored.encode("utf-8"), supplied.encode("utf-8"))


def authenticate_admin(admins: Iterable[Dict[str, Any]], email: str, password: str) -> Dict[str, Any]:
    """Match a credential pair against the admin list.

    The email is trimmed and compared case-insensitively; the password
    is trimmed and compared exactly (or verified, when the stored value
    is a salted hash).  Raises ``AuthError`` when nothing matches.
    """
    email_trimmed = email.strip().lower()
    password_trimmed = password.strip()
    for admin in admins:
        stored_email = (admin.get("email") or "").lower()
        if stored_email == email_trimmed and _admin_password_matches(admin.get("password"), password_trimmed):
            return {"email": admin["email"], "isAdmin": True}
    raise AuthError("Invalid admin credentials")


def require_admin_token(admins: Iterable[Dict[str, Any]], token: Optional[str]) -> Dict[str, Any]:
    """Return the admin whose stored token equals ``token`` exactly."""
    if token:
        for admin in admins:
            if admin.get("token") == token:
                return admin
    raise ForbiddenError("Unauthorized")
