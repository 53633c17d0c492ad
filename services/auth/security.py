"""Password hashing and token signing."""

import base64
import hashlib
import time
from typing import Callable, Optional

import bcrypt
import jwt

from .config import BCRYPT_ROUNDS, TOKEN_EXPIRY_SECONDS
from .exceptions import InvalidToken, TokenSigningFailed

ALGORITHM = "HS256"


def _encode(password: str) -> bytes:
    # bcrypt reads at most 72 bytes; the digest keeps every byte significant.
    return base64.b64encode(hashlib.sha256(password.encode()).digest())


# Checked against when the account does not exist so both failure paths cost
# one bcrypt verification.
_DUMMY_HASH = bcrypt.hashpw(_encode("not-a-real-password"), bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode()


def hash_password(password: str, rounds: int = BCRYPT_ROUNDS) -> str:
    return bcrypt.hashpw(_encode(password), bcrypt.gensalt(rounds=rounds)).decode()


def check_password(password: str, hashed: Optional[str]) -> bool:
    """Verify ``password`` against a bcrypt hash.

    A missing or malformed hash is a failed check, never an error. When
    ``hashed`` is None a dummy hash is still checked to keep timing uniform.
    """
    target = hashed if hashed is not None else _DUMMY_HASH
    try:
        matched = bcrypt.checkpw(_encode(password), target.encode())
    except ValueError:
        return False
    return matched and hashed is not None


def build_claims(email: str, now: Optional[float] = None) -> dict:
    issued_at = int(now if now is not None else time.time())
    return {
        "sub": email,
        "iat": issued_at,
        "exp": issued_at + TOKEN_EXPIRY_SECONDS,
    }


def create_token(email: str, secret_key: str, clock: Callable[[], float] = time.time) -> str:
    payload = build_claims(email, now=clock())
    try:
        return jwt.encode(payload, secret_key, algorithm=ALGORITHM)
    except (jwt.PyJWTError, TypeError, ValueError) as e:
        raise TokenSigningFailed() from e


def decode_token(token: str, secret_key: str) -> dict:
    """Return the claims of a valid token. Accepts a ``Bearer `` prefix."""
    if token.startswith("Bearer "):
        token = token[7:]
    try:
        return jwt.decode(
            token,
            secret_key,
            algorithms=[ALGORITHM],
            options={"require": ["sub", "exp"]},
        )
    except jwt.ExpiredSignatureError:
        raise InvalidToken("Token expired")
    except jwt.InvalidTokenError:
        raise InvalidToken()
