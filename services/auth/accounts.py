"""Registration and login flows over the credential store."""

import logging
import time
from typing import Callable

from starlette.concurrency import run_in_threadpool

from .exceptions import (
    AuthenticationFailed,
    DuplicateAccount,
    InvalidEmail,
    TokenSigningFailed,
    WeakPassword,
)
from .security import check_password, create_token, hash_password
from .store import CredentialStore

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6
REGISTERED_MESSAGE = "User registered successfully"


def normalize_email(email: str) -> str:
    return email.strip().lower()


def validate_registration(email: str, password: str) -> None:
    """Raise the first failing rule: email shape, then password length."""
    if not email or "@" not in email:
        raise InvalidEmail()
    if len(password) < MIN_PASSWORD_LENGTH:
        raise WeakPassword()


async def register_account(store: CredentialStore, email: str, password: str) -> str:
    """Create an account and return the confirmation message.

    The store is only touched once every rule has passed. Hashing happens
    before taking the lock; the duplicate check and insert happen together
    under it.
    """
    email = normalize_email(email)
    validate_registration(email, password)

    password_hash = await run_in_threadpool(hash_password, password)

    async with store.lock:
        if store.contains(email):
            logger.info("Registration rejected, duplicate account: %s", email)
            raise DuplicateAccount()
        store.insert(email, password_hash)

    logger.info("Registered account %s", email)
    return REGISTERED_MESSAGE


async def authenticate(
    store: CredentialStore,
    email: str,
    password: str,
    secret_key: str,
    clock: Callable[[], float] = time.time,
) -> str:
    """Verify credentials and return a signed token.

    Unknown accounts and wrong passwords raise the same AuthenticationFailed.
    """
    email = normalize_email(email)

    async with store.lock:
        stored_hash = store.get(email)

    # Stored hashes are write-once; verification runs outside the lock.
    if not await run_in_threadpool(check_password, password, stored_hash):
        logger.warning("Login failed for %s", email)
        raise AuthenticationFailed()

    try:
        token = create_token(email, secret_key, clock=clock)
    except TokenSigningFailed:
        logger.exception("Token signing failed for %s", email)
        raise
    logger.info("Login successful for %s", email)
    return token
