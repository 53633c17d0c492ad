import asyncio

import jwt
import pytest

from services.auth.accounts import REGISTERED_MESSAGE, authenticate, normalize_email, register_account
from services.auth.exceptions import AuthenticationFailed, DuplicateAccount, InvalidEmail, WeakPassword
from services.auth.store import CredentialStore

SECRET = "test-secret-key-for-unit-tests-1234567890"


@pytest.fixture
def store():
    return CredentialStore()


def test_normalize_email():
    assert normalize_email("  Alice@Example.COM ") == "alice@example.com"


@pytest.mark.parametrize(
    "email, password, error",
    [
        ("", "secret1", InvalidEmail),
        ("bademail", "secret1", InvalidEmail),
        ("bademail", "ab", InvalidEmail),
        ("a@b.com", "ab12", WeakPassword),
        ("a@b.com", "", WeakPassword),
    ],
)
def test_register_validation_leaves_store_untouched(store, email, password, error):
    with pytest.raises(error):
        asyncio.run(register_account(store, email, password))
    assert len(store) == 0


def test_register_stores_hash_not_password(store):
    assert asyncio.run(register_account(store, "a@b.com", "secret1")) == REGISTERED_MESSAGE
    stored = store.get("a@b.com")
    assert stored and stored != "secret1"


def test_password_of_exactly_six_characters_is_accepted(store):
    asyncio.run(register_account(store, "a@b.com", "abcdef"))
    assert store.contains("a@b.com")


def test_duplicate_registration(store):
    asyncio.run(register_account(store, "a@b.com", "secret1"))
    with pytest.raises(DuplicateAccount) as exc:
        asyncio.run(register_account(store, "A@B.COM", "secret2"))
    assert exc.value.status_code == 409


def test_concurrent_duplicate_registrations_create_one_account(store):
    async def run():
        return await asyncio.gather(
            *(register_account(store, "a@b.com", "secret1") for _ in range(3)),
            return_exceptions=True,
        )

    results = asyncio.run(run())
    assert results.count(REGISTERED_MESSAGE) == 1
    assert sum(isinstance(r, DuplicateAccount) for r in results) == 2
    assert len(store) == 1


def test_authenticate_issues_token(store):
    asyncio.run(register_account(store, "a@b.com", "secret1"))
    token = asyncio.run(authenticate(store, "a@b.com", "secret1", SECRET, clock=lambda: 2_000_000_000))
    claims = jwt.decode(token, SECRET, algorithms=["HS256"], options={"verify_exp": False})
    assert claims == {"sub": "a@b.com", "iat": 2_000_000_000, "exp": 2_000_003_600}


def test_authenticate_failures_are_indistinguishable(store):
    asyncio.run(register_account(store, "a@b.com", "secret1"))

    with pytest.raises(AuthenticationFailed) as unknown:
        asyncio.run(authenticate(store, "ghost@b.com", "secret1", SECRET))
    with pytest.raises(AuthenticationFailed) as wrong:
        asyncio.run(authenticate(store, "a@b.com", "wrong!!", SECRET))

    assert unknown.value.status_code == wrong.value.status_code == 401
    assert unknown.value.detail == wrong.value.detail
