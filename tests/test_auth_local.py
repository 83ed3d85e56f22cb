from __future__ import annotations

import pytest

from presale.auth.local import (
    AdminNotInitializedError,
    InvalidPasswordError,
    PasswordPolicyError,
    authenticate_admin,
    check_password_policy,
    hash_password,
    initialize_admin,
    verify_password,
)
from presale.auth.models import AdminRecord
from presale.storage.memory import InMemoryStore


def test_hash_password_uses_bcrypt_cost_10() -> None:
    h = hash_password("password123")
    assert h.startswith("$2b$10$")
    assert verify_password("password123", h)
    assert not verify_password("password124", h)


def test_hash_password_is_salted() -> None:
    assert hash_password("password123") != hash_password("password123")


def test_verify_password_invalid_hash_is_false() -> None:
    assert verify_password("password123", "not-a-bcrypt-hash") is False


@pytest.mark.parametrize("candidate", [None, "", "1234567", 12345678, ["password123"]])
def test_password_policy_rejects(candidate) -> None:
    with pytest.raises(PasswordPolicyError):
        check_password_policy(candidate)


def test_password_policy_byte_cap_only_when_requested() -> None:
    assert check_password_policy("x" * 80) == "x" * 80
    with pytest.raises(PasswordPolicyError, match="ADMIN_PASSWORD must be at most 72 bytes long"):
        check_password_policy("x" * 73, label="ADMIN_PASSWORD", max_bytes=72)
    assert check_password_policy("x" * 72, max_bytes=72) == "x" * 72


def test_password_policy_label_in_message() -> None:
    with pytest.raises(PasswordPolicyError, match="^Password must be at least 8 characters long$"):
        check_password_policy("short")
    with pytest.raises(PasswordPolicyError, match="^ADMIN_PASSWORD must be at least 8 characters long$"):
        check_password_policy(None, label="ADMIN_PASSWORD")


def test_authenticate_over_long_password_is_invalid_not_policy() -> None:
    store = InMemoryStore()
    initialize_admin(store, "x" * 72)

    # Same first 72 bytes as the stored password: must not match via truncation.
    with pytest.raises(InvalidPasswordError):
        authenticate_admin(store, "x" * 80)


def test_initialize_admin_validates_configured_password() -> None:
    store = InMemoryStore()
    with pytest.raises(PasswordPolicyError, match="ADMIN_PASSWORD must be at least 8 characters long"):
        initialize_admin(store, "seven77")
    with pytest.raises(PasswordPolicyError):
        initialize_admin(store, None)
    with pytest.raises(PasswordPolicyError):
        initialize_admin(store, "é" * 40)  # 80 bytes in UTF-8
    assert store.admin is None


def test_initialize_then_authenticate() -> None:
    store = InMemoryStore()
    record = initialize_admin(store, "password123")
    assert record.initialized is True

    assert authenticate_admin(store, "password123").password_hash == record.password_hash
    with pytest.raises(InvalidPasswordError):
        authenticate_admin(store, "password124")


def test_authenticate_requires_initialized_admin() -> None:
    store = InMemoryStore()
    with pytest.raises(AdminNotInitializedError):
        authenticate_admin(store, "password123")

    store.admin = AdminRecord(password_hash=hash_password("password123"), initialized=False)
    with pytest.raises(AdminNotInitializedError):
        authenticate_admin(store, "password123")


def test_authenticate_checks_policy_before_store() -> None:
    class _ExplodingStore(InMemoryStore):
        def get_admin(self):  # type: ignore[no-untyped-def]
            raise AssertionError("store should not be consulted")

    with pytest.raises(PasswordPolicyError):
        authenticate_admin(_ExplodingStore(), "short")
