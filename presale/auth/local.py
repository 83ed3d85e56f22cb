from __future__ import annotations

import logging
from typing import Optional

import bcrypt

from presale.auth.models import AdminRecord
from presale.storage.base import PresaleStore

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 8
# bcrypt only looks at the first 72 bytes of its input and newer releases refuse longer input.
MAX_PASSWORD_BYTES = 72
BCRYPT_ROUNDS = 10


class PasswordPolicyError(ValueError):
    """Password rejected before hashing/verification (client error)."""


class AdminNotInitializedError(Exception):
    """No admin row exists yet, or it was never marked initialized."""


class InvalidPasswordError(Exception):
    """Supplied password does not match the stored hash."""


def check_password_policy(password: object, *, label: str = "Password", max_bytes: Optional[int] = None) -> str:
    """
    Validate a candidate admin password.

    `label` names the password in error messages. `max_bytes` caps the UTF-8 length and is
    only enforced where a new hash is about to be created.

    Returns the password unchanged; raises PasswordPolicyError otherwise.
    """
    if not isinstance(password, str) or len(password) < MIN_PASSWORD_LENGTH:
        raise PasswordPolicyError(f"{label} must be at least {MIN_PASSWORD_LENGTH} characters long")
    if max_bytes is not None and len(password.encode("utf-8")) > max_bytes:
        raise PasswordPolicyError(f"{label} must be at most {max_bytes} bytes long")
    return password


def hash_password(password: str) -> str:
    """
    Hash password with bcrypt (cost factor 10).

    Args:
        password: Plain text password

    Returns:
        Bcrypt hash string
    """
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """
    Verify password against bcrypt hash with constant-time comparison.

    Args:
        password: Plain text password
        password_hash: Bcrypt hash

    Returns:
        True if password matches, False otherwise
    """
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Invalid hash format (or over-long input) never matches
        return False


def initialize_admin(store: PresaleStore, password: str | None) -> AdminRecord:
    """
    Create or reset the singleton admin from the configured bootstrap password.

    Repeated calls overwrite the stored hash, so rotating ADMIN_PASSWORD and calling
    this again resets the admin password.

    Raises:
        PasswordPolicyError: If the configured password is missing or too short/long
    """
    check_password_policy(password, label="ADMIN_PASSWORD", max_bytes=MAX_PASSWORD_BYTES)

    record = store.upsert_admin(hash_password(password))
    logger.info("Admin password initialized")
    return record


def authenticate_admin(store: PresaleStore, password: object) -> AdminRecord:
    """
    Check a login attempt against the singleton admin.

    Raises:
        PasswordPolicyError: Password missing, not a string, or too short
        AdminNotInitializedError: init-admin has not run yet
        InvalidPasswordError: Hash comparison failed
    """
    candidate = check_password_policy(password)

    admin = store.get_admin()
    if admin is None or not admin.initialized:
        raise AdminNotInitializedError("Admin not initialized")

    # Stored hashes come from passwords of at most MAX_PASSWORD_BYTES, so longer input
    # never matches (some bcrypt releases would otherwise truncate it).
    if len(candidate.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise InvalidPasswordError("Invalid password")
    if not verify_password(candidate, admin.password_hash):
        raise InvalidPasswordError("Invalid password")
    return admin
