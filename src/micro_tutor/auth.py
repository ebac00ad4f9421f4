"""Password hashing and account signup/login."""

import hashlib
import hmac
import secrets
import time

import structlog

from micro_tutor.models.account import Account, LoginRequest, Plan, SignupRequest
from micro_tutor.storage.accounts import AccountStore, SessionRegistry

logger = structlog.get_logger()

_PBKDF2_DIGEST = "sha256"
_PBKDF2_ITERATIONS = 200_000
MIN_PASSWORD_LENGTH = 6


class AuthError(Exception):
    """Signup or login rejected. ``status_code`` is the HTTP status to report."""

    def __init__(self, detail: str, status_code: int = 400):
        super().__init__(detail)
        self.detail = detail
        self.status_code = status_code


def _generate_salt() -> str:
    return secrets.token_bytes(16).hex()


def _pbkdf2_hash(password: str, salt_hex: str) -> str:
    return hashlib.pbkdf2_hmac(
        _PBKDF2_DIGEST,
        password.encode("utf-8"),
        bytes.fromhex(salt_hex),
        _PBKDF2_ITERATIONS,
    ).hex()


def hash_password(password: str) -> tuple[str, str]:
    salt_hex = _generate_salt()
    return _pbkdf2_hash(password, salt_hex), salt_hex


def verify_password(password: str, stored_hash: str, stored_salt: str) -> bool:
    try:
        derived = _pbkdf2_hash(password, stored_salt)
    except ValueError:
        return False
    return hmac.compare_digest(stored_hash, derived)


def normalize_email(email: str) -> str:
    return email.strip().lower()


def signup(body: SignupRequest, accounts: AccountStore, sessions: SessionRegistry) -> tuple[Account, str]:
    """Create an account and open a session for it.

    Raises:
        AuthError: Missing fields, short password or an already registered email.
    """
    if not (body.full_name and body.email and body.password):
        raise AuthError("All fields are required")
    if len(body.password) < MIN_PASSWORD_LENGTH:
        raise AuthError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")

    email = normalize_email(body.email)
    pw_hash, pw_salt = hash_password(body.password)
    account = Account(
        id=f"user_{time.time_ns()}",
        full_name=body.full_name.strip(),
        email=email,
        pw_hash=pw_hash,
        pw_salt=pw_salt,
        plan=body.plan or Plan.FREE,
    )
    if not accounts.add(account):
        raise AuthError(
            "Email already registered. Please use a different email or try logging in."
        )

    logger.info("user_signed_up", user_id=account.id, plan=account.plan.value)
    return account, sessions.open(account.id)


def login(body: LoginRequest, accounts: AccountStore, sessions: SessionRegistry) -> tuple[Account, str]:
    """Check credentials and open a session.

    Raises:
        AuthError: Unknown email or wrong password (401).
    """
    account = accounts.get(normalize_email(body.email))
    if account is None or not verify_password(body.password, account.pw_hash, account.pw_salt):
        logger.info("login_failed")
        raise AuthError("Invalid email or password", status_code=401)
    return account, sessions.open(account.id)
