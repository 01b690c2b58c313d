"""Minimal identity provider: password accounts and guest sign-in."""

from loguru import logger

from .auth import hash_password, password_matches
from .errors import InvalidCredentials, ValidationError

MIN_PASSWORD_LENGTH = 8


def normalize_email(email):
    if not isinstance(email, str):
        return ""
    return email.strip().lower()


def _password(value):
    return value if isinstance(value, str) else ""


def register(store, email, password):
    email = normalize_email(email)
    password = _password(password)
    if not email or not password:
        raise ValidationError("Email and password are required")
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
    with store.transaction() as tx:
        user = tx.insert_user(email, hash_password(password))
    logger.info("Registered user {}", user.id)
    return user


def login(store, email, password):
    email = normalize_email(email)
    password = _password(password)
    if not email or not password:
        raise ValidationError("Email and password are required")
    with store.transaction() as tx:
        user = tx.find_user_by_email(email)
    if user is None or not password_matches(user.password_hash, password):
        raise InvalidCredentials()
    return user


def create_guest(store):
    with store.transaction() as tx:
        user = tx.insert_user(None, None, is_guest=True)
    logger.info("Created guest user {}", user.id)
    return user


def get_user(store, user_id):
    if user_id is None:
        return None
    with store.transaction() as tx:
        return tx.get_user(user_id)
