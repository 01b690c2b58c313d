from datetime import datetime, timedelta, timezone

import jwt as pyjwt
from loguru import logger
from werkzeug.security import check_password_hash, generate_password_hash

ALGORITHM = "HS256"


def hash_password(password):
    return generate_password_hash(password)


def password_matches(password_hash, password):
    return bool(password_hash) and check_password_hash(password_hash, password)


def create_token(user_id, secret_key, expiry_days):
    payload = {
        "user_id": user_id,
        "exp": datetime.now(timezone.utc) + timedelta(days=expiry_days),
    }
    return pyjwt.encode(payload, secret_key, algorithm=ALGORITHM)


def resolve_caller(auth_header, secret_key):
    """Return the user id carried by a bearer token, or None.

    Missing, malformed, expired and forged tokens all resolve to no identity;
    callers decide whether that is an empty read or an Unauthenticated write.
    """
    auth_header = auth_header or ""
    if not auth_header.startswith("Bearer "):
        return None
    token = auth_header[7:]
    try:
        payload = pyjwt.decode(token, secret_key, algorithms=[ALGORITHM])
    except pyjwt.ExpiredSignatureError:
        logger.debug("Rejected expired token")
        return None
    except pyjwt.InvalidTokenError as e:
        logger.debug("Rejected invalid token: {}", e)
        return None
    return payload.get("user_id")
