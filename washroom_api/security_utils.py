"""
Credentials for business accounts: bcrypt password hashes and the signed
session token returned by /businesses/login.
"""

import hmac
import logging
from typing import Any, Optional

from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer
from passlib.context import CryptContext

from .config import SECRET_KEY, SESSION_MAX_AGE_SECONDS

logger = logging.getLogger(__name__)

SESSION_SALT = "business-session"

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def _serializer() -> URLSafeTimedSerializer:
    return URLSafeTimedSerializer(SECRET_KEY, salt=SESSION_SALT)


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """False for a wrong password and for anything passlib cannot parse"""
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError) as e:
        logger.error(f"🔐 Unreadable password hash: {e}")
        return False


def is_bcrypt_hash(value: str) -> bool:
    """True for $2a$/$2b$/$2y$ hashes; plaintext legacy passwords are False"""
    if not value:
        return False
    return pwd_context.identify(value) == "bcrypt"


def create_session_token(data: dict[str, Any]) -> str:
    return _serializer().dumps(data)


def verify_session_token(
    token: str, max_age: int = SESSION_MAX_AGE_SECONDS
) -> Optional[dict[str, Any]]:
    """Payload of a token signed by create_session_token, or None once expired or tampered with"""
    try:
        return _serializer().loads(token, max_age=max_age)
    except SignatureExpired:
        logger.warning("🔐 Session token past its max age")
    except BadSignature:
        logger.warning("🔐 Session token signature mismatch")
    return None


def constant_time_compare(a: Optional[str], b: Optional[str]) -> bool:
    """hmac.compare_digest over UTF-8; an empty side never matches"""
    if not a or not b:
        return False
    return hmac.compare_digest(a.encode("utf-8"), b.encode("utf-8"))
