import hmac
import logging
from dataclasses import dataclass
from datetime import datetime, UTC, timedelta
from typing import Annotated

import bcrypt
import jwt
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from config import settings
from schemas.commons import Username
from utils.errors import UnauthorizedError

logger = logging.getLogger(__name__)

# Bearer 토큰 인증 스키마 (토큰 없으면 익명)
security = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class AuthUser:
    username: str
    is_admin: bool = False


def _prehash(password: str) -> bytes:
    """
    HMAC-SHA256으로 사전 해싱
    - bcrypt 72바이트 제한 우회
    - PEPPER로 password shucking 공격 방지
    """
    return hmac.new(
        key=settings.password_pepper.encode(),
        msg=password.encode(),
        digestmod="sha256"
    ).hexdigest().encode()


def hash_password(password: str) -> str:
    prehashed = _prehash(password)
    return bcrypt.hashpw(prehashed, bcrypt.gensalt()).decode()


# 타이밍 공격 방지용 더미 해시
DUMMY_HASH = hash_password("dummy_password_for_timing_attack_prevention")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    prehashed = _prehash(plain_password)
    try:
        return bcrypt.checkpw(prehashed, hashed_password.encode())
    except ValueError:
        logger.warning("Invalid hash format detected")
        return False


def create_token(username: str, is_admin: bool = False, expires_delta: timedelta | None = None) -> str:
    expire = datetime.now(UTC) + (expires_delta or timedelta(minutes=settings.access_token_expire_minutes))
    to_encode = {"sub": username, "is_admin": is_admin, "exp": expire}
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)


def decode_token(token: str) -> dict:
    """token decoding (만료/위조 토큰은 jwt.InvalidTokenError)"""
    return jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])


def get_current_user(
        credentials: HTTPAuthorizationCredentials | None = Depends(security)
) -> AuthUser | None:
    """토큰이 유효하면 AuthUser, 없거나 잘못된 토큰이면 None (익명)"""
    if credentials is None:
        return None

    try:
        payload = decode_token(credentials.credentials)
    except jwt.InvalidTokenError as e:
        logger.warning("Rejected bearer token: %s", e)
        return None

    username = payload.get("sub")
    if not username:
        return None
    return AuthUser(username=username, is_admin=bool(payload.get("is_admin", False)))


CurrentUser = Annotated[AuthUser | None, Depends(get_current_user)]


def ensure_admin(user: CurrentUser) -> AuthUser:
    if user is None or not user.is_admin:
        raise UnauthorizedError()
    return user


def ensure_correct_user_or_admin(username: Username, user: CurrentUser) -> AuthUser:
    """경로의 username 본인 또는 관리자만 허용"""
    if user is None or not (user.is_admin or user.username == username):
        raise UnauthorizedError()
    return user


AdminUser = Annotated[AuthUser, Depends(ensure_admin)]
CorrectUserOrAdmin = Annotated[AuthUser, Depends(ensure_correct_user_or_admin)]
