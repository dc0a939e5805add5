import logging

from fastapi import APIRouter, status
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from db.models.user import User
from db.session import DBSession
from schemas.user import UserRegisterRequest, UserLoginRequest, TokenResponse
from utils.auth import hash_password, verify_password, create_token, DUMMY_HASH
from utils.errors import BadRequestError, UnauthorizedError

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/auth",
    tags=["AUTH"],
)


async def add_user(db: DBSession, user: UserRegisterRequest, is_admin: bool = False) -> User:
    """유저 저장 (username 중복 시 400)"""
    new_user = User(
        username=user.username,
        password=hash_password(user.password),
        first_name=user.first_name,
        last_name=user.last_name,
        email=user.email,
        is_admin=is_admin,
    )
    db.add(new_user)

    try:
        await db.flush()
    except IntegrityError:
        raise BadRequestError(f"Duplicate username: {user.username}")

    # 토큰 발급 전에 commit
    await db.commit()
    return new_user


@router.post("/token", response_model=TokenResponse)
async def get_auth_token(user: UserLoginRequest, db: DBSession) -> TokenResponse:
    """로그인 - username/password 확인 후 JWT 발급"""
    result = await db.execute(select(User).where(User.username == user.username))
    db_user = result.scalar_one_or_none()

    # 타이밍 공격 방지: 유저 존재 여부와 관계없이 항상 해시 비교 수행
    hashed_password = db_user.password if db_user else DUMMY_HASH
    is_password_correct = verify_password(user.password, hashed_password)

    if db_user is None or not is_password_correct:
        logger.info("Failed login attempt for %s", user.username)
        raise UnauthorizedError("Invalid username/password")

    return TokenResponse(token=create_token(db_user.username, db_user.is_admin))


@router.post("/register", response_model=TokenResponse,
             status_code=status.HTTP_201_CREATED)
async def register(user: UserRegisterRequest, db: DBSession) -> TokenResponse:
    """회원가입 - 일반 유저로 가입 후 JWT 발급"""
    new_user = await add_user(db, user)
    return TokenResponse(token=create_token(new_user.username, new_user.is_admin))
