from fastapi import APIRouter, Depends, status

from db.session import DBSession
from repositories import users as users_repo
from routers.auth import add_user
from schemas.commons import DeletedResponse, JobId, Username
from schemas.user import (
    User,
    UserCreateRequest,
    UserCreateResponse,
    UserUpdateRequest,
    UserResponse,
    UserDetailResponse,
    UserListResponse,
    AppliedResponse,
)
from utils.auth import create_token, ensure_admin, CorrectUserOrAdmin
from utils.database import CurrentConnection
from utils.errors import UnauthorizedError

router = APIRouter(
    prefix="/users",
    tags=["USERS"],
)


@router.post("", response_model=UserCreateResponse, status_code=status.HTTP_201_CREATED,
             dependencies=[Depends(ensure_admin)])
async def create_user(user: UserCreateRequest, db: DBSession) -> UserCreateResponse:
    """유저 생성 (관리자) - 관리자 계정 생성 가능"""
    new_user = await add_user(db, user, is_admin=user.is_admin)
    return UserCreateResponse(
        user=User.model_validate(new_user, from_attributes=True),
        token=create_token(new_user.username, new_user.is_admin),
    )


@router.get("", response_model=UserListResponse,
            dependencies=[Depends(ensure_admin)])
async def get_users(conn: CurrentConnection) -> UserListResponse:
    """전체 유저 목록 (관리자)"""
    users = await users_repo.find_all(conn)
    return UserListResponse(users=users)


@router.get("/{username}", response_model=UserDetailResponse)
async def get_user(username: Username, _: CorrectUserOrAdmin, conn: CurrentConnection) -> UserDetailResponse:
    """유저 상세 조회 (본인 또는 관리자)"""
    user = await users_repo.get(conn, username)
    return UserDetailResponse(user=user)


@router.patch("/{username}", response_model=UserResponse)
async def update_user(
        username: Username,
        auth_user: CorrectUserOrAdmin,
        update_data: UserUpdateRequest,
        conn: CurrentConnection,
) -> UserResponse:
    """유저 정보 수정 (본인 또는 관리자, isAdmin 변경은 관리자만)"""
    data = update_data.to_update_data()
    if "isAdmin" in data and not auth_user.is_admin:
        raise UnauthorizedError()

    user = await users_repo.update(conn, username, data)
    return UserResponse(user=user)


@router.delete("/{username}", response_model=DeletedResponse)
async def delete_user(username: Username, _: CorrectUserOrAdmin, conn: CurrentConnection) -> DeletedResponse:
    """유저 삭제 (본인 또는 관리자)"""
    await users_repo.remove(conn, username)
    return DeletedResponse(deleted=username)


@router.post("/{username}/jobs/{job_id}", response_model=AppliedResponse)
async def apply_to_job(
        username: Username, job_id: JobId, _: CorrectUserOrAdmin, conn: CurrentConnection) -> AppliedResponse:
    """채용공고 지원 (본인 또는 관리자)"""
    await users_repo.apply_to_job(conn, username, job_id)
    return AppliedResponse(applied=job_id)
