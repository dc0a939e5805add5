import re
from typing import Annotated

from pydantic import BaseModel, ConfigDict, EmailStr, StringConstraints, AfterValidator, model_validator

from schemas.commons import CamelModel, JobId, Name, Username

SPECIAL_CHARS = r"!\"#$%&'()*+,\-./:;<=>?@\[₩\]\^_`{|}~"
_RE_LETTER = re.compile(r"[A-Za-z]")
_RE_DIGIT_OR_SPECIAL = re.compile(rf"[\d{SPECIAL_CHARS}]")


def validate_password(password: str) -> str:
    if not _RE_LETTER.search(password):
        raise ValueError("Password must contain a letter")
    if not _RE_DIGIT_OR_SPECIAL.search(password):
        raise ValueError("Password must contain a digit or special character")
    return password


Password = Annotated[
    str,
    StringConstraints(
        min_length=5,
        max_length=20,
    ),
    AfterValidator(validate_password),
]


class UserRegisterRequest(CamelModel):
    model_config = ConfigDict(extra='forbid')

    username: Username
    password: Password
    first_name: Name
    last_name: Name
    email: EmailStr


class UserCreateRequest(UserRegisterRequest):
    """관리자가 생성하는 경우 is_admin 지정 가능"""
    is_admin: bool = False


class UserLoginRequest(BaseModel):
    model_config = ConfigDict(extra='forbid')

    username: Username
    password: str


class TokenResponse(BaseModel):
    token: str


class User(CamelModel):
    username: Username
    first_name: str
    last_name: str
    email: str
    is_admin: bool = False


class UserDetail(User):
    jobs: list[JobId] = []


class UserUpdateRequest(CamelModel):
    model_config = ConfigDict(extra='forbid')

    first_name: Name | None = None
    last_name: Name | None = None
    email: EmailStr | None = None
    password: Password | None = None
    is_admin: bool | None = None

    @model_validator(mode='after')
    def check_at_least_one_field(self):
        """
        PATCH 요청에서 "미전송" vs "명시적 null 전송"을 구분하기 위해
        사용자가 실제로 보낸 필드 집합(model_fields_set)을 기준으로 검사
        """
        if not self.model_fields_set:
            raise ValueError("At least one field is required")

        for field in self.model_fields_set:
            if getattr(self, field) is None:
                raise ValueError(f"{field} cannot be null")
        return self


class UserResponse(CamelModel):
    user: User


class UserDetailResponse(CamelModel):
    user: UserDetail


class UserListResponse(CamelModel):
    users: list[User]


class UserCreateResponse(CamelModel):
    user: User
    token: str


class AppliedResponse(BaseModel):
    applied: JobId
