from typing import Annotated

from pydantic import AfterValidator, Field, BaseModel, ConfigDict, HttpUrl, StringConstraints, TypeAdapter, ValidationError
from pydantic.alias_generators import to_camel

Username = Annotated[
    str,
    StringConstraints(strip_whitespace=True, min_length=1, max_length=25),
    Field(description="사용자 아이디", examples=["testuser"]),
]

Handle = Annotated[
    str,
    StringConstraints(min_length=1, max_length=25, pattern=r"^[a-z0-9]+(-[a-z0-9]+)*$"),
    Field(description="회사 핸들", examples=["anderson-arias"]),
]

CompanyHandle = Annotated[str, StringConstraints(min_length=1, max_length=25)]

JobId = Annotated[int, Field(ge=1, description="채용공고 ID", examples=[1])]

Title = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
Name = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]

Count = Annotated[int, Field(ge=0)]

_http_url = TypeAdapter(HttpUrl)


def validate_url(url: str) -> str:
    """URL 형식만 검사하고 보낸 문자열 그대로 저장"""
    try:
        _http_url.validate_python(url)
    except ValidationError:
        raise ValueError("Invalid URL") from None
    return url


Url = Annotated[str, AfterValidator(validate_url)]


class CamelModel(BaseModel):
    """JSON 필드명은 camelCase, 파이썬 속성은 snake_case"""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_update_data(self) -> dict:
        """PATCH 요청에서 실제로 보낸 필드만 camelCase 키로 반환 (명시적 null 포함)"""
        return self.model_dump(by_alias=True, exclude_unset=True)


class DeletedResponse(BaseModel):
    deleted: str | int
