from typing import Annotated

from pydantic import ConfigDict, Field, StringConstraints, model_validator

from schemas.commons import CamelModel, CompanyHandle, Count, Handle, Name, Url
from schemas.job import CompanyJob


class CompanyCreateRequest(CamelModel):
    model_config = ConfigDict(extra='forbid')

    handle: Handle
    name: Name
    description: str
    num_employees: Count | None = None
    logo_url: Url | None = None

    def to_insert_data(self) -> dict:
        return self.model_dump(by_alias=True)


class CompanyUpdateRequest(CamelModel):
    """handle 은 변경 불가"""
    model_config = ConfigDict(extra='forbid')

    name: Name | None = None
    description: str | None = None
    num_employees: Count | None = None
    logo_url: Url | None = None

    @model_validator(mode='after')
    def check_at_least_one_field(self):
        if not self.model_fields_set:
            raise ValueError("At least one field is required")

        for field in ("name", "description"):
            if field in self.model_fields_set and getattr(self, field) is None:
                raise ValueError(f"{field} cannot be null")
        return self


class CompanySearchQuery(CamelModel):
    model_config = ConfigDict(extra='forbid')

    name_like: Annotated[
        Annotated[str, StringConstraints(min_length=1)] | None,
        Field(description="회사명에 포함된 검색어 (대소문자 무시)")
    ] = None
    min_employees: Count | None = None
    max_employees: Count | None = None

    @model_validator(mode='after')
    def check_employee_range(self):
        if (
            self.min_employees is not None
            and self.max_employees is not None
            and self.min_employees > self.max_employees
        ):
            raise ValueError("minEmployees cannot be greater than maxEmployees")
        return self


class Company(CamelModel):
    handle: CompanyHandle
    name: Name
    description: str
    num_employees: Count | None = None
    logo_url: str | None = None


class CompanyDetail(Company):
    jobs: list[CompanyJob] = []


class CompanyResponse(CamelModel):
    company: Company


class CompanyDetailResponse(CamelModel):
    company: CompanyDetail


class CompanyListResponse(CamelModel):
    companies: list[Company]
