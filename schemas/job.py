from decimal import Decimal
from typing import Annotated

from pydantic import ConfigDict, Field, StringConstraints, model_validator

from schemas.commons import CamelModel, CompanyHandle, Count, JobId, Title

Equity = Annotated[Decimal, Field(ge=0, le=1, description="지분 비율 (0 ~ 1)")]


class JobCreateRequest(CamelModel):
    model_config = ConfigDict(extra='forbid')

    title: Title
    salary: Count | None = None
    equity: Equity | None = None
    company_handle: CompanyHandle


class JobUpdateRequest(CamelModel):
    """companyHandle, id 는 변경 불가 (extra='forbid')"""
    model_config = ConfigDict(extra='forbid')

    title: Title | None = None
    salary: Count | None = None
    equity: Equity | None = None

    @model_validator(mode='after')
    def check_at_least_one_field(self):
        if not self.model_fields_set:
            raise ValueError("At least one field is required")

        if "title" in self.model_fields_set and self.title is None:
            raise ValueError("title cannot be null")
        return self


class Job(CamelModel):
    id: JobId
    title: Title
    salary: Count | None = None
    equity: Decimal | None = None
    company_handle: CompanyHandle


class CompanyJob(CamelModel):
    """회사 상세에 포함되는 채용공고"""
    id: JobId
    title: Title
    salary: Count | None = None
    equity: Decimal | None = None


class JobSearchQuery(CamelModel):
    model_config = ConfigDict(extra='forbid')

    title: Annotated[
        Annotated[str, StringConstraints(min_length=1)] | None,
        Field(description="제목에 포함된 검색어 (대소문자 무시)")
    ] = None
    min_salary: Count | None = None
    has_equity: bool | None = None


class JobResponse(CamelModel):
    job: Job


class JobListResponse(CamelModel):
    jobs: list[Job]
