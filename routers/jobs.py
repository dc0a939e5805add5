from fastapi import APIRouter, Depends, status

from repositories import jobs as jobs_repo
from schemas.commons import DeletedResponse, JobId
from schemas.job import (
    JobCreateRequest,
    JobUpdateRequest,
    JobSearchQuery,
    JobResponse,
    JobListResponse,
)
from utils.auth import ensure_admin
from utils.database import CurrentConnection
from utils.query import parse_query

router = APIRouter(
    prefix="/jobs",
    tags=["JOBS"],
)


@router.post("", response_model=JobResponse, status_code=status.HTTP_201_CREATED,
             dependencies=[Depends(ensure_admin)])
async def create_job(job: JobCreateRequest, conn: CurrentConnection) -> JobResponse:
    """채용공고 생성 (관리자)"""
    new_job = await jobs_repo.create(conn, job.model_dump(by_alias=True))
    return JobResponse(job=new_job)


@router.get("", response_model=JobListResponse)
async def get_jobs(
        conn: CurrentConnection,
        query: JobSearchQuery = Depends(parse_query(JobSearchQuery)),
) -> JobListResponse:
    """
    채용공고 목록 조회
    - title: 제목 검색
    - minSalary: 최소 연봉
    - hasEquity: 지분 있는 공고만
    """
    jobs = await jobs_repo.find_all(
        conn,
        title=query.title,
        min_salary=query.min_salary,
        has_equity=query.has_equity,
    )
    return JobListResponse(jobs=jobs)


@router.get("/{job_id}", response_model=JobResponse)
async def get_job(job_id: JobId, conn: CurrentConnection) -> JobResponse:
    """채용공고 상세 조회"""
    job = await jobs_repo.get(conn, job_id)
    return JobResponse(job=job)


@router.patch("/{job_id}", response_model=JobResponse,
              dependencies=[Depends(ensure_admin)])
async def update_job(
        job_id: JobId, update_data: JobUpdateRequest, conn: CurrentConnection) -> JobResponse:
    """채용공고 수정 (관리자)"""
    job = await jobs_repo.update(conn, job_id, update_data.to_update_data())
    return JobResponse(job=job)


@router.delete("/{job_id}", response_model=DeletedResponse,
               dependencies=[Depends(ensure_admin)])
async def delete_job(job_id: JobId, conn: CurrentConnection) -> DeletedResponse:
    """채용공고 삭제 (관리자)"""
    await jobs_repo.remove(conn, job_id)
    return DeletedResponse(deleted=job_id)
