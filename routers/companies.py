from fastapi import APIRouter, Depends, status

from repositories import companies as companies_repo
from schemas.commons import CompanyHandle, DeletedResponse
from schemas.company import (
    CompanyCreateRequest,
    CompanyUpdateRequest,
    CompanySearchQuery,
    CompanyResponse,
    CompanyDetailResponse,
    CompanyListResponse,
)
from utils.auth import ensure_admin
from utils.database import CurrentConnection
from utils.query import parse_query

router = APIRouter(
    prefix="/companies",
    tags=["COMPANIES"],
)


@router.post("", response_model=CompanyResponse, status_code=status.HTTP_201_CREATED,
             dependencies=[Depends(ensure_admin)])
async def create_company(
        company: CompanyCreateRequest, conn: CurrentConnection) -> CompanyResponse:
    """회사 생성 (관리자)"""
    new_company = await companies_repo.create(conn, company.to_insert_data())
    return CompanyResponse(company=new_company)


@router.get("", response_model=CompanyListResponse)
async def get_companies(
        conn: CurrentConnection,
        query: CompanySearchQuery = Depends(parse_query(CompanySearchQuery)),
) -> CompanyListResponse:
    """
    회사 목록 조회
    - nameLike: 회사명 검색
    - minEmployees / maxEmployees: 직원 수 범위
    """
    companies = await companies_repo.find_all(
        conn,
        name_like=query.name_like,
        min_employees=query.min_employees,
        max_employees=query.max_employees,
    )
    return CompanyListResponse(companies=companies)


@router.get("/{handle}", response_model=CompanyDetailResponse)
async def get_company(handle: CompanyHandle, conn: CurrentConnection) -> CompanyDetailResponse:
    """회사 상세 조회 (채용공고 포함)"""
    company = await companies_repo.get(conn, handle)
    return CompanyDetailResponse(company=company)


@router.patch("/{handle}", response_model=CompanyResponse,
              dependencies=[Depends(ensure_admin)])
async def update_company(
        handle: CompanyHandle, update_data: CompanyUpdateRequest,
        conn: CurrentConnection) -> CompanyResponse:
    """회사 정보 수정 (관리자)"""
    company = await companies_repo.update(conn, handle, update_data.to_update_data())
    return CompanyResponse(company=company)


@router.delete("/{handle}", response_model=DeletedResponse,
               dependencies=[Depends(ensure_admin)])
async def delete_company(handle: CompanyHandle, conn: CurrentConnection) -> DeletedResponse:
    """회사 삭제 (관리자)"""
    await companies_repo.remove(conn, handle)
    return DeletedResponse(deleted=handle)
