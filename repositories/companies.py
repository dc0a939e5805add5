"""
Companies Repository.

companies 테이블 CRUD. 행은 camelCase 키 dict 로 반환한다.
"""
import logging
from typing import Any

import asyncpg

from utils.errors import BadRequestError, NotFoundError
from utils.sql import sql_for_partial_update, sql_for_filters

logger = logging.getLogger(__name__)

COMPANY_COLUMNS = """
    handle,
    name,
    description,
    num_employees AS "numEmployees",
    logo_url AS "logoUrl"
"""

JS_TO_SQL = {
    "numEmployees": "num_employees",
    "logoUrl": "logo_url",
}


async def create(conn: asyncpg.Connection, data: dict[str, Any]) -> dict:
    """회사 생성. data: {handle, name, description, numEmployees, logoUrl}"""
    try:
        row = await conn.fetchrow(
            f"""
            INSERT INTO companies (handle, name, description, num_employees, logo_url)
            VALUES ($1, $2, $3, $4, $5)
            RETURNING {COMPANY_COLUMNS}
            """,
            data["handle"], data["name"], data["description"],
            data.get("numEmployees"), data.get("logoUrl"),
        )
    except asyncpg.UniqueViolationError:
        raise BadRequestError(f"Duplicate company: {data['handle']}")

    return dict(row)


async def find_all(
        conn: asyncpg.Connection,
        name_like: str | None = None,
        min_employees: int | None = None,
        max_employees: int | None = None,
) -> list[dict]:
    """회사 목록 (이름 순)"""
    conditions = []
    if name_like:
        conditions.append(("name ILIKE {}", f"%{name_like}%"))
    if min_employees:
        conditions.append(("num_employees >= {}", min_employees))
    if max_employees is not None:
        conditions.append(("num_employees <= {}", max_employees))

    where, values = sql_for_filters(conditions)
    rows = await conn.fetch(
        f"""
        SELECT {COMPANY_COLUMNS}
        FROM companies
        {where}
        ORDER BY name
        """,
        *values,
    )
    return [dict(row) for row in rows]


async def get(conn: asyncpg.Connection, handle: str) -> dict:
    """회사 상세 + 채용공고 목록"""
    row = await conn.fetchrow(
        f"""
        SELECT {COMPANY_COLUMNS}
        FROM companies
        WHERE handle = $1
        """,
        handle,
    )
    if row is None:
        raise NotFoundError(f"No company: {handle}")

    jobs = await conn.fetch(
        """
        SELECT id, title, salary, equity
        FROM jobs
        WHERE company_handle = $1
        ORDER BY id
        """,
        handle,
    )

    company = dict(row)
    company["jobs"] = [dict(job) for job in jobs]
    return company


async def update(conn: asyncpg.Connection, handle: str, data: dict[str, Any]) -> dict:
    """
    부분 수정 - data 에 포함된 필드만 변경

    data: {name, description, numEmployees, logoUrl} 중 일부
    """
    set_cols, values = sql_for_partial_update(data, JS_TO_SQL)
    handle_var_idx = f"${len(values) + 1}"

    try:
        row = await conn.fetchrow(
            f"""
            UPDATE companies
            SET {set_cols}
            WHERE handle = {handle_var_idx}
            RETURNING {COMPANY_COLUMNS}
            """,
            *values, handle,
        )
    except asyncpg.UniqueViolationError:
        raise BadRequestError(f"Duplicate company name: {data.get('name')}")

    if row is None:
        logger.info("Update skipped, company %s not found", handle)
        raise NotFoundError(f"No company: {handle}")
    return dict(row)


async def remove(conn: asyncpg.Connection, handle: str) -> None:
    row = await conn.fetchrow(
        "DELETE FROM companies WHERE handle = $1 RETURNING handle",
        handle,
    )
    if row is None:
        raise NotFoundError(f"No company: {handle}")
