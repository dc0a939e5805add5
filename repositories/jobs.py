"""
Jobs Repository.

jobs 테이블 CRUD. 행은 camelCase 키 dict 로 반환한다.
"""
import logging
from typing import Any

import asyncpg

from utils.errors import BadRequestError, NotFoundError
from utils.sql import sql_for_partial_update, sql_for_filters

logger = logging.getLogger(__name__)

JOB_COLUMNS = """
    id,
    title,
    salary,
    equity,
    company_handle AS "companyHandle"
"""

JS_TO_SQL = {
    "companyHandle": "company_handle",
}


async def create(conn: asyncpg.Connection, data: dict[str, Any]) -> dict:
    """채용공고 생성. data: {title, salary, equity, companyHandle}"""
    try:
        row = await conn.fetchrow(
            f"""
            INSERT INTO jobs (title, salary, equity, company_handle)
            VALUES ($1, $2, $3, $4)
            RETURNING {JOB_COLUMNS}
            """,
            data["title"], data.get("salary"), data.get("equity"), data["companyHandle"],
        )
    except asyncpg.ForeignKeyViolationError:
        raise BadRequestError(f"No company: {data['companyHandle']}")

    return dict(row)


async def find_all(
        conn: asyncpg.Connection,
        title: str | None = None,
        min_salary: int | None = None,
        has_equity: bool | None = None,
) -> list[dict]:
    """
    채용공고 목록 (id 순)
    - title: 제목 부분 일치 (대소문자 무시)
    - min_salary: salary >= min_salary (0 이면 조건 없음)
    - has_equity: True 이면 equity > 0 인 공고만
    """
    conditions = []
    if title:
        conditions.append(("title ILIKE {}", f"%{title}%"))
    if min_salary:
        conditions.append(("salary >= {}", min_salary))
    if has_equity:
        conditions.append(("equity > 0", None))

    where, values = sql_for_filters(conditions)
    rows = await conn.fetch(
        f"""
        SELECT {JOB_COLUMNS}
        FROM jobs
        {where}
        ORDER BY id
        """,
        *values,
    )
    return [dict(row) for row in rows]


async def get(conn: asyncpg.Connection, job_id: int) -> dict:
    row = await conn.fetchrow(
        f"""
        SELECT {JOB_COLUMNS}
        FROM jobs
        WHERE id = $1
        """,
        job_id,
    )
    if row is None:
        raise NotFoundError(f"No job with id: {job_id}")
    return dict(row)


async def update(conn: asyncpg.Connection, job_id: int, data: dict[str, Any]) -> dict:
    """
    부분 수정 - data 에 포함된 필드만 변경 (null 은 NULL 로 저장)

    data: {title, salary, equity} 중 일부
    """
    set_cols, values = sql_for_partial_update(data, JS_TO_SQL)
    id_var_idx = f"${len(values) + 1}"

    row = await conn.fetchrow(
        f"""
        UPDATE jobs
        SET {set_cols}
        WHERE id = {id_var_idx}
        RETURNING {JOB_COLUMNS}
        """,
        *values, job_id,
    )
    if row is None:
        logger.info("Update skipped, job %s not found", job_id)
        raise NotFoundError(f"No job with id: {job_id}")
    return dict(row)


async def remove(conn: asyncpg.Connection, job_id: int) -> None:
    row = await conn.fetchrow(
        "DELETE FROM jobs WHERE id = $1 RETURNING id",
        job_id,
    )
    if row is None:
        raise NotFoundError(f"No job with id: {job_id}")
