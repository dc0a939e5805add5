"""
Users Repository.

회원가입/로그인은 routers/auth.py (SQLAlchemy 세션) 에서 처리하고
여기서는 조회/수정/삭제/지원만 다룬다.
"""
import logging
from typing import Any

import asyncpg

from utils.auth import hash_password
from utils.errors import ConflictError, NotFoundError
from utils.sql import sql_for_partial_update

logger = logging.getLogger(__name__)

USER_COLUMNS = """
    username,
    first_name AS "firstName",
    last_name AS "lastName",
    email,
    is_admin AS "isAdmin"
"""

JS_TO_SQL = {
    "firstName": "first_name",
    "lastName": "last_name",
    "isAdmin": "is_admin",
}


async def find_all(conn: asyncpg.Connection) -> list[dict]:
    rows = await conn.fetch(
        f"""
        SELECT {USER_COLUMNS}
        FROM users
        ORDER BY username
        """
    )
    return [dict(row) for row in rows]


async def get(conn: asyncpg.Connection, username: str) -> dict:
    """유저 정보 + 지원한 채용공고 id 목록"""
    row = await conn.fetchrow(
        f"""
        SELECT {USER_COLUMNS}
        FROM users
        WHERE username = $1
        """,
        username,
    )
    if row is None:
        raise NotFoundError(f"No user: {username}")

    applications = await conn.fetch(
        "SELECT job_id FROM applications WHERE username = $1 ORDER BY job_id",
        username,
    )

    user = dict(row)
    user["jobs"] = [a["job_id"] for a in applications]
    return user


async def update(conn: asyncpg.Connection, username: str, data: dict[str, Any]) -> dict:
    """
    부분 수정 - data 에 포함된 필드만 변경

    data: {firstName, lastName, email, password, isAdmin} 중 일부
    password 는 해싱 후 저장
    """
    if data.get("password"):
        data = {**data, "password": hash_password(data["password"])}

    set_cols, values = sql_for_partial_update(data, JS_TO_SQL)
    username_var_idx = f"${len(values) + 1}"

    row = await conn.fetchrow(
        f"""
        UPDATE users
        SET {set_cols}
        WHERE username = {username_var_idx}
        RETURNING {USER_COLUMNS}
        """,
        *values, username,
    )
    if row is None:
        logger.info("Update skipped, user %s not found", username)
        raise NotFoundError(f"No user: {username}")
    return dict(row)


async def remove(conn: asyncpg.Connection, username: str) -> None:
    row = await conn.fetchrow(
        "DELETE FROM users WHERE username = $1 RETURNING username",
        username,
    )
    if row is None:
        raise NotFoundError(f"No user: {username}")


async def apply_to_job(conn: asyncpg.Connection, username: str, job_id: int) -> None:
    """채용공고 지원 (중복 지원은 409)"""
    job = await conn.fetchrow("SELECT id FROM jobs WHERE id = $1", job_id)
    if job is None:
        raise NotFoundError(f"No job with id: {job_id}")

    user = await conn.fetchrow("SELECT username FROM users WHERE username = $1", username)
    if user is None:
        raise NotFoundError(f"No user: {username}")

    try:
        await conn.execute(
            "INSERT INTO applications (username, job_id) VALUES ($1, $2)",
            username, job_id,
        )
    except asyncpg.UniqueViolationError:
        raise ConflictError("Already applied")
