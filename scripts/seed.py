"""테스트 데이터 생성 스크립트

사용법:
    python scripts/seed.py          # 테이블 생성 + 데이터 입력
    python scripts/seed.py --reset  # 테이블 삭제 후 다시 생성

테스트 계정:
    - username: admin     / password: admin123! (관리자)
    - username: testuser  / password: test1234!
"""
import asyncio
import sys
from decimal import Decimal
from pathlib import Path

# 프로젝트 루트를 path에 추가
sys.path.insert(0, str(Path(__file__).parent.parent))

from db.base import Base
from db.models import Company, Job, User
from db.session import engine, AsyncSessionLocal
from utils.auth import hash_password

# 테스트 계정 (평문 비밀번호)
TEST_USERS = [
    {
        "username": "admin",
        "password": "admin123!",
        "first_name": "Admin",
        "last_name": "User",
        "email": "admin@example.com",
        "is_admin": True,
    },
    {
        "username": "testuser",
        "password": "test1234!",
        "first_name": "Test",
        "last_name": "User",
        "email": "test@example.com",
        "is_admin": False,
    },
]

TEST_COMPANIES = [
    {
        "handle": "anderson-arias",
        "name": "Anderson, Arias and Morrow",
        "num_employees": 245,
        "description": "Somebody program how I. Face give away discussion view act inside.",
        "logo_url": "http://example.com/logos/anderson-arias.png",
    },
    {
        "handle": "bauer-gallagher",
        "name": "Bauer-Gallagher",
        "num_employees": 862,
        "description": "Difficult ready trip question produce produce someone.",
        "logo_url": None,
    },
    {
        "handle": "watson-davis",
        "name": "Watson-Davis",
        "num_employees": 819,
        "description": "Year join loss.",
        "logo_url": None,
    },
]

TEST_JOBS = [
    {"title": "Conservation officer", "salary": 110000, "equity": Decimal("0"), "company_handle": "anderson-arias"},
    {"title": "Information officer", "salary": 200000, "equity": Decimal("0.002"), "company_handle": "bauer-gallagher"},
    {"title": "Engineer, broadcasting", "salary": 300000, "equity": Decimal("0.003"), "company_handle": "watson-davis"},
    {"title": "Accountant, chartered", "salary": None, "equity": None, "company_handle": "watson-davis"},
]


async def create_tables(reset: bool = False) -> None:
    async with engine.begin() as conn:
        if reset:
            await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)


async def seed(reset: bool = False) -> None:
    """모든 테스트 데이터 생성"""
    await create_tables(reset)

    async with AsyncSessionLocal() as db:
        db.add_all(
            User(**{**user, "password": hash_password(user["password"])})
            for user in TEST_USERS
        )
        db.add_all(Company(**company) for company in TEST_COMPANIES)
        await db.flush()
        db.add_all(Job(**job) for job in TEST_JOBS)
        await db.commit()

    await engine.dispose()

    print("✅ 테스트 데이터 생성 완료!")
    print(f"\n🏢 회사 {len(TEST_COMPANIES)}개, 채용공고 {len(TEST_JOBS)}개")
    print("\n👤 테스트 계정:")
    for user in TEST_USERS:
        print(f"   - username: {user['username']}")
        print(f"     password: {user['password']}")
        print()


if __name__ == "__main__":
    asyncio.run(seed(reset="--reset" in sys.argv))
