from decimal import Decimal

from sqlalchemy import String, Text, Integer, Numeric, ForeignKey, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from db.base import Base

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from db.models.company import Company


class Job(Base):
    __tablename__ = "jobs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    salary: Mapped[int | None] = mapped_column(
        Integer, CheckConstraint("salary >= 0", name="jobs_salary_check")
    )
    equity: Mapped[Decimal | None] = mapped_column(
        Numeric, CheckConstraint("equity <= 1.0", name="jobs_equity_check")
    )
    company_handle: Mapped[str] = mapped_column(
        String(25), ForeignKey("companies.handle", ondelete="CASCADE"), nullable=False, index=True
    )

    company: Mapped["Company"] = relationship(back_populates="jobs", lazy="raise")
