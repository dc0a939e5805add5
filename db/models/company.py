from sqlalchemy import String, Text, Integer, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from db.base import Base

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from db.models.job import Job


class Company(Base):
    __tablename__ = "companies"

    handle: Mapped[str] = mapped_column(String(25), primary_key=True)
    name: Mapped[str] = mapped_column(Text, unique=True, nullable=False)
    num_employees: Mapped[int | None] = mapped_column(
        Integer, CheckConstraint("num_employees >= 0", name="companies_num_employees_check")
    )
    description: Mapped[str] = mapped_column(Text, nullable=False)
    logo_url: Mapped[str | None] = mapped_column(Text)

    jobs: Mapped[list["Job"]] = relationship(back_populates="company", lazy="raise")
