from sqlalchemy import String, Text, Boolean, CheckConstraint, false
from sqlalchemy.orm import Mapped, mapped_column, relationship

from db.base import Base

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from db.models.job import Job


class User(Base):
    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint("position('@' IN email) > 1", name="users_email_check"),
    )

    username: Mapped[str] = mapped_column(String(25), primary_key=True)
    password: Mapped[str] = mapped_column(Text, nullable=False)
    first_name: Mapped[str] = mapped_column(Text, nullable=False)
    last_name: Mapped[str] = mapped_column(Text, nullable=False)
    email: Mapped[str] = mapped_column(Text, nullable=False)
    is_admin: Mapped[bool] = mapped_column(Boolean, nullable=False, server_default=false())

    jobs: Mapped[list["Job"]] = relationship(secondary="applications", lazy="raise")
