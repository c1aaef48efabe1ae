"""
ORM models for the role bounded context.

A role has many users; users reference the role by ``role_code``
rather than by the surrogate id.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from kiosk_api.domain.role.entities import Role
from kiosk_api.infrastructure.database import Base


class TimestampMixin:
    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, server_default=func.now(), onupdate=func.now()
    )


class RoleModel(TimestampMixin, Base):
    __tablename__ = "role"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    role_code: Mapped[int] = mapped_column(Integer, unique=True, nullable=False)
    role_name: Mapped[str] = mapped_column(String(255), nullable=False)

    users: Mapped[list["UserModel"]] = relationship(back_populates="role_ref")

    def to_entity(self) -> Role:
        return Role(
            id=self.id,
            role_code=self.role_code,
            role_name=self.role_name,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )


class UserModel(TimestampMixin, Base):
    __tablename__ = "user"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_name: Mapped[str] = mapped_column(String(255), nullable=False)
    avatar: Mapped[Optional[str]] = mapped_column(Text)
    state: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    birth: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    start_day: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    role: Mapped[int] = mapped_column(ForeignKey("role.role_code"), nullable=False)
    phone: Mapped[Optional[str]] = mapped_column(String(45))
    address: Mapped[Optional[str]] = mapped_column(String(255))
    email: Mapped[Optional[str]] = mapped_column(String(255))

    role_ref: Mapped[RoleModel] = relationship(back_populates="users")
