"""Role assignments — which application role an account holds."""

import uuid
from enum import StrEnum

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel

from punchease.models.base import TimestampMixin, new_uuid


class AppRole(StrEnum):
    SUPERADMIN = "superadmin"
    ADMIN = "admin"
    EMPLOYEE = "employee"


class UserRoleAssignment(TimestampMixin, SQLModel, table=True):
    __tablename__ = "user_roles"
    __table_args__ = (UniqueConstraint("user_id", "role", name="uq_user_roles_user_role"),)

    id: uuid.UUID = Field(default_factory=new_uuid, primary_key=True)
    user_id: uuid.UUID = Field(foreign_key="accounts.id", nullable=False, index=True)
    role: AppRole = Field(default=AppRole.EMPLOYEE)
