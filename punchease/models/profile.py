"""Profile model — personal details and company membership of an account."""

import uuid

from sqlmodel import Field, SQLModel

from punchease.models.base import TimestampMixin, new_uuid


class Profile(TimestampMixin, SQLModel, table=True):
    __tablename__ = "profiles"

    id: uuid.UUID = Field(default_factory=new_uuid, primary_key=True)
    user_id: uuid.UUID = Field(foreign_key="accounts.id", nullable=False, unique=True, index=True)
    email: str = Field(max_length=320, nullable=False)
    first_name: str | None = Field(default=None, max_length=100)
    last_name: str | None = Field(default=None, max_length=100)
    phone: str | None = Field(default=None, max_length=50)
    personal_number: str | None = Field(default=None, max_length=20)
    # Superadmin profiles point at a placeholder company id, so no FK here
    company_id: uuid.UUID | None = Field(default=None, index=True)


class ProfileRead(SQLModel):
    id: uuid.UUID
    user_id: uuid.UUID
    email: str
    first_name: str | None
    last_name: str | None
    company_id: uuid.UUID | None
