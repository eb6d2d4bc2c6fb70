"""Account model — backend auth-service identity (email + password)."""

import uuid

from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel

from punchease.models.base import TimestampMixin, new_uuid


class Account(TimestampMixin, SQLModel, table=True):
    __tablename__ = "accounts"

    id: uuid.UUID = Field(default_factory=new_uuid, primary_key=True)
    email: str = Field(max_length=320, unique=True, nullable=False, index=True)
    password_hash: str = Field(nullable=False)
    email_confirmed: bool = Field(default=False)
    user_metadata: dict = Field(default_factory=dict, sa_column=Column(JSON, nullable=False))
    is_active: bool = Field(default=True)


# ── Pydantic schemas ─────────────────────────────────────────

class AccountRead(SQLModel):
    id: uuid.UUID
    email: str
    email_confirmed: bool
    is_active: bool
