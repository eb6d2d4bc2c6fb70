"""Company settings — one row per company, holds the tenant-portal login."""

import uuid

from sqlmodel import Field, SQLModel

from punchease.models.base import ContactFieldsMixin, TimestampMixin, new_uuid


class CompanySettings(ContactFieldsMixin, TimestampMixin, SQLModel, table=True):
    __tablename__ = "company_settings"

    id: uuid.UUID = Field(default_factory=new_uuid, primary_key=True)
    company_id: uuid.UUID = Field(
        foreign_key="companies.id", nullable=False, unique=True, index=True
    )
    company_name: str = Field(max_length=255, nullable=False)
    website: str | None = Field(default=None, max_length=255)
    logo_url: str | None = Field(default=None, max_length=500)

    # Tenant-portal credential. The hash never leaves the backend.
    tenant_username: str | None = Field(default=None, max_length=100, unique=True, index=True)
    tenant_password_hash: str | None = Field(default=None)
