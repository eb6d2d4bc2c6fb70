"""Company model — the tenant isolation boundary, addressed by slug."""

import uuid

from sqlmodel import Field, SQLModel

from punchease.models.base import ContactFieldsMixin, TimestampMixin, new_uuid


class Company(ContactFieldsMixin, TimestampMixin, SQLModel, table=True):
    __tablename__ = "companies"

    id: uuid.UUID = Field(default_factory=new_uuid, primary_key=True)
    name: str = Field(max_length=255, nullable=False)
    # URL path segment for tenant-scoped pages; matched case-sensitively
    slug: str = Field(max_length=100, unique=True, nullable=False, index=True)


# ── Pydantic schemas ─────────────────────────────────────────

class CompanyIdentity(SQLModel):
    """Read-only projection used for tenant resolution."""
    id: uuid.UUID
    name: str
    slug: str
