"""initial tenancy schema with row-level security on company_settings

Revision ID: 3f1c2a9b7d10
Revises: 
Create Date: 2026-10-19 09:12:44.120311

"""
from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = '3f1c2a9b7d10'
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

RLS_PREDICATE = (
    "current_setting('app.rls_bypass', true) = 'on' "
    "OR current_setting('app.current_role', true) = 'superadmin' "
    "OR company_id::text = current_setting('app.current_company_id', true)"
)


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    ]


def _contact() -> list[sa.Column]:
    return [
        sa.Column("email", sa.String(320), nullable=True),
        sa.Column("phone", sa.String(50), nullable=True),
        sa.Column("address", sa.String(255), nullable=True),
        sa.Column("postal_code", sa.String(20), nullable=True),
        sa.Column("city", sa.String(100), nullable=True),
        sa.Column("org_number", sa.String(50), nullable=True),
    ]


def upgrade() -> None:
    op.create_table(
        "companies",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("slug", sa.String(100), nullable=False),
        *_contact(),
        *_timestamps(),
    )
    op.create_index("ix_companies_slug", "companies", ["slug"], unique=True)

    op.create_table(
        "company_settings",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("company_id", sa.Uuid(), sa.ForeignKey("companies.id"), nullable=False),
        sa.Column("company_name", sa.String(255), nullable=False),
        sa.Column("website", sa.String(255), nullable=True),
        sa.Column("logo_url", sa.String(500), nullable=True),
        sa.Column("tenant_username", sa.String(100), nullable=True),
        sa.Column("tenant_password_hash", sa.String(), nullable=True),
        *_contact(),
        *_timestamps(),
    )
    op.create_index("ix_company_settings_company_id", "company_settings", ["company_id"], unique=True)
    op.create_index(
        "ix_company_settings_tenant_username", "company_settings", ["tenant_username"], unique=True
    )

    op.create_table(
        "accounts",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("email", sa.String(320), nullable=False),
        sa.Column("password_hash", sa.String(), nullable=False),
        sa.Column("email_confirmed", sa.Boolean(), nullable=False),
        sa.Column("user_metadata", sa.JSON(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_accounts_email", "accounts", ["email"], unique=True)

    op.create_table(
        "profiles",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("user_id", sa.Uuid(), sa.ForeignKey("accounts.id"), nullable=False),
        sa.Column("email", sa.String(320), nullable=False),
        sa.Column("first_name", sa.String(100), nullable=True),
        sa.Column("last_name", sa.String(100), nullable=True),
        sa.Column("phone", sa.String(50), nullable=True),
        sa.Column("personal_number", sa.String(20), nullable=True),
        sa.Column("company_id", sa.Uuid(), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_profiles_user_id", "profiles", ["user_id"], unique=True)
    op.create_index("ix_profiles_company_id", "profiles", ["company_id"])

    op.create_table(
        "user_roles",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("user_id", sa.Uuid(), sa.ForeignKey("accounts.id"), nullable=False),
        sa.Column(
            "role",
            sa.Enum("SUPERADMIN", "ADMIN", "EMPLOYEE", name="approle"),
            nullable=False,
        ),
        *_timestamps(),
        sa.UniqueConstraint("user_id", "role", name="uq_user_roles_user_role"),
    )
    op.create_index("ix_user_roles_user_id", "user_roles", ["user_id"])

    # The tenant credential is only readable by its own company, superadmins,
    # and the service session used by verify-tenant-password.
    op.execute("ALTER TABLE company_settings ENABLE ROW LEVEL SECURITY")
    op.execute("ALTER TABLE company_settings FORCE ROW LEVEL SECURITY")
    op.execute(
        "CREATE POLICY rls_company_isolation ON company_settings "
        f"USING ({RLS_PREDICATE}) WITH CHECK ({RLS_PREDICATE})"
    )


def downgrade() -> None:
    op.execute("DROP POLICY IF EXISTS rls_company_isolation ON company_settings")
    op.drop_table("user_roles")
    sa.Enum(name="approle").drop(op.get_bind(), checkfirst=True)
    op.drop_table("profiles")
    op.drop_table("accounts")
    op.drop_table("company_settings")
    op.drop_table("companies")
