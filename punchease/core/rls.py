"""PostgreSQL row-level security session settings.

Policies created by the migrations read three transaction-local parameters:

- app.current_company_id: company of the authenticated caller
- app.current_role: role of the authenticated caller ("superadmin" sees all rows)
- app.rls_bypass: "on" for the service session only

The values live in ``session.info["rls"]`` and are applied with
``set_config(..., true)`` each time the session begins a transaction, so no
statement runs until the session is first used. SQLite (tests) has no RLS
and is skipped.
"""

import uuid

from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Session

RLS_INFO_KEY = "rls"

SERVICE_SCOPE = {"app.rls_bypass": "on"}


def _set_config(connection, settings: dict[str, str]) -> None:
    if connection.dialect.name != "postgresql":
        return
    for name, value in settings.items():
        connection.execute(
            text("SELECT set_config(:name, :value, true)"),
            {"name": name, "value": value},
        )


@event.listens_for(Session, "after_begin")
def _apply_rls_on_begin(session: Session, transaction, connection) -> None:
    scope = session.info.get(RLS_INFO_KEY)
    if scope:
        _set_config(connection, scope)


async def apply_request_scope(
    session: AsyncSession, company_id: uuid.UUID | None, role: str
) -> None:
    """Scope a regular session to the caller's company and role."""
    scope = {
        "app.rls_bypass": "off",
        "app.current_company_id": str(company_id) if company_id else "",
        "app.current_role": str(role),
    }
    session.info[RLS_INFO_KEY] = scope
    if session.in_transaction():
        connection = await session.connection()
        await connection.run_sync(_set_config, scope)
