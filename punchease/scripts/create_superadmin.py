"""One-shot superadmin provisioning.

Run once per environment::

    SUPERADMIN_EMAIL=... SUPERADMIN_PASSWORD=... python -m punchease.scripts.create_superadmin

A failed run reports the step it stopped at. Steps already completed are
not undone, so re-running after a partial failure fails at the account step;
reconcile the profile / role rows by hand in that case.
"""

import asyncio
import logging
import sys

from punchease.core.config import get_settings
from punchease.core.errors import BootstrapStepError
from punchease.core.logging_config import configure_logging
from punchease.services.superadmin import SuperadminIdentity, bootstrap_superadmin

logger = logging.getLogger(__name__)


async def main() -> int:
    from punchease.core.database import init_db, service_session_factory

    await init_db()
    try:
        identity = SuperadminIdentity.from_settings(get_settings())
        async with service_session_factory() as session:
            account = await bootstrap_superadmin(session, identity)
    except BootstrapStepError as exc:
        logger.error("Superadmin bootstrap failed at %s step: %s", exc.step, exc.message)
        return 1

    logger.info("Superadmin %s created with id %s", account.email, account.id)
    return 0


def cli() -> None:
    configure_logging()
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    cli()
