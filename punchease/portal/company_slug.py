"""Tenant resolution: URL slug -> company identity."""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable
from typing import Protocol

from punchease.models.company import CompanyIdentity

logger = logging.getLogger(__name__)

HOME_PATH = "/"


class CompanyLookup(Protocol):
    async def fetch_company_by_slug(self, slug: str) -> CompanyIdentity | None: ...


class CompanySlugContext:
    """Resolves the company slug of the current URL.

    ``await set_slug(slug)`` is called on mount and on every navigation. Each
    slug change triggers exactly one lookup; setting the same slug again is
    a no-op. A slug that does not resolve, for whatever reason, sends the
    user home through ``navigate`` and leaves ``company_info`` empty. Errors
    are logged, never raised.
    """

    def __init__(
        self,
        backend: CompanyLookup,
        navigate: Callable[[str], None],
    ) -> None:
        self._backend = backend
        self._navigate = navigate
        self._slug: str | None = None
        self._started = False
        self.company_info: CompanyIdentity | None = None
        self.loading = True

    @property
    def company_slug(self) -> str | None:
        return self._slug or None

    @property
    def company_id(self) -> uuid.UUID | None:
        return self.company_info.id if self.company_info else None

    async def set_slug(self, slug: str | None) -> None:
        if self._started and slug == self._slug:
            return
        self._started = True
        self._slug = slug

        if not slug:
            self.company_info = None
            self.loading = False
            return

        self.company_info = None
        self.loading = True
        try:
            company = await self._backend.fetch_company_by_slug(slug)
        except Exception:
            logger.exception("Error fetching company for slug %s", slug)
            company = None
        else:
            if company is None:
                logger.error("Company not found for slug %s", slug)

        # A newer slug arrived while this lookup was in flight
        if slug != self._slug:
            return
        self.loading = False

        if company is None:
            self._navigate(HOME_PATH)
            return

        self.company_info = company
