# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Announcement service.

Announcements belong to one tenant. Tenant users see the published ones,
newest first, on their dashboard.
"""

import logging

from unihub.infrastructure.database.store import TenantDataStore
from unihub.models.announcement import AnnouncementCreateRequest
from unihub.models.tenant import Announcement, AnnouncementStatus

logger = logging.getLogger(__name__)

DASHBOARD_FEED_LIMIT = 10


class AnnouncementServiceError(Exception):
    """Base exception for announcement service errors."""

    pass


class AnnouncementNotFoundError(AnnouncementServiceError):
    """Raised when an announcement is not found."""

    pass


class AnnouncementService:
    """Create, publish, archive and list announcements."""

    def __init__(self, store: TenantDataStore) -> None:
        self._store = store

    async def create_announcement(self, request: AnnouncementCreateRequest) -> Announcement:
        values = request.model_dump()
        values["status"] = request.status.value
        row = await self._store.insert("announcements", values)

        logger.info("Announcement created: %s (tenant=%s)", row["id"], row["tenant_id"])

        return Announcement.model_validate(row)

    async def update_status(
        self,
        announcement_id: str,
        status: AnnouncementStatus | str,
    ) -> Announcement:
        """Move an announcement to draft, published or archived.

        Raises:
            AnnouncementNotFoundError: If announcement not found.
            ValueError: If status is unknown.
        """
        status = AnnouncementStatus(status)
        rows = await self._store.update(
            "announcements",
            {"status": status.value},
            {"id": announcement_id},
        )
        if not rows:
            raise AnnouncementNotFoundError(f"Announcement {announcement_id} not found")

        logger.info("Announcement %s is now %s", announcement_id, status.value)

        return Announcement.model_validate(rows[0])

    async def delete_announcement(self, announcement_id: str) -> None:
        deleted = await self._store.delete("announcements", {"id": announcement_id})
        if not deleted:
            raise AnnouncementNotFoundError(f"Announcement {announcement_id} not found")

    async def list_published(
        self,
        tenant_id: str,
        limit: int = DASHBOARD_FEED_LIMIT,
    ) -> list[Announcement]:
        """Newest published announcements of one tenant."""
        rows = await self._store.select(
            "announcements",
            {"tenant_id": tenant_id, "status": AnnouncementStatus.PUBLISHED.value},
            order_by="created_at",
            descending=True,
            limit=limit,
        )
        return [Announcement.model_validate(row) for row in rows]
