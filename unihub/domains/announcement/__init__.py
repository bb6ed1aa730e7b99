# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Announcement domain."""

from unihub.domains.announcement.service import (
    AnnouncementNotFoundError,
    AnnouncementService,
    AnnouncementServiceError,
)

__all__ = [
    "AnnouncementService",
    "AnnouncementServiceError",
    "AnnouncementNotFoundError",
]
