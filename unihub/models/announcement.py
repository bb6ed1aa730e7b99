# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Request models for announcements."""

from pydantic import BaseModel, Field

from unihub.models.tenant import AnnouncementStatus


class AnnouncementCreateRequest(BaseModel):
    """Fields of a new announcement."""

    tenant_id: str
    title: str = Field(min_length=1, max_length=255)
    content: str
    status: AnnouncementStatus = AnnouncementStatus.DRAFT
