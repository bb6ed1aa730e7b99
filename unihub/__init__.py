# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""unihub - tenant identity and provisioning core.

Platform operators manage university tenants; each tenant has one
administrator, its own users and its own announcements.
"""

__version__ = "0.1.0"
