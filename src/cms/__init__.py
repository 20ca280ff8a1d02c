# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

"""File-backed content manager for .txt and .md documents."""

__version__ = "0.1.0"
