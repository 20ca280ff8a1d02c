# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Authentication helpers.

This package provides:
- Password hashing/verification (argon2)
- Credential loading from users.yml
- Signed session cookies carrying the signed-in user and flash message (itsdangerous)
"""
