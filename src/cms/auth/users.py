# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Optional

import yaml

from cms.auth.passwords import verify_password
from cms.config import users_path
from cms.core.errors import CredentialsError

logger = logging.getLogger(__name__)


def _entry_hash(username: str, value: object) -> str:
    # Accept both `admin: <hash>` and `admin: {password_hash: <hash>}`.
    if isinstance(value, dict):
        value = value.get("password_hash")
    if not isinstance(value, str) or not value.strip():
        raise CredentialsError(f"User '{username}' has no password hash")
    return value.strip()


def load_users(path: Optional[Path] = None) -> Dict[str, str]:
    """Load the username -> password hash mapping.

    Raises CredentialsError when the file is missing or malformed; the
    application cannot serve sign-ins without it.
    """
    path = path or users_path()
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise CredentialsError(f"Cannot read credentials file {path}: {e}") from e

    try:
        raw = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise CredentialsError(f"Credentials file {path} is not valid YAML: {e}") from e

    if isinstance(raw, dict) and isinstance(raw.get("users"), dict):
        raw = raw["users"]
    if not isinstance(raw, dict):
        raise CredentialsError(f"Credentials file {path} must contain a mapping of users")

    return {str(uname): _entry_hash(str(uname), value) for uname, value in raw.items()}


def verify(username: str, password: str, *, path: Optional[Path] = None) -> Optional[str]:
    """Return the username when the password matches its stored hash."""
    users = load_users(path)
    stored = users.get(username or "")
    if stored is None:
        return None
    if not verify_password(stored, password):
        return None
    return username
