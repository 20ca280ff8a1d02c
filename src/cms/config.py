# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

import os
from pathlib import Path

# Anchor default paths to the project root, not the current working directory.
BASE_DIR = Path(__file__).resolve().parents[2]

_TRUTHY = {"1", "true", "yes", "y"}


def env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in _TRUTHY


def is_test_env() -> bool:
    return os.getenv("CMS_ENV", "").strip().lower() == "test"


def data_path() -> Path:
    """Directory holding one file per document."""
    override = os.getenv("CMS_DATA_DIR")
    if override:
        return Path(override).resolve()
    if is_test_env():
        return (BASE_DIR / "tests" / "data").resolve()
    return (BASE_DIR / "data").resolve()


def users_path() -> Path:
    """YAML file mapping usernames to password hashes."""
    override = os.getenv("CMS_USERS_PATH")
    if override:
        return Path(override).resolve()
    if is_test_env():
        return (BASE_DIR / "tests" / "users.yml").resolve()
    return (BASE_DIR / "users.yml").resolve()


def secret_key() -> str:
    secret = os.getenv("CMS_SECRET_KEY") or os.getenv("SECRET_KEY")
    if not secret:
        raise RuntimeError("Missing CMS_SECRET_KEY (or SECRET_KEY) in environment")
    return secret


def cookie_name() -> str:
    return os.getenv("CMS_COOKIE_NAME", "cms_session")


def session_max_age() -> int:
    return int(os.getenv("CMS_SESSION_MAX_AGE", "28800"))  # 8 hours


def session_salt() -> str:
    return os.getenv("CMS_SESSION_SALT", "cms.session.v1")
