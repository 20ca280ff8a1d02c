# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
CMS error hierarchy.

    CmsError
    ├── AuthRequired: gated route hit without a signed-in session
    ├── CredentialsError: credential file missing or malformed (startup)
    ├── DocumentNameError: invalid name on create (EmptyName, InvalidExtension, InvalidName)
    ├── StorageError: I/O failure on a document expected to exist
    └── UnsupportedDocumentType: document suffix with no renderer
"""

from __future__ import annotations

from typing import Optional


class CmsError(Exception):
    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class AuthRequired(CmsError):
    def __init__(self, message: str, redirect_to: str = "/"):
        self.redirect_to = redirect_to
        super().__init__(message)


class CredentialsError(CmsError):
    pass


class DocumentNameError(CmsError, ValueError):
    EMPTY_NAME = "EmptyName"
    INVALID_EXTENSION = "InvalidExtension"
    INVALID_NAME = "InvalidName"

    def __init__(self, code: str, message: str):
        self.code = code
        super().__init__(message)


class StorageError(CmsError):
    def __init__(self, message: str, name: Optional[str] = None):
        self.name = name
        super().__init__(message)


class UnsupportedDocumentType(CmsError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"No renderer for document '{name}'")
