# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

import logging

from cms.core.errors import DocumentNameError
from cms.infra.document_repo import DocumentStore, is_safe_basename

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = (".txt", ".md")


def validate_document_name(name: str) -> str:
    """Return the name unchanged, or raise DocumentNameError.

    - Empty (or blank) names are rejected first.
    - Then the extension must be one of ALLOWED_EXTENSIONS.
    - Finally the name must be a plain file name inside the store.
    """
    if not (name or "").strip():
        raise DocumentNameError(DocumentNameError.EMPTY_NAME, "The file must have a name.")
    if not name.endswith(ALLOWED_EXTENSIONS):
        raise DocumentNameError(
            DocumentNameError.INVALID_EXTENSION, "The file must end with '.txt' or '.md'."
        )
    if not is_safe_basename(name):
        raise DocumentNameError(
            DocumentNameError.INVALID_NAME, "The file name must not contain path separators or null bytes."
        )
    return name


def create_document(store: DocumentStore, name: str) -> str:
    validate_document_name(name)
    store.create(name)
    logger.info("Created document %s", name)
    return name


def update_document(store: DocumentStore, name: str, contents: str) -> None:
    store.write(name, (contents or "").encode("utf-8"))
    logger.info("Updated document %s", name)


def delete_document(store: DocumentStore, name: str) -> None:
    store.delete(name)
    logger.info("Deleted document %s", name)
