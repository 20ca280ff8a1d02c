# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from cms.core.errors import StorageError


def is_safe_basename(name: str) -> bool:
    """Allow only simple filenames (no directories)."""
    if not isinstance(name, str) or not name:
        return False
    if name in {".", ".."}:
        return False
    if "/" in name or "\\" in name or "\x00" in name:
        return False
    return name == Path(name).name


class DocumentStore(ABC):
    """Flat collection of named documents.

    The store keeps no state between calls; the backing storage is the only
    source of truth.
    """

    @abstractmethod
    def list(self) -> List[str]:
        pass

    def exists(self, name: str, listing: Optional[Iterable[str]] = None) -> bool:
        """Existence against a listing snapshot; takes a fresh one if none is given."""
        if listing is None:
            listing = self.list()
        return name in listing

    @abstractmethod
    def read(self, name: str) -> bytes:
        pass

    @abstractmethod
    def write(self, name: str, data: bytes) -> None:
        pass

    def create(self, name: str) -> None:
        """Create an empty document, truncating one that already exists."""
        self.write(name, b"")

    @abstractmethod
    def delete(self, name: str) -> None:
        pass


class FileDocumentStore(DocumentStore):
    def __init__(self, root: Path):
        self.root = Path(root)

    def ensure(self) -> None:
        self.root.mkdir(parents=True, exist_ok=True)

    def _path(self, name: str) -> Path:
        if not is_safe_basename(name):
            raise StorageError(f"Invalid document name '{name}'", name=name)
        return self.root / name

    def list(self) -> List[str]:
        try:
            with os.scandir(self.root) as it:
                return [entry.name for entry in it]
        except FileNotFoundError:
            return []
        except OSError as e:
            raise StorageError(f"Cannot list {self.root}: {e}") from e

    def read(self, name: str) -> bytes:
        path = self._path(name)
        try:
            return path.read_bytes()
        except OSError as e:
            raise StorageError(f"Cannot read '{name}': {e}", name=name) from e

    def write(self, name: str, data: bytes) -> None:
        path = self._path(name)
        try:
            path.write_bytes(data)
        except OSError as e:
            raise StorageError(f"Cannot write '{name}': {e}", name=name) from e

    def delete(self, name: str) -> None:
        path = self._path(name)
        try:
            path.unlink()
        except OSError as e:
            raise StorageError(f"Cannot delete '{name}': {e}", name=name) from e


class MemoryDocumentStore(DocumentStore):
    """In-memory store honouring the same contract, for tests."""

    def __init__(self, documents: Optional[Dict[str, bytes]] = None):
        self._documents: Dict[str, bytes] = dict(documents or {})

    def list(self) -> List[str]:
        return list(self._documents)

    def read(self, name: str) -> bytes:
        try:
            return self._documents[name]
        except KeyError:
            raise StorageError(f"Cannot read '{name}': no such document", name=name) from None

    def write(self, name: str, data: bytes) -> None:
        if not is_safe_basename(name):
            raise StorageError(f"Invalid document name '{name}'", name=name)
        self._documents[name] = bytes(data)

    def delete(self, name: str) -> None:
        try:
            del self._documents[name]
        except KeyError:
            raise StorageError(f"Cannot delete '{name}': no such document", name=name) from None
