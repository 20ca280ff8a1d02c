# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

import markdown

from cms.core.errors import UnsupportedDocumentType


class DocumentKind(Enum):
    PLAIN_TEXT = "text/plain"
    MARKDOWN = "text/html"

    @property
    def media_type(self) -> str:
        return self.value


_SUFFIXES = {
    ".txt": DocumentKind.PLAIN_TEXT,
    ".md": DocumentKind.MARKDOWN,
}


@dataclass(frozen=True)
class ServableContent:
    kind: DocumentKind
    media_type: str
    body: Union[bytes, str]


def kind_for(name: str) -> DocumentKind:
    for suffix, kind in _SUFFIXES.items():
        if name.endswith(suffix):
            return kind
    raise UnsupportedDocumentType(name)


def render_markdown(text: str) -> str:
    return markdown.markdown(text)


def render_document(name: str, data: bytes) -> ServableContent:
    """Convert stored bytes into what the document view serves.

    Plain text is passed through untouched; markdown becomes an HTML fragment
    that the caller embeds in the page layout.
    """
    kind = kind_for(name)
    if kind is DocumentKind.PLAIN_TEXT:
        return ServableContent(kind=kind, media_type=kind.media_type, body=data)
    if kind is DocumentKind.MARKDOWN:
        html = render_markdown(data.decode("utf-8", errors="replace"))
        return ServableContent(kind=kind, media_type=kind.media_type, body=html)
    raise UnsupportedDocumentType(name)
