import pytest

from cms.core.errors import UnsupportedDocumentType
from cms.services.render_service import DocumentKind, kind_for, render_document, render_markdown


def test_plain_text_passthrough():
    data = b"1993 - Yukihiro Matsumoto dreams up Ruby.\n**not markdown**"
    content = render_document("history.txt", data)
    assert content.kind is DocumentKind.PLAIN_TEXT
    assert content.media_type == "text/plain"
    assert content.body == data


def test_markdown_is_converted():
    content = render_document("about.md", b"**programming**")
    assert content.kind is DocumentKind.MARKDOWN
    assert content.media_type == "text/html"
    assert "<strong>programming</strong>" in content.body


def test_render_markdown_heading():
    assert "<h1>Title</h1>" in render_markdown("# Title")


def test_unknown_suffix_fails():
    with pytest.raises(UnsupportedDocumentType):
        kind_for("script.rb")
    with pytest.raises(UnsupportedDocumentType):
        render_document("image.png", b"")
