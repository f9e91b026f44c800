from __future__ import annotations

from src.formatting.rendering import MarkdownItRenderer


def test_renderer_escapes_raw_html() -> None:
    renderer = MarkdownItRenderer()

    assert renderer.render("<i>x</i>") == "<p>&lt;i&gt;x&lt;/i&gt;</p>\n"


def test_renderer_leaves_placeholders_as_text() -> None:
    renderer = MarkdownItRenderer()

    assert renderer.render("a MMLINK0abcdefgh b") == "<p>a MMLINK0abcdefgh b</p>\n"


def test_renderer_rejects_javascript_links() -> None:
    renderer = MarkdownItRenderer()

    assert "<a " not in renderer.render("[x](javascript:alert(1))")


def test_renderer_breaks_option() -> None:
    assert "<br />" in MarkdownItRenderer(breaks=True).render("a\nb")
    assert "<br />" not in MarkdownItRenderer().render("a\nb")


def test_renderer_tables_and_strikethrough() -> None:
    html = MarkdownItRenderer().render("| a | b |\n|---|---|\n| 1 | 2 |\n\n~~gone~~")

    assert "<table>" in html
    assert "<s>gone</s>" in html


def test_renderer_without_tables() -> None:
    html = MarkdownItRenderer(tables=False).render("| a | b |\n|---|---|\n| 1 | 2 |")

    assert "<table>" not in html
