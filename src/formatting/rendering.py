from __future__ import annotations

"""Markdown rendering for tokenized message text."""

from dataclasses import dataclass, field
from typing import Any, Protocol

from markdown_it import MarkdownIt


class MarkdownRenderer(Protocol):
    """Protocol for markdown renderers."""

    def render(self, text: str) -> str:
        """Render markdown source to an HTML fragment."""
        raise NotImplementedError


def _render_link_open(self: Any, tokens: list[Any], idx: int, options: Any, env: Any) -> str:
    """Open markdown links in a new tab, styled like auto-links."""
    token = tokens[idx]
    token.attrSet("class", "theme")
    token.attrSet("target", "_blank")
    return self.renderToken(tokens, idx, options, env)


@dataclass
class MarkdownItRenderer:
    """CommonMark renderer that escapes raw HTML found in the source."""
    breaks: bool = False
    tables: bool = True
    md: MarkdownIt = field(init=False, repr=False)

    def __post_init__(self) -> None:
        md = MarkdownIt(
            "commonmark",
            {
                "html": False,
                "breaks": self.breaks,
                "linkify": False,
                "typographer": False,
            },
        )
        rules = ["strikethrough"]
        if self.tables:
            rules.append("table")
        md.enable(rules)
        md.add_render_rule("link_open", _render_link_open)
        self.md = md

    def render(self, text: str) -> str:
        return self.md.render(text)
