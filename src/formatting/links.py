from __future__ import annotations

"""URL and email auto-linking backed by linkify-it."""

import re
from dataclasses import dataclass, field
from typing import Callable, Protocol

from linkify_it import LinkifyIt

from src.formatting.tokens import MARKDOWN_LINK_TAIL_RE, TokenStore

_SCHEME_RE = re.compile(r"^[a-z][a-z0-9+.\-]*://", re.IGNORECASE)


@dataclass(frozen=True)
class LinkMatch:
    """A detected link span within a text."""
    start: int
    end: int
    text: str
    is_email: bool = False


class LinkDetector(Protocol):
    """Protocol for URL and email detectors."""

    def find_links(self, text: str) -> list[LinkMatch]:
        """Return non-overlapping link spans in text order."""
        raise NotImplementedError


@dataclass
class LinkifyDetector:
    """Detect URLs and emails; phone numbers and social handles are never matched."""
    fuzzy_link: bool = True
    fuzzy_email: bool = True
    extra_tlds: list[str] = field(default_factory=list)
    linkify: LinkifyIt = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.linkify = LinkifyIt(
            options={
                "fuzzy_link": self.fuzzy_link,
                "fuzzy_email": self.fuzzy_email,
                "fuzzy_ip": False,
            }
        )
        if self.extra_tlds:
            self.linkify.tlds(self.extra_tlds, True)

    def find_links(self, text: str) -> list[LinkMatch]:
        matches = self.linkify.match(text) or []
        return [
            LinkMatch(
                start=match.index,
                end=match.last_index,
                text=match.raw,
                is_email=match.schema == "mailto:",
            )
            for match in matches
        ]


def normalize_link_url(link: LinkMatch) -> str:
    """Return the href for a detected link, adding a scheme where it lacks one."""
    text = link.text
    if link.is_email:
        if text.lower().startswith("mailto:"):
            return text
        return f"mailto:{text}"
    if _SCHEME_RE.match(text):
        return text
    if text.startswith("//"):
        return f"http:{text}"
    return f"http://{text}"


def _shield_markdown_links(text: str) -> tuple[str, TokenStore]:
    """Hide ``](...)`` link tails so their URLs are not auto-linked."""
    shield = TokenStore.for_text(text)

    def _replace(match: re.Match[str]) -> str:
        return shield.register("markdown_link", match.group(0), match.group(0))

    return MARKDOWN_LINK_TAIL_RE.sub(_replace, text), shield


def autolink_urls(
    text: str,
    store: TokenStore,
    detector: LinkDetector,
    markdown: bool,
    escape: Callable[[str], str],
) -> str:
    """Replace detected URLs and emails with link tokens."""
    output = text
    shield: TokenStore | None = None
    if markdown:
        output, shield = _shield_markdown_links(output)

    pieces: list[str] = []
    cursor = 0
    for link in detector.find_links(output):
        url = normalize_link_url(link)
        alias = store.register(
            "link",
            f"<a class='theme' target='_blank' href='{escape(url)}'>{escape(link.text)}</a>",
            link.text,
        )
        pieces.append(output[cursor : link.start])
        pieces.append(alias)
        cursor = link.end
    pieces.append(output[cursor:])
    output = "".join(pieces)

    if shield is not None:
        output = shield.resolve(output)
    return output
