from __future__ import annotations

"""Placeholder tokens that keep enriched spans safe from later formatting passes."""

import re
import secrets
import string
from dataclasses import dataclass, field
from typing import Callable, Literal

TokenCategory = Literal[
    "link",
    "mention",
    "hashtag",
    "search_term",
    "self_mention",
    "markdown_link",
]

ALIAS_PREFIXES: dict[str, str] = {
    "link": "MMLINK",
    "mention": "MMATMENTION",
    "hashtag": "MMHASHTAG",
    "search_term": "MMSEARCHTERM",
    "self_mention": "MMSELFMENTION",
    "markdown_link": "MMMARKDOWNLINK",
}

_NONCE_LENGTH = 8

MARKDOWN_LINK_TAIL_RE = re.compile(r"\]\([^)]*\)")


@dataclass(frozen=True)
class Token:
    """Final HTML for a span and the raw text it replaced."""
    category: str
    value: str
    original_text: str


def _make_nonce(text: str) -> str:
    """Pick a lowercase nonce that never occurs in the text."""
    lowered = text.lower()
    while True:
        nonce = "".join(secrets.choice(string.ascii_lowercase) for _ in range(_NONCE_LENGTH))
        if nonce not in lowered:
            return nonce


@dataclass
class TokenStore:
    """Ordered, append-only mapping from alias to token.

    Aliases are ``<PREFIX><counter><nonce>``: letters and digits only, so
    markdown renders them as plain text. The nonce is absent from the input,
    which keeps user text from ever spelling a live alias.
    """
    nonce: str
    tokens: dict[str, Token] = field(default_factory=dict, repr=False)
    counter: int = 0
    shield_markdown_links: bool = False

    @classmethod
    def for_text(cls, text: str, shield_markdown_links: bool = False) -> TokenStore:
        return cls(nonce=_make_nonce(text), shield_markdown_links=shield_markdown_links)

    def __len__(self) -> int:
        return len(self.tokens)

    def __contains__(self, alias: object) -> bool:
        return alias in self.tokens

    def get(self, alias: str) -> Token | None:
        return self.tokens.get(alias)

    def register(self, category: str, value: str, original_text: str) -> str:
        """Append a token and return its alias."""
        alias = f"{ALIAS_PREFIXES[category]}{self.counter}{self.nonce}"
        self.counter += 1
        self.tokens[alias] = Token(category=category, value=value, original_text=original_text)
        return alias

    def find(self, predicate: Callable[[Token], bool]) -> list[tuple[str, Token]]:
        """Return a snapshot of (alias, token) pairs matching the predicate."""
        return [(alias, token) for alias, token in self.tokens.items() if predicate(token)]

    def resolve(self, text: str) -> str:
        """Expand aliases into their values, newest first."""
        output = text
        for alias in reversed(self.tokens):
            output = output.replace(alias, self.tokens[alias].value)
        return output

    def protected_spans(self, text: str) -> list[tuple[int, int]]:
        """Return spans of live aliases, plus markdown link tails when shielding."""
        prefixes = "|".join(re.escape(prefix) for prefix in ALIAS_PREFIXES.values())
        alias_re = re.compile(rf"(?:{prefixes})\d+{self.nonce}")
        spans = [match.span() for match in alias_re.finditer(text)]
        if self.shield_markdown_links:
            spans.extend(match.span() for match in MARKDOWN_LINK_TAIL_RE.finditer(text))
        return spans

    def category_counts(self) -> dict[str, int]:
        counts: dict[str, int] = {}
        for token in self.tokens.values():
            counts[token.category] = counts.get(token.category, 0) + 1
        return counts


def overlaps(spans: list[tuple[int, int]], start: int, end: int) -> bool:
    return any(span_start < end and start < span_end for span_start, span_end in spans)


def rewrite_matches(
    pattern: re.Pattern[str],
    text: str,
    rewrite: Callable[[re.Match[str]], str | None],
) -> str:
    """Rebuild text, substituting every non-overlapping match the callback accepts.

    A callback returning None leaves the matched text untouched.
    """
    pieces: list[str] = []
    cursor = 0
    for match in pattern.finditer(text):
        replacement = rewrite(match)
        if replacement is None:
            continue
        pieces.append(text[cursor : match.start()])
        pieces.append(replacement)
        cursor = match.end()
    pieces.append(text[cursor:])
    return "".join(pieces)


def wrap_existing_tokens(
    text: str,
    store: TokenStore,
    category: str,
    predicate: Callable[[Token], bool],
    build_value: Callable[[str, Token], str],
) -> str:
    """Wrap live tokens matching the predicate in a new token of the given category.

    The wrapped alias is embedded in the new token's value and its occurrence
    in the text is replaced by the new alias. Tokens whose alias is no longer
    in the text have already been wrapped and are skipped.
    """
    output = text
    for alias, token in store.find(predicate):
        if alias not in output:
            continue
        new_alias = store.register(category, build_value(alias, token), token.original_text)
        output = output.replace(alias, new_alias)
    return output


def wrap_matches(
    pattern: re.Pattern[str],
    text: str,
    store: TokenStore,
    category: str,
    build_value: Callable[[str], str],
) -> str:
    """Tokenize every ``(boundary)(word)`` match of the pattern.

    The boundary group stays in the text ahead of the alias. Words overlapping
    a protected span are left alone.
    """
    protected = store.protected_spans(text)

    def _replace(match: re.Match[str]) -> str | None:
        if overlaps(protected, *match.span(2)):
            return None
        boundary, word = match.group(1), match.group(2)
        alias = store.register(category, build_value(word), word)
        return boundary + alias

    return rewrite_matches(pattern, text, _replace)
