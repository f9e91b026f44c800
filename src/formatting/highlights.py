from __future__ import annotations

"""Search-term and self-mention highlighting."""

import re
from typing import Callable, Iterable

from src.formatting.tokens import Token, TokenStore, wrap_existing_tokens, wrap_matches


def _word_pattern(word: str) -> re.Pattern[str]:
    """Case-insensitive whole-word pattern for a literal word.

    An ``&`` never counts as the leading boundary so entity names such as
    ``&amp;`` in escaped text are not split.
    """
    return re.compile(rf"(^|[^\w&])({re.escape(word)})(?!\w)", re.IGNORECASE)


def _highlight(
    text: str,
    store: TokenStore,
    category: str,
    css_class: str,
    words: list[str],
    escape: Callable[[str], str],
) -> str:
    wanted = set(words)

    def _wrap_token(alias: str, token: Token) -> str:
        return f"<span class='{css_class}'>{alias}</span>"

    def _wrap_word(word: str) -> str:
        return f"<span class='{css_class}'>{escape(word)}</span>"

    output = wrap_existing_tokens(
        text,
        store,
        category,
        lambda token: token.original_text in wanted,
        _wrap_token,
    )
    for word in words:
        output = wrap_matches(_word_pattern(word), output, store, category, _wrap_word)
    return output


def highlight_search_term(
    text: str,
    store: TokenStore,
    search_term: str,
    escape: Callable[[str], str],
) -> str:
    """Highlight a caller-supplied search term, including tokens whose raw text equals it."""
    if not search_term.strip():
        return text
    return _highlight(text, store, "search_term", "search-highlight", [search_term], escape)


def highlight_current_mentions(
    text: str,
    store: TokenStore,
    mention_keys: Iterable[str],
    escape: Callable[[str], str],
) -> str:
    """Highlight mentions of the viewer, wrapping existing tokens before plain words."""
    keys = _ordered_unique_keys(mention_keys)
    if not keys:
        return text
    return _highlight(text, store, "self_mention", "mention-highlight", keys, escape)


def _ordered_unique_keys(mention_keys: Iterable[str]) -> list[str]:
    """Return non-blank mention keys in order of appearance."""
    seen: set[str] = set()
    keys: list[str] = []
    for key in mention_keys:
        if not key.strip() or key in seen:
            continue
        seen.add(key)
        keys.append(key)
    return keys
