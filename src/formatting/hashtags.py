from __future__ import annotations

"""#hashtag linking."""

import re
from typing import Callable

from src.formatting.tokens import Token, TokenStore, wrap_existing_tokens, wrap_matches

_HASHTAG_RE = re.compile(r"(^|\W)(#[a-zA-Z0-9.\-_]+)\b")


def _hashtag_anchor(hashtag: str) -> str:
    return f"<a class='mention-link' href='#' data-hashtag='{hashtag}'>{hashtag}</a>"


def autolink_hashtags(text: str, store: TokenStore, escape: Callable[[str], str]) -> str:
    """Link hashtags, including spans already tokenized whose raw text is a hashtag."""

    def _wrap_token(alias: str, token: Token) -> str:
        return _hashtag_anchor(escape(token.original_text))

    output = wrap_existing_tokens(
        text,
        store,
        "hashtag",
        lambda token: token.original_text.startswith("#"),
        _wrap_token,
    )
    return wrap_matches(_HASHTAG_RE, output, store, "hashtag", _hashtag_anchor)
