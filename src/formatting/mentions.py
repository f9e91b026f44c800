from __future__ import annotations

"""@mention linking validated against the user directory."""

import logging
import re
from typing import Iterable

from src.formatting.tokens import TokenStore, overlaps, rewrite_matches
from src.users.directory import UserDirectory

logger = logging.getLogger(__name__)

SPECIAL_MENTIONS = frozenset({"all", "channel"})

_AT_MENTION_RE = re.compile(r"(^|\s)(@([a-z0-9.\-_]*[a-z0-9]))", re.IGNORECASE)


def autolink_at_mentions(
    text: str,
    store: TokenStore,
    directory: UserDirectory,
    special_mentions: Iterable[str] = SPECIAL_MENTIONS,
) -> str:
    """Replace @mentions of known users and reserved keywords with link tokens."""
    reserved = {value.lower() for value in special_mentions}
    protected = store.protected_spans(text)

    def _replace(match: re.Match[str]) -> str | None:
        if overlaps(protected, *match.span(2)):
            return None
        boundary, mention, username = match.group(1), match.group(2), match.group(3)
        username_lower = username.lower()
        if username_lower not in reserved and directory.get_profile_by_username(username_lower) is None:
            logger.debug("mention_unresolved", extra={"username_length": len(username_lower)})
            return None
        alias = store.register(
            "mention",
            f"<a class='mention-link' href='#' data-mention='{username_lower}'>{mention}</a>",
            mention,
        )
        return boundary + alias

    return rewrite_matches(_AT_MENTION_RE, text, _replace)
