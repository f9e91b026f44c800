from __future__ import annotations

"""Click handling for rendered mention and hashtag links."""

from dataclasses import dataclass, field
from typing import Callable, Protocol

MENTION_ATTRIBUTE = "data-mention"
HASHTAG_ATTRIBUTE = "data-hashtag"


class EventTarget(Protocol):
    """Element-like object exposing its HTML attributes."""

    def get_attribute(self, name: str) -> str | None:
        raise NotImplementedError


@dataclass
class ElementTarget:
    """Plain attribute mapping usable as an event target."""
    attributes: dict[str, str] = field(default_factory=dict)

    def get_attribute(self, name: str) -> str | None:
        return self.attributes.get(name)


def handle_click(target: EventTarget, search_for_term: Callable[[str], None]) -> bool:
    """Search for the clicked mention or hashtag. Mentions win when both are set."""
    mention = target.get_attribute(MENTION_ATTRIBUTE)
    if mention:
        search_for_term(mention)
        return True
    hashtag = target.get_attribute(HASHTAG_ATTRIBUTE)
    if hashtag:
        search_for_term(hashtag)
        return True
    return False
