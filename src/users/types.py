from __future__ import annotations

"""User profile types used for mention lookups."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class UserProfile:
    """Directory entry for a chat user."""
    username: str
    first_name: str = ""
    notify_props: dict[str, str] = field(default_factory=dict)

    def mention_keys(self) -> list[str]:
        """Return the words that count as a mention of this user."""
        raw = self.notify_props.get("mention_keys", f"{self.username},@{self.username}")
        keys = [key.strip() for key in raw.split(",") if key.strip()]
        if self.first_name and self.notify_props.get("first_name") == "true":
            keys.append(self.first_name)
        if self.notify_props.get("all") == "true":
            keys.append("@all")
        if self.notify_props.get("channel") == "true":
            keys.append("@channel")
        return keys
