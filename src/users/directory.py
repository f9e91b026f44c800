from __future__ import annotations

"""User directory and viewer mention-key sources."""

from dataclasses import dataclass, field
from typing import Iterable, Protocol

from src.users.types import UserProfile


class UserDirectory(Protocol):
    """Protocol for read-only username lookups."""

    def get_profile_by_username(self, username: str) -> UserProfile | None:
        """Return the profile for a lower-cased username, if it exists."""
        raise NotImplementedError


class MentionKeySource(Protocol):
    """Protocol for the viewing user's current mention keys."""

    def get_current_mention_keys(self) -> list[str]:
        """Return the keys that should be highlighted for the viewer."""
        raise NotImplementedError


@dataclass
class InMemoryUserDirectory:
    """Directory backed by a dict keyed on lower-cased username."""
    profiles: dict[str, UserProfile] = field(default_factory=dict)

    @classmethod
    def from_profiles(cls, profiles: Iterable[UserProfile]) -> InMemoryUserDirectory:
        directory = cls()
        directory.add_profiles(profiles)
        return directory

    def add_profiles(self, profiles: Iterable[UserProfile]) -> int:
        """Store profiles, replacing any with the same username."""
        added = 0
        for profile in profiles:
            self.profiles[profile.username.lower()] = profile
            added += 1
        return added

    def get_profile_by_username(self, username: str) -> UserProfile | None:
        return self.profiles.get(username.lower())


@dataclass
class StaticMentionKeys:
    """Fixed mention keys, for callers that already know them."""
    keys: list[str] = field(default_factory=list)

    def get_current_mention_keys(self) -> list[str]:
        return list(self.keys)


@dataclass
class ProfileMentionKeys:
    """Mention keys derived from the viewer's profile on every call."""
    profile: UserProfile | None = None

    def get_current_mention_keys(self) -> list[str]:
        if self.profile is None:
            return []
        return self.profile.mention_keys()
