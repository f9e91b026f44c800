from __future__ import annotations

"""Shared pytest fixtures and test environment defaults."""

import os
import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[2]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

os.environ.setdefault("CHATFMT_METRICS_ENABLED", "true")
os.environ.pop("CHATFMT_SPECIAL_MENTIONS", None)
os.environ.pop("CHATFMT_LINK_EXTRA_TLDS", None)


@pytest.fixture
def formatter():
    from src.app.dependencies import build_formatter, reset_formatter_cache
    from src.users.directory import InMemoryUserDirectory, StaticMentionKeys
    from src.users.types import UserProfile

    reset_formatter_cache()
    directory = InMemoryUserDirectory.from_profiles(
        [UserProfile(username="alice"), UserProfile(username="bob.smith")]
    )
    return build_formatter(directory, StaticMentionKeys(keys=["@alice", "#general"]))
