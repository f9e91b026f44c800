from __future__ import annotations

from functools import lru_cache

from src.app.settings import settings
from src.formatting.links import LinkifyDetector
from src.formatting.pipeline import TextFormatter
from src.formatting.rendering import MarkdownItRenderer
from src.users.directory import MentionKeySource, UserDirectory


@lru_cache
def get_markdown_renderer() -> MarkdownItRenderer:
    return MarkdownItRenderer(breaks=settings.markdown_breaks, tables=settings.markdown_tables)


@lru_cache
def get_link_detector() -> LinkifyDetector:
    return LinkifyDetector(
        fuzzy_link=settings.link_fuzzy,
        fuzzy_email=settings.link_email,
        extra_tlds=settings.link_extra_tlds,
    )


def reset_formatter_cache() -> None:
    get_markdown_renderer.cache_clear()
    get_link_detector.cache_clear()


def build_formatter(
    user_directory: UserDirectory,
    mention_keys: MentionKeySource | None = None,
) -> TextFormatter:
    return TextFormatter(
        user_directory=user_directory,
        mention_keys=mention_keys,
        renderer=get_markdown_renderer(),
        link_detector=get_link_detector(),
        special_mentions=frozenset(settings.special_mentions),
    )
