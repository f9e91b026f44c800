from __future__ import annotations

"""Chat message formatting: tokenize enriched spans, render markdown, resolve tokens.

Passes run strictly in order and share one ``TokenStore`` per call:

1. escape HTML (markdown disabled only)
2. auto-link URLs and emails
3. link @mentions of known users
4. link #hashtags
5. highlight the search term (optional)
6. highlight mentions of the viewer (optional, on by default)
7. render markdown over placeholder-only text
8. resolve placeholders newest first, so wrappers expand before what they wrap
9. collapse newlines (optional)
"""

import logging
import time
from dataclasses import dataclass
from typing import Any, Iterable, Mapping

from pydantic import ValidationError

from src.app.metrics import record_format
from src.app.schemas import FormatOptions
from src.formatting.hashtags import autolink_hashtags
from src.formatting.highlights import highlight_current_mentions, highlight_search_term
from src.formatting.links import LinkDetector, autolink_urls
from src.formatting.mentions import SPECIAL_MENTIONS, autolink_at_mentions
from src.formatting.rendering import MarkdownRenderer
from src.formatting.sanitizer import keep_text, sanitize_html
from src.formatting.tokens import TokenStore
from src.users.directory import MentionKeySource, UserDirectory

logger = logging.getLogger(__name__)


class FormatterConfigError(RuntimeError):
    """Raised when the formatter is missing a collaborator or given bad options."""


def coerce_options(options: FormatOptions | Mapping[str, Any] | None) -> FormatOptions:
    """Validate caller options into a FormatOptions model."""
    if options is None:
        return FormatOptions()
    if isinstance(options, FormatOptions):
        return options
    try:
        return FormatOptions.model_validate(dict(options))
    except ValidationError as exc:
        raise FormatterConfigError(f"Invalid format options: {exc.error_count()} error(s)") from exc


def replace_newlines(text: str) -> str:
    return text.replace("\n", " ")


@dataclass
class TextFormatter:
    user_directory: UserDirectory
    mention_keys: MentionKeySource | None
    renderer: MarkdownRenderer
    link_detector: LinkDetector
    special_mentions: Iterable[str] = SPECIAL_MENTIONS

    def __post_init__(self) -> None:
        missing = [
            name
            for name in ("user_directory", "renderer", "link_detector")
            if getattr(self, name) is None
        ]
        if missing:
            raise FormatterConfigError(f"Missing formatter collaborators: {', '.join(missing)}")

    def format_text(
        self,
        text: str,
        options: FormatOptions | Mapping[str, Any] | None = None,
    ) -> str:
        """Format a raw message into an HTML fragment."""
        opts = coerce_options(options)
        if opts.mention_highlight and self.mention_keys is None:
            raise FormatterConfigError("Mention highlighting requires a mention key source")

        start = time.monotonic()
        # Markdown input stays raw until the renderer escapes it, so token HTML
        # built from user text is escaped here instead.
        escape = sanitize_html if opts.markdown else keep_text
        output = text if opts.markdown else sanitize_html(text)
        store = TokenStore.for_text(output, shield_markdown_links=opts.markdown)

        output = autolink_urls(output, store, self.link_detector, opts.markdown, escape)
        output = autolink_at_mentions(output, store, self.user_directory, self.special_mentions)
        output = autolink_hashtags(output, store, escape)

        if opts.search_term:
            term = opts.search_term if opts.markdown else sanitize_html(opts.search_term)
            output = highlight_search_term(output, store, term, escape)

        if opts.mention_highlight and self.mention_keys is not None:
            keys = self.mention_keys.get_current_mention_keys()
            if not opts.markdown:
                keys = [sanitize_html(key) for key in keys]
            output = highlight_current_mentions(output, store, keys, escape)

        if opts.markdown:
            output = self.renderer.render(output)

        output = store.resolve(output)

        if opts.singleline:
            output = replace_newlines(output)

        counts = store.category_counts()
        duration = time.monotonic() - start
        record_format(opts.markdown, counts, duration)
        logger.debug(
            "format_complete",
            extra={
                "input_length": len(text),
                "output_length": len(output),
                "tokens": len(store),
                "markdown": opts.markdown,
                "search": bool(opts.search_term),
            },
        )
        return output


def format_text(
    text: str,
    options: FormatOptions | Mapping[str, Any] | None = None,
    *,
    user_directory: UserDirectory,
    mention_keys: MentionKeySource | None = None,
    renderer: MarkdownRenderer,
    link_detector: LinkDetector,
) -> str:
    """Format a message with explicitly supplied collaborators."""
    formatter = TextFormatter(
        user_directory=user_directory,
        mention_keys=mention_keys,
        renderer=renderer,
        link_detector=link_detector,
    )
    return formatter.format_text(text, options)
