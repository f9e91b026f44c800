from __future__ import annotations

"""HTML escaping for plain-text messages."""

# Ampersand goes first so entities added by later replacements stay intact.
_REPLACEMENTS = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ("'", "&apos;"),
    ('"', "&quot;"),
)


def sanitize_html(text: str) -> str:
    """Escape HTML metacharacters to their named entities."""
    output = text
    for char, entity in _REPLACEMENTS:
        output = output.replace(char, entity)
    return output


def keep_text(text: str) -> str:
    """Return text unchanged, for input that is already escaped."""
    return text
