from __future__ import annotations

from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest

from src.app.settings import settings

FORMAT_CALLS = Counter(
    "text_format_calls_total",
    "Total formatted messages",
    ["markdown"],
)
FORMAT_TOKENS = Counter(
    "text_format_tokens_total",
    "Placeholder tokens registered while formatting",
    ["category"],
)
FORMAT_LATENCY = Histogram(
    "text_format_duration_seconds",
    "Message formatting duration in seconds",
)


def record_format(markdown: bool, token_counts: dict[str, int], duration: float) -> None:
    if not settings.metrics_enabled:
        return
    FORMAT_CALLS.labels(str(markdown).lower()).inc()
    for category, count in token_counts.items():
        FORMAT_TOKENS.labels(category).inc(count)
    FORMAT_LATENCY.observe(duration)


def metrics_payload() -> tuple[bytes, str]:
    """Return the exposition body and its content type."""
    return generate_latest(), CONTENT_TYPE_LATEST
