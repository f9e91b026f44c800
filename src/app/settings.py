from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes"}


@dataclass(frozen=True)
class Settings:
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    special_mentions_raw: str = os.getenv("CHATFMT_SPECIAL_MENTIONS", "all,channel")
    link_fuzzy: bool = _env_flag("CHATFMT_LINK_FUZZY", "true")
    link_email: bool = _env_flag("CHATFMT_LINK_EMAIL", "true")
    link_extra_tlds_raw: str = os.getenv("CHATFMT_LINK_EXTRA_TLDS", "")
    markdown_breaks: bool = _env_flag("CHATFMT_MARKDOWN_BREAKS", "false")
    markdown_tables: bool = _env_flag("CHATFMT_MARKDOWN_TABLES", "true")
    metrics_enabled: bool = _env_flag("CHATFMT_METRICS_ENABLED", "true")

    @property
    def special_mentions(self) -> set[str]:
        raw = os.getenv("CHATFMT_SPECIAL_MENTIONS", self.special_mentions_raw)
        return {value.strip().lower() for value in raw.split(",") if value.strip()}

    @property
    def link_extra_tlds(self) -> list[str]:
        raw = os.getenv("CHATFMT_LINK_EXTRA_TLDS", self.link_extra_tlds_raw)
        return [value.strip().lower().lstrip(".") for value in raw.split(",") if value.strip()]


settings = Settings()
