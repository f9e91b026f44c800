from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class FormatOptions(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    search_term: str | None = Field(default=None, alias="searchTerm")
    mention_highlight: bool = Field(default=True, alias="mentionHighlight")
    singleline: bool = False
    markdown: bool = True
