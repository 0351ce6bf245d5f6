"""Pydantic model for one suspect mention flattened out of a news item."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class NewsMentionRecord(BaseModel):
    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    title: str = Field(min_length=1)
    link: str = Field(min_length=1)
    suspect: str = Field(min_length=2)
    summary: str = ""
    pub_date: str = ""
    feed: str = ""
    position: int = Field(default=1, ge=1)
    name_count: int = Field(default=1, ge=1)
