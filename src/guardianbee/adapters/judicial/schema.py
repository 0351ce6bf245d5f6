"""Pydantic models for the judicial open-data API and its flattened records."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

JID_PARTS = 6


class JudicialBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class AuthResponse(JudicialBaseModel):
    token: str = Field(alias="Token", min_length=1)


class JudgmentListDay(JudicialBaseModel):
    date: str
    jids: list[str] = Field(alias="list", default_factory=list)


class JudgmentFullText(JudicialBaseModel):
    type: str = Field(alias="JFULLTYPE", default="text")
    content: str = Field(alias="JFULLCONTENT", default="")
    pdf: str = Field(alias="JFULLPDF", default="")


class JudgmentDocument(JudicialBaseModel):
    jid: str = Field(alias="JID")
    year: str = Field(alias="JYEAR", default="")
    case_type: str = Field(alias="JCASE", default="")
    number: str = Field(alias="JNO", default="")
    date: str = Field(alias="JDATE", default="")
    title: str = Field(alias="JTITLE", default="")
    full_text: JudgmentFullText | None = Field(alias="JFULLX", default=None)

    @property
    def content(self) -> str:
        return self.full_text.content if self.full_text is not None else ""


class DefendantRecord(BaseModel):
    """One defendant of one child-related judgment, as handed to the translator."""

    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    jid: str = Field(min_length=1)
    defendant: str = Field(min_length=1)
    title: str = ""
    date: str = ""
    content: str = ""
    position: int = 1
    defendant_count: int = 1

    @field_validator("jid")
    @classmethod
    def _check_jid(cls, value: str) -> str:
        if len(value.split(",")) != JID_PARTS:
            raise ValueError(f"judgment id must have {JID_PARTS} comma-separated parts")
        return value
