"""Pydantic models for rows scraped from government penalty registries."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


class RegistryRow(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True, str_strip_whitespace=True)

    page_url: str = Field(min_length=1)
    date: str | None = None

    _normalize_date = field_validator("date", mode="before")(_blank_to_none)


class CrcSanctionRow(RegistryRow):
    """Child and Youth Welfare Act sanction notice."""

    county: str = ""
    target: str = Field(min_length=1)
    violation: str = Field(min_length=1)


class NcwisPenaltyRow(RegistryRow):
    """Penalised childcare provider (home nanny or infant daycare centre)."""

    name: str = Field(min_length=1)
    category: str = ""
    violation: str = ""
    location: str = ""


class EcePenaltyRow(RegistryRow):
    """Kindergarten penalty from the national preschool information network."""

    kindergarten: str = Field(min_length=1)
    violation: str = ""
    location: str = ""


class KindyInfoPenaltyRow(RegistryRow):
    """Preschool penalty aggregated by kindyinfo.com."""

    city: str = ""
    district: str = ""
    name: str = Field(min_length=1)
    count: str = ""
    penalty: str = ""
