from __future__ import annotations

import pytest

from guardianbee.domain.model import RiskTag, RoleTag
from guardianbee.domain.taxonomy import classify_role, extract_risk_tags


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("居家托育人員違反規定", RoleTag.NANNY),
        ("某托嬰中心負責人", RoleTag.DAYCARE),
        ("私立幼兒園園長", RoleTag.KINDERGARTEN),
        ("家教老師涉案", RoleTag.TUTOR),
        ("補習班負責人", RoleTag.CRAM_SCHOOL_TEACHER),
        ("游泳教練", RoleTag.COACH),
        ("國小導師", RoleTag.SCHOOL_TEACHER),
        ("Private tutor arrested", RoleTag.TUTOR),
        ("鄰居", RoleTag.OTHER),
    ],
)
def test_classify_role(text: str, expected: RoleTag) -> None:
    assert classify_role(text) is expected


def test_classify_role_prefers_more_specific_role() -> None:
    # "保母" outranks the generic "老師" mentioned in the same text.
    assert classify_role("前幼兒園老師轉任保母") is RoleTag.NANNY


def test_classify_role_scans_every_text() -> None:
    assert classify_role(None, "", "安親班") is RoleTag.CRAM_SCHOOL_TEACHER


def test_extract_risk_tags_collects_every_group() -> None:
    tags = extract_risk_tags("保母虐待並疏忽照顧幼童，且未立案收托")

    assert tags == {RiskTag.ABUSE, RiskTag.NEGLECT, RiskTag.ILLEGAL_OPERATION}


def test_extract_risk_tags_sexual_offences() -> None:
    assert RiskTag.SEXUAL_HARASSMENT in extract_risk_tags("涉嫌妨害性自主")


def test_extract_risk_tags_is_case_insensitive() -> None:
    assert extract_risk_tags("Child ABUSE case") == {RiskTag.ABUSE}


def test_extract_risk_tags_falls_back_to_generic_violation() -> None:
    assert extract_risk_tags("違反兒童及少年福利與權益保障法") == {RiskTag.GENERIC_VIOLATION}
    assert extract_risk_tags(None) == {RiskTag.GENERIC_VIOLATION}


def test_tags_carry_display_labels() -> None:
    assert RoleTag.NANNY.label == "保母"
    assert RiskTag.GENERIC_VIOLATION.label == "違反兒少法"
