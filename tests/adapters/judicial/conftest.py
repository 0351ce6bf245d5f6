"""Shared fixtures for judicial adapter tests."""

from __future__ import annotations

import pytest

from guardianbee.config.judicial import JudicialConfig


@pytest.fixture
def judicial_config() -> JudicialConfig:
    return JudicialConfig(user="user", password="secret", base_url="https://judicial.test/api")
