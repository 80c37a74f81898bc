"""Pytest configuration for fixcsv tests."""

from __future__ import annotations

import pytest

from fixcsv.config.model import EncoderConfig
from tests.records import ReferenceInfo
from tests.test_constants import REFERENCE_FIELDS


@pytest.fixture
def config() -> EncoderConfig:
    return EncoderConfig()


@pytest.fixture
def strict_config() -> EncoderConfig:
    return EncoderConfig(strict=True)


@pytest.fixture
def reference_info() -> ReferenceInfo:
    return ReferenceInfo(**REFERENCE_FIELDS)  # type: ignore[arg-type]
