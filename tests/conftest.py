"""Shared fixtures for formscope tests."""

from pathlib import Path

import pytest

from formscope.verification import Verifier

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES


@pytest.fixture
def profiles_dir() -> Path:
    return FIXTURES / "profiles"


@pytest.fixture
def name_verifier() -> Verifier:
    """Verifier requiring name_first and name_last."""
    return Verifier.from_dict("name", {
        "name_first": {"required": True},
        "name_last": {"required": True},
    })


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep FORMSCOPE_* settings from the developer's shell out of tests."""
    for key in ("FORMSCOPE_PROFILES_PATH", "FORMSCOPE_FREEZE_FORMAT", "FORMSCOPE_LOG_LEVEL"):
        monkeypatch.delenv(key, raising=False)
