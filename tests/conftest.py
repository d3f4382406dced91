"""Pytest fixtures for validationlog tests."""

import pytest

from validationlog.config import ENV_VAR


@pytest.fixture(autouse=True)
def no_levels_env(monkeypatch):
    """Keep a VALIDATIONLOG_LEVELS set in the developer's shell out of the tests."""
    monkeypatch.delenv(ENV_VAR, raising=False)
