"""Shared fixtures for firetruck tests."""

from __future__ import annotations

import pytest

from firetruck.config import CliState
from tests.fakes import FakeContractService


@pytest.fixture
def service() -> FakeContractService:
    """Empty in-memory contract service."""
    return FakeContractService()


@pytest.fixture
def target_service() -> FakeContractService:
    """Second in-memory service used as a migration destination."""
    return FakeContractService()


@pytest.fixture
def cli_state(service: FakeContractService) -> CliState:
    """CLI state whose source and target both point at ``service``."""
    config = service.config()
    return CliState(source=config, target=config)


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch, tmp_path):
    """Keep tests independent of the developer's environment and config file."""
    for name in ("FT_SERVICE", "FT_SERVICE_TARGET", "FT_TIMEOUT", "FT_MAX_CONCURRENCY"):
        monkeypatch.delenv(name, raising=False)
    import firetruck.config as config_module

    monkeypatch.setattr(config_module, "CONFIG_PATH", tmp_path / "config.toml")
