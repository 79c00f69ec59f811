"""Pytest fixtures for occuland tests.

Every test gets its own registry instances and accounts, so no state
leaks between scenarios.
"""

from __future__ import annotations

# Load environment variables from .env before any tests run
from dotenv import load_dotenv

load_dotenv()

from collections.abc import Iterator

import pytest

from occuland import config as occuland_config
from occuland.config_schema import LandConfig, RegistryConfig
from occuland.registry import AssetRegistry, EventLogger, LandRegistry, reset_event_loggers


@pytest.fixture(autouse=True)
def fresh_config() -> Iterator[None]:
    """Reload config from defaults and drop shared journals for every test."""
    occuland_config.reset_config()
    reset_event_loggers()
    yield
    occuland_config.reset_config()
    reset_event_loggers()


def _account(n: int) -> str:
    return "0x" + format(n, "040x")


@pytest.fixture
def deployer() -> str:
    return _account(0xD0)


@pytest.fixture
def addr1() -> str:
    return _account(0xA1)


@pytest.fixture
def addr2() -> str:
    return _account(0xA2)


@pytest.fixture
def addr3() -> str:
    return _account(0xA3)


@pytest.fixture
def addr4() -> str:
    return _account(0xA4)


@pytest.fixture
def event_logger() -> EventLogger:
    """In-memory event journal."""
    return EventLogger()


@pytest.fixture
def asset_registry(deployer: str, addr1: str, event_logger: EventLogger) -> AssetRegistry:
    """Occuland registry deployed by ``deployer`` with ``addr1`` as minter."""
    return AssetRegistry(deployer, addr1, config=RegistryConfig(), event_logger=event_logger)


@pytest.fixture
def explicit_registry(deployer: str, addr1: str) -> AssetRegistry:
    """Occuland registry where the mint id argument is the token id."""
    return AssetRegistry(
        deployer, addr1, config=RegistryConfig(token_id_policy="explicit")
    )


@pytest.fixture
def minted_registry(asset_registry: AssetRegistry, addr1: str, addr2: str) -> AssetRegistry:
    """Registry holding token 1 (owned by addr1) and token 2 (owned by addr2)."""
    asset_registry.mint(addr1, addr1, 1, "testing uri")
    asset_registry.mint(addr1, addr2, 1, "testing uri for addr2")
    return asset_registry


@pytest.fixture
def land_registry(deployer: str, event_logger: EventLogger) -> LandRegistry:
    """Land registry with the default owner_or_approved operator policy."""
    return LandRegistry(deployer, config=LandConfig(), event_logger=event_logger)
