"""
Configuration Unit Tests
"""

import dataclasses
import logging
import sys
from pathlib import Path

import pytest

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from dex_fixtures.config import (
    DEFAULT_MNEMONIC,
    LoggingConfig,
    PipelineConfig,
    setup_logging,
    should_seed_fixtures,
)
from dex_fixtures.errors import ConfigurationError


@pytest.fixture
def clean_env(monkeypatch):
    for key in (
        "FIXTURE_RPC_URL",
        "FIXTURE_NETWORK_ID",
        "FIXTURE_MNEMONIC",
        "FIXTURE_DERIVATION_PATH",
        "FIXTURE_ADDRESS_SEARCH_LIMIT",
        "FIXTURE_TX_GAS",
        "FIXTURE_RPC_TIMEOUT",
        "FIXTURE_RECEIPT_TIMEOUT",
        "FIXTURE_ORDER_TTL_SECONDS",
        "LOCAL_NODE",
    ):
        monkeypatch.delenv(key, raising=False)
    return monkeypatch


class TestPipelineConfig:
    """Tests for PipelineConfig"""

    def test_defaults(self):
        config = PipelineConfig()

        assert config.tx_gas == 400_000
        assert config.mnemonic == DEFAULT_MNEMONIC
        assert config.base_derivation_path == "44'/60'/0'/0"
        assert config.address_search_limit == 11
        assert config.rpc_url == "http://127.0.0.1:8545"
        assert config.network_id == 50

    def test_immutable(self):
        config = PipelineConfig()
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.rpc_url = "http://other:8545"

    def test_derivation_path(self):
        config = PipelineConfig()
        assert config.derivation_path(0) == "m/44'/60'/0'/0/0"
        assert config.derivation_path(10) == "m/44'/60'/0'/0/10"

    def test_derivation_path_with_prefix(self):
        config = PipelineConfig(base_derivation_path="m/44'/60'/0'/0/")
        assert config.derivation_path(3) == "m/44'/60'/0'/0/3"

    def test_from_env_defaults(self, clean_env):
        config = PipelineConfig.from_env()
        assert config == PipelineConfig()

    def test_from_env_overrides(self, clean_env):
        clean_env.setenv("FIXTURE_RPC_URL", "http://node:8545")
        clean_env.setenv("FIXTURE_NETWORK_ID", "3")
        clean_env.setenv("FIXTURE_ADDRESS_SEARCH_LIMIT", "5")
        clean_env.setenv("FIXTURE_TX_GAS", "21000")

        config = PipelineConfig.from_env()

        assert config.rpc_url == "http://node:8545"
        assert config.network_id == 3
        assert config.address_search_limit == 5
        assert config.tx_gas == 21000

    def test_from_env_invalid_int_uses_default(self, clean_env):
        clean_env.setenv("FIXTURE_TX_GAS", "lots")
        assert PipelineConfig.from_env().tx_gas == 400_000

    def test_validate_missing_url(self):
        with pytest.raises(ConfigurationError):
            PipelineConfig(rpc_url="").validate()

    def test_validate_missing_mnemonic(self):
        with pytest.raises(ConfigurationError):
            PipelineConfig(mnemonic="  ").validate()

    def test_validate_search_limit(self):
        with pytest.raises(ConfigurationError):
            PipelineConfig(address_search_limit=1).validate()

    def test_validate_returns_self(self):
        config = PipelineConfig()
        assert config.validate() is config


class TestShouldSeedFixtures:
    """Tests for the LOCAL_NODE toggle"""

    def test_unset(self, clean_env):
        assert should_seed_fixtures() is False

    @pytest.mark.parametrize("value", ["true", "1", "yes", "ON"])
    def test_enabled(self, clean_env, value):
        clean_env.setenv("LOCAL_NODE", value)
        assert should_seed_fixtures() is True

    @pytest.mark.parametrize("value", ["false", "0", ""])
    def test_disabled(self, clean_env, value):
        clean_env.setenv("LOCAL_NODE", value)
        assert should_seed_fixtures() is False


class TestLogging:
    """Tests for setup_logging"""

    def test_level(self):
        assert LoggingConfig(log_level="debug").level == logging.DEBUG
        assert LoggingConfig(log_level="bogus").level == logging.INFO

    def test_file_and_console_handlers(self, tmp_path):
        log_file = tmp_path / "logs" / "fixtures.log"
        logger = setup_logging(
            LoggingConfig(log_file=str(log_file), log_level="INFO", console_output=True),
            logger_name="dex_fixtures_test",
        )

        assert len(logger.handlers) == 2
        assert log_file.exists()

        for handler in logger.handlers[:]:
            handler.close()
            logger.removeHandler(handler)

    def test_reconfigure_replaces_handlers(self):
        log_config = LoggingConfig(log_file="", console_output=True)
        setup_logging(log_config, logger_name="dex_fixtures_test2")
        logger = setup_logging(log_config, logger_name="dex_fixtures_test2")

        assert len(logger.handlers) == 1
