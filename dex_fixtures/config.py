"""
Configuration management for DEX fixtures

Loads settings from environment variables and .env file.
Includes logging configuration with file output and correlation ID support.

The pipeline configuration is an immutable value built once and passed to
every operation; nothing here is process-wide mutable state.
"""

import os
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, List

from dotenv import load_dotenv

from .errors import ConfigurationError

DEFAULT_MNEMONIC = "concert load couple harbor equip island argue ramp clarify fence smart topic"
DEFAULT_DERIVATION_PATH = "44'/60'/0'/0"
DEFAULT_RPC_URL = "http://127.0.0.1:8545"
DEFAULT_NETWORK_ID = 50


def _load_env_file():
    """Load .env file from project root"""
    current = Path(__file__).parent.parent  # dex_fixtures package parent
    env_file = current / ".env"

    if env_file.exists():
        load_dotenv(env_file)


# Load .env on module import
_load_env_file()


def _get_env(key: str, default: Optional[str] = "") -> Optional[str]:
    """Get environment variable with default"""
    value = os.getenv(key)
    if value is None:
        return default
    return value


def _get_env_float(key: str, default: float) -> float:
    """Get environment variable as float"""
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        logging.getLogger(__name__).warning(
            f"Invalid float value for {key}='{value}', using default={default}"
        )
        return default


def _get_env_int(key: str, default: int) -> int:
    """Get environment variable as int"""
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        logging.getLogger(__name__).warning(
            f"Invalid int value for {key}='{value}', using default={default}"
        )
        return default


def _get_env_bool(key: str, default: bool) -> bool:
    """Get environment variable as bool"""
    value = os.getenv(key)
    if value is None:
        return default
    return value.lower() in ("true", "1", "yes", "on")


@dataclass(frozen=True)
class PipelineConfig:
    """
    Signing transport and fixture configuration

    Environment variables (see from_env):
        FIXTURE_RPC_URL: JSON-RPC endpoint (default: http://127.0.0.1:8545)
        FIXTURE_NETWORK_ID: Network id used to resolve contract addresses (default: 50)
        FIXTURE_MNEMONIC: Mnemonic phrase of the funded node accounts
        FIXTURE_DERIVATION_PATH: Base derivation path (default: 44'/60'/0'/0)
        FIXTURE_ADDRESS_SEARCH_LIMIT: Number of derived addresses (default: 11)
        FIXTURE_TX_GAS: Default gas limit per transaction (default: 400000)
        FIXTURE_RPC_TIMEOUT: RPC request timeout in seconds (default: 1.0)
        FIXTURE_RECEIPT_TIMEOUT: Receipt wait timeout in seconds (default: 120)
        FIXTURE_ORDER_TTL_SECONDS: Lifetime of generated orders (default: 86400)
    """
    tx_gas: int = 400_000
    mnemonic: str = DEFAULT_MNEMONIC
    base_derivation_path: str = DEFAULT_DERIVATION_PATH
    address_search_limit: int = 11
    rpc_url: str = DEFAULT_RPC_URL
    network_id: int = DEFAULT_NETWORK_ID
    rpc_timeout_seconds: float = 1.0
    receipt_timeout_seconds: float = 120.0
    receipt_poll_interval_seconds: float = 0.1
    order_ttl_seconds: int = 24 * 60 * 60

    def validate(self) -> "PipelineConfig":
        """Validate configuration, returning self for chaining"""
        if not self.rpc_url:
            raise ConfigurationError.missing("rpc_url")
        if not self.mnemonic.strip():
            raise ConfigurationError.missing("mnemonic")
        # Index 0 is the maker account, at least one more is needed for funding
        if self.address_search_limit < 2:
            raise ConfigurationError.invalid(
                "address_search_limit", f"must be at least 2, got {self.address_search_limit}"
            )
        if self.tx_gas <= 0:
            raise ConfigurationError.invalid("tx_gas", "must be positive")
        return self

    def derivation_path(self, index: int) -> str:
        """Full derivation path of the account at index"""
        base = self.base_derivation_path.strip("/")
        if base.startswith("m/"):
            base = base[2:]
        return f"m/{base}/{index}"

    @classmethod
    def from_env(cls) -> "PipelineConfig":
        """Build configuration from environment variables and .env file"""
        _load_env_file()
        return cls(
            tx_gas=_get_env_int("FIXTURE_TX_GAS", 400_000),
            mnemonic=_get_env("FIXTURE_MNEMONIC", DEFAULT_MNEMONIC),
            base_derivation_path=_get_env("FIXTURE_DERIVATION_PATH", DEFAULT_DERIVATION_PATH),
            address_search_limit=_get_env_int("FIXTURE_ADDRESS_SEARCH_LIMIT", 11),
            rpc_url=_get_env("FIXTURE_RPC_URL", DEFAULT_RPC_URL),
            network_id=_get_env_int("FIXTURE_NETWORK_ID", DEFAULT_NETWORK_ID),
            rpc_timeout_seconds=_get_env_float("FIXTURE_RPC_TIMEOUT", 1.0),
            receipt_timeout_seconds=_get_env_float("FIXTURE_RECEIPT_TIMEOUT", 120.0),
            order_ttl_seconds=_get_env_int("FIXTURE_ORDER_TTL_SECONDS", 24 * 60 * 60),
        ).validate()


def should_seed_fixtures() -> bool:
    """Whether fixture seeding against a local node is enabled (LOCAL_NODE)"""
    return _get_env_bool("LOCAL_NODE", False)


def _get_default_log_path() -> str:
    """Get default log file path under dex_fixtures/log/ with UTC timestamp"""
    from datetime import datetime, timezone
    timestamp = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")
    log_dir = Path(__file__).parent / "log"
    return str(log_dir / f"dex_fixtures_{timestamp}.log")


@dataclass
class LoggingConfig:
    """
    Logging configuration with file output and correlation ID support.

    Environment variables:
        LOG_FILE: Path to log file (overrides default)
        LOG_LEVEL: DEBUG, INFO, WARNING, ERROR, CRITICAL (default: INFO)
        LOG_FORMAT: Custom log format string
        LOG_CONSOLE: Enable console output (default: true)
        LOG_MAX_BYTES: Max log file size before rotation (default: 10MB)
        LOG_BACKUP_COUNT: Number of backup files to keep (default: 5)
    """
    log_file: str = field(default_factory=lambda: _get_env("LOG_FILE", _get_default_log_path()))
    log_level: str = field(default_factory=lambda: _get_env("LOG_LEVEL", "INFO"))
    log_format: str = field(default_factory=lambda: _get_env(
        "LOG_FORMAT",
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    ))
    console_output: bool = field(default_factory=lambda: _get_env_bool("LOG_CONSOLE", True))
    max_bytes: int = field(default_factory=lambda: _get_env_int("LOG_MAX_BYTES", 10 * 1024 * 1024))  # 10MB
    backup_count: int = field(default_factory=lambda: _get_env_int("LOG_BACKUP_COUNT", 5))

    @property
    def level(self) -> int:
        """Get numeric log level"""
        return getattr(logging, self.log_level.upper(), logging.INFO)


def setup_logging(
    log_config: Optional[LoggingConfig] = None,
    logger_name: str = "dex_fixtures",
) -> logging.Logger:
    """
    Set up logging based on configuration.

    Creates handlers for file and/or console output with optional rotation.
    The log file directory is created automatically if it doesn't exist.

    Args:
        log_config: Logging configuration (built from environment if None)
        logger_name: Name of the logger to configure (default: dex_fixtures)

    Returns:
        Configured logger instance
    """
    if log_config is None:
        log_config = LoggingConfig()

    logger = logging.getLogger(logger_name)
    logger.setLevel(log_config.level)

    # Close handlers before removing to release file handles
    for handler in logger.handlers[:]:
        handler.close()
        logger.removeHandler(handler)

    formatter = logging.Formatter(log_config.log_format)

    handlers: List[logging.Handler] = []

    if log_config.log_file:
        from logging.handlers import RotatingFileHandler

        log_path = Path(log_config.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            log_config.log_file,
            maxBytes=log_config.max_bytes,
            backupCount=log_config.backup_count,
            encoding='utf-8',
        )
        file_handler.setLevel(log_config.level)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    if log_config.console_output:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(log_config.level)
        console_handler.setFormatter(formatter)
        handlers.append(console_handler)

    for handler in handlers:
        logger.addHandler(handler)

    if log_config.log_file:
        logger.info(f"Logging initialized: file={log_config.log_file}, level={log_config.log_level}")

    return logger
