"""
DEX Fixtures - deterministic exchange fixtures on a local EVM node

Provides:
- Funding of accounts with ETH from the node's mnemonic accounts
- Wrapping ETH into WETH and transferring it
- Batches of signed 0x v2 sell orders
"""

from .client import FixtureClient
from .config import PipelineConfig, LoggingConfig, setup_logging, should_seed_fixtures
from .types import (
    SignedOrder,
    Order,
    NetworkAddresses,
    to_internal_order,
    get_network_addresses,
    target_network_name,
    network_prompt,
)
from .errors import (
    ErrorCode,
    FixtureError,
    RpcCallError,
    TransportConstructionError,
    TransportStateError,
    InsufficientFundsError,
    TransactionError,
    ConfigurationError,
)
from .infra import SigningTransport, signing_transport, with_transport

__all__ = [
    # Client
    "FixtureClient",
    # Configuration
    "PipelineConfig",
    "LoggingConfig",
    "setup_logging",
    "should_seed_fixtures",
    # Types
    "SignedOrder",
    "Order",
    "NetworkAddresses",
    "to_internal_order",
    "get_network_addresses",
    "target_network_name",
    "network_prompt",
    # Errors
    "ErrorCode",
    "FixtureError",
    "RpcCallError",
    "TransportConstructionError",
    "TransportStateError",
    "InsufficientFundsError",
    "TransactionError",
    "ConfigurationError",
    # Transport
    "SigningTransport",
    "signing_transport",
    "with_transport",
]

__version__ = "0.1.0"
