"""
Error definitions for DEX fixtures
"""

from .exceptions import (
    ErrorCode,
    FixtureError,
    RpcCallError,
    TransportConstructionError,
    TransportStateError,
    InsufficientFundsError,
    TransactionError,
    ConfigurationError,
)

__all__ = [
    "ErrorCode",
    "FixtureError",
    "RpcCallError",
    "TransportConstructionError",
    "TransportStateError",
    "InsufficientFundsError",
    "TransactionError",
    "ConfigurationError",
]
