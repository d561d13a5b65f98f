"""
Infrastructure layer for DEX fixtures

Provides:
- SigningTransport: ordered stage pipeline with start/stop lifecycle
- MnemonicWalletStage: local signer over mnemonic-derived accounts
- RpcTransportStage: JSON-RPC over HTTP
- signing_transport / with_transport: scoped transport acquisition
- CorrelationContext: correlation IDs for log tracing
"""

from .stage import PipelineStage, to_int, to_rpc_transaction
from .wallet import MnemonicWalletStage
from .rpc import RpcTransportStage
from .transport import (
    SigningTransport,
    TransportState,
    signing_transport,
    with_transport,
)
from .tracing import CorrelationContext, get_correlation_id, log_with_correlation

__all__ = [
    "PipelineStage",
    "to_int",
    "to_rpc_transaction",
    "MnemonicWalletStage",
    "RpcTransportStage",
    "SigningTransport",
    "TransportState",
    "signing_transport",
    "with_transport",
    "CorrelationContext",
    "get_correlation_id",
    "log_with_correlation",
]
