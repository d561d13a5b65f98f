"""
Exception definitions for DEX fixtures
"""

from enum import Enum
from typing import Optional


class ErrorCode(Enum):
    """
    Unified error codes for fixture operations

    1xxx - RPC errors
    2xxx - Transaction errors
    3xxx - Funding errors
    6xxx - Transport errors
    9xxx - Configuration errors
    """
    # RPC errors
    RPC_CONNECTION_FAILED = "1001"
    RPC_TIMEOUT = "1002"
    RPC_CALL_FAILED = "1003"
    RPC_INVALID_RESPONSE = "1004"

    # Transaction errors
    TX_REVERTED = "2001"
    TX_RECEIPT_TIMEOUT = "2002"

    # Funding errors
    NO_FUNDED_ACCOUNT = "3001"

    # Transport errors
    TRANSPORT_INVALID_MNEMONIC = "6001"
    TRANSPORT_UNREACHABLE = "6002"
    TRANSPORT_INVALID_PIPELINE = "6003"
    TRANSPORT_NOT_STARTED = "6004"

    # Configuration errors
    CONFIG_INVALID = "9001"
    CONFIG_MISSING = "9002"
    CONFIG_UNKNOWN_NETWORK = "9003"


class FixtureError(Exception):
    """
    Base exception for all fixture errors

    Attributes:
        message: Human-readable error message
        code: Error code for programmatic handling
        recoverable: Whether the error might succeed on a later attempt
        original_error: The underlying exception if any
        details: Additional error context
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode,
        recoverable: bool = False,
        original_error: Optional[Exception] = None,
        details: Optional[dict] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.recoverable = recoverable
        self.original_error = original_error
        self.details = details or {}

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.message}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code.value}, message={self.message!r})"


class RpcCallError(FixtureError):
    """
    Query or transaction submission failure from the transport

    Raised when:
    - The HTTP request to the node fails
    - The node answers with a JSON-RPC error object
    - The response carries no result
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.RPC_CALL_FAILED,
        original_error: Optional[Exception] = None,
        method: Optional[str] = None,
        rpc_code: Optional[int] = None,
    ):
        super().__init__(
            message,
            code,
            recoverable=code in (ErrorCode.RPC_CONNECTION_FAILED, ErrorCode.RPC_TIMEOUT),
            original_error=original_error,
            details={"method": method, "rpc_code": rpc_code},
        )
        self.method = method
        self.rpc_code = rpc_code

    @classmethod
    def request_failed(cls, method: str, error: Exception) -> "RpcCallError":
        code = ErrorCode.RPC_TIMEOUT if "timeout" in str(error).lower() else ErrorCode.RPC_CONNECTION_FAILED
        return cls(
            f"RPC request {method} failed: {error}",
            code,
            original_error=error,
            method=method,
        )

    @classmethod
    def rpc_error(cls, method: str, error: dict) -> "RpcCallError":
        return cls(
            f"RPC {method} returned error {error.get('code', -1)}: {error.get('message', 'Unknown error')}",
            ErrorCode.RPC_CALL_FAILED,
            method=method,
            rpc_code=error.get("code"),
        )

    @classmethod
    def invalid_response(cls, method: str, reason: str) -> "RpcCallError":
        return cls(
            f"Invalid response for {method}: {reason}",
            ErrorCode.RPC_INVALID_RESPONSE,
            method=method,
        )


class TransportConstructionError(FixtureError):
    """
    Signing transport could not be built or started

    Raised when:
    - The mnemonic cannot derive accounts
    - The RPC endpoint is unreachable
    - The stage pipeline is ordered incorrectly
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.TRANSPORT_UNREACHABLE,
        original_error: Optional[Exception] = None,
    ):
        super().__init__(message, code, recoverable=False, original_error=original_error)

    @classmethod
    def invalid_mnemonic(cls, error: Exception) -> "TransportConstructionError":
        return cls(
            f"Cannot derive accounts from mnemonic: {error}",
            ErrorCode.TRANSPORT_INVALID_MNEMONIC,
            original_error=error,
        )

    @classmethod
    def unreachable(cls, rpc_url: str, error: Optional[Exception] = None) -> "TransportConstructionError":
        return cls(
            f"RPC endpoint is unreachable: {rpc_url}",
            ErrorCode.TRANSPORT_UNREACHABLE,
            original_error=error,
        )

    @classmethod
    def invalid_pipeline(cls, reason: str) -> "TransportConstructionError":
        return cls(f"Invalid stage pipeline: {reason}", ErrorCode.TRANSPORT_INVALID_PIPELINE)


class TransportStateError(FixtureError):
    """Request issued on a transport that is not serving calls"""

    def __init__(self, message: str, state: Optional[str] = None):
        super().__init__(
            message,
            ErrorCode.TRANSPORT_NOT_STARTED,
            recoverable=False,
            details={"state": state},
        )
        self.state = state

    @classmethod
    def not_started(cls, state: str) -> "TransportStateError":
        return cls(f"Transport is not started (state: {state})", state=state)


class InsufficientFundsError(FixtureError):
    """
    No derived address holds enough native currency - fatal, not retried
    """

    def __init__(
        self,
        message: str,
        minimum_balance: Optional[int] = None,
        searched: Optional[int] = None,
    ):
        super().__init__(
            message,
            ErrorCode.NO_FUNDED_ACCOUNT,
            recoverable=False,
            details={"minimum_balance": minimum_balance, "searched": searched},
        )
        self.minimum_balance = minimum_balance
        self.searched = searched

    @classmethod
    def no_funded_account(cls, minimum_balance: int, searched: int) -> "InsufficientFundsError":
        return cls(
            f"No address has more than {minimum_balance} wei (searched {searched} addresses)",
            minimum_balance=minimum_balance,
            searched=searched,
        )


class TransactionError(FixtureError):
    """
    Submitted transaction did not succeed

    Raised when:
    - The receipt reports status 0
    - No receipt arrives within the timeout
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.TX_REVERTED,
        tx_hash: Optional[str] = None,
    ):
        super().__init__(message, code, recoverable=False, details={"tx_hash": tx_hash})
        self.tx_hash = tx_hash

    @classmethod
    def reverted(cls, tx_hash: str) -> "TransactionError":
        return cls(f"Transaction reverted: {tx_hash}", ErrorCode.TX_REVERTED, tx_hash=tx_hash)

    @classmethod
    def receipt_timeout(cls, tx_hash: str, timeout_seconds: float) -> "TransactionError":
        return cls(
            f"No receipt for {tx_hash} after {timeout_seconds}s",
            ErrorCode.TX_RECEIPT_TIMEOUT,
            tx_hash=tx_hash,
        )


class ConfigurationError(FixtureError):
    """
    Configuration-related errors

    Raised when:
    - Required configuration is missing
    - Configuration values are invalid
    - No contract addresses are known for the network
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.CONFIG_INVALID,
    ):
        super().__init__(message, code, recoverable=False)

    @classmethod
    def missing(cls, param: str) -> "ConfigurationError":
        return cls(f"Missing required configuration: {param}", ErrorCode.CONFIG_MISSING)

    @classmethod
    def invalid(cls, param: str, reason: str) -> "ConfigurationError":
        return cls(f"Invalid configuration '{param}': {reason}", ErrorCode.CONFIG_INVALID)

    @classmethod
    def unknown_network(cls, network_id: int) -> "ConfigurationError":
        return cls(
            f"No contract addresses registered for network {network_id}",
            ErrorCode.CONFIG_UNKNOWN_NETWORK,
        )
