"""
Signing transport

Composes the mnemonic signer stage with the RPC transport stage into a single
request pipeline and owns its lifecycle:

    CONSTRUCTED --start()--> STARTED --stop()--> STOPPED (terminal)

Callers never hold a transport beyond one operation: use signing_transport()
or with_transport(), which stop the pipeline on every exit path.
"""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from enum import Enum
from typing import Any, Callable, Dict, Iterator, List, Optional, Sequence, TypeVar

from ..errors import TransactionError, TransportConstructionError, TransportStateError
from .rpc import RpcTransportStage
from .stage import PipelineStage, to_int, to_rpc_transaction
from .wallet import MnemonicWalletStage

logger = logging.getLogger(__name__)

T = TypeVar("T")


class TransportState(Enum):
    """Lifecycle state of a signing transport"""
    CONSTRUCTED = "constructed"
    STARTED = "started"
    STOPPED = "stopped"


class SigningTransport:
    """
    Ordered pipeline of named stages behind one capability interface

    Capabilities:
    - list_addresses(): derived account addresses, index order
    - get_balance(address): wei balance
    - send_transaction(tx): tx hash
    - call(tx): hex return data
    - sign_typed_data(address, typed_data): EIP-712 signature
    - wait_for_receipt(tx_hash): mined receipt

    Usage:
        with signing_transport(config) as transport:
            addresses = transport.list_addresses()
    """

    def __init__(
        self,
        stages: Sequence[PipelineStage],
        receipt_timeout_seconds: float = 120.0,
        receipt_poll_interval_seconds: float = 0.1,
    ):
        self._stages: List[PipelineStage] = list(stages)
        self._validate_stages(self._stages)
        self._receipt_timeout = receipt_timeout_seconds
        self._poll_interval = receipt_poll_interval_seconds
        self._state = TransportState.CONSTRUCTED

    @classmethod
    def from_config(cls, config, stages: Optional[Sequence[PipelineStage]] = None) -> "SigningTransport":
        """
        Build the default pipeline: signer stage first, then RPC transport.

        The signer must come first so outgoing transactions are signed
        locally before they reach the node.
        """
        if stages is None:
            stages = [
                MnemonicWalletStage.from_config(config),
                RpcTransportStage.from_config(config),
            ]
        return cls(
            stages,
            receipt_timeout_seconds=config.receipt_timeout_seconds,
            receipt_poll_interval_seconds=config.receipt_poll_interval_seconds,
        )

    @staticmethod
    def _validate_stages(stages: List[PipelineStage]) -> None:
        if not stages:
            raise TransportConstructionError.invalid_pipeline("no stages")

        names = [stage.name for stage in stages]
        if len(set(names)) != len(names):
            raise TransportConstructionError.invalid_pipeline(f"duplicate stage names: {names}")

        if not stages[-1].terminal:
            raise TransportConstructionError.invalid_pipeline(f"last stage '{names[-1]}' is not terminal")
        for stage in stages[:-1]:
            if stage.terminal:
                raise TransportConstructionError.invalid_pipeline(f"terminal stage '{stage.name}' is not last")

    @property
    def state(self) -> TransportState:
        return self._state

    @property
    def stage_names(self) -> List[str]:
        return [stage.name for stage in self._stages]

    def start(self) -> None:
        """Start stages in order; on failure stop those already started"""
        if self._state is not TransportState.CONSTRUCTED:
            raise TransportStateError(
                f"Cannot start transport in state {self._state.value}", state=self._state.value
            )

        started: List[PipelineStage] = []
        try:
            for stage in self._stages:
                stage.start()
                started.append(stage)
        except Exception:
            for stage in reversed(started):
                try:
                    stage.stop()
                except Exception as stop_error:
                    logger.warning(f"Stage '{stage.name}' failed to stop after start error: {stop_error}")
            self._state = TransportState.STOPPED
            raise

        self._state = TransportState.STARTED
        logger.debug(f"Transport started: stages={self.stage_names}")

    def stop(self) -> None:
        """Stop stages in reverse order; the transport is not reusable afterwards"""
        if self._state is TransportState.STOPPED:
            return

        self._state = TransportState.STOPPED
        first_error: Optional[Exception] = None
        for stage in reversed(self._stages):
            try:
                stage.stop()
            except Exception as e:
                logger.error(f"Stage '{stage.name}' failed to stop: {e}")
                if first_error is None:
                    first_error = e

        logger.debug("Transport stopped")
        if first_error is not None:
            raise first_error

    def request(self, method: str, params: Optional[List[Any]] = None) -> Any:
        """Send a raw JSON-RPC request through the pipeline"""
        if self._state is not TransportState.STARTED:
            raise TransportStateError.not_started(self._state.value)
        return self._dispatch(0, method, list(params or []))

    def _dispatch(self, index: int, method: str, params: List[Any]) -> Any:
        stage = self._stages[index]
        if index + 1 < len(self._stages):
            def forward(next_method: str, next_params: List[Any]) -> Any:
                return self._dispatch(index + 1, next_method, next_params)
        else:
            forward = None
        return stage.handle(method, params, forward)

    def list_addresses(self) -> List[str]:
        return [address.lower() for address in self.request("eth_accounts")]

    def get_balance(self, address: str) -> int:
        return to_int(self.request("eth_getBalance", [address.lower(), "latest"]))

    def send_transaction(self, tx: Dict[str, Any]) -> str:
        return self.request("eth_sendTransaction", [tx])

    def call(self, tx: Dict[str, Any]) -> str:
        return self.request("eth_call", [to_rpc_transaction(tx), "latest"])

    def sign_typed_data(self, address: str, typed_data: Dict[str, Any]) -> str:
        return self.request("eth_signTypedData", [address.lower(), typed_data])

    def wait_for_receipt(self, tx_hash: str) -> Dict[str, Any]:
        """
        Poll for the receipt of tx_hash

        Raises:
            TransactionError: If the transaction reverted or no receipt arrived in time
        """
        deadline = time.monotonic() + self._receipt_timeout
        while True:
            receipt = self.request("eth_getTransactionReceipt", [tx_hash])
            if receipt:
                # Pre-Byzantium receipts carry no status
                status = receipt.get("status")
                if status is not None and to_int(status) == 0:
                    raise TransactionError.reverted(tx_hash)
                return receipt
            if time.monotonic() >= deadline:
                raise TransactionError.receipt_timeout(tx_hash, self._receipt_timeout)
            time.sleep(self._poll_interval)

    def __repr__(self) -> str:
        return f"SigningTransport(stages={self.stage_names}, state={self._state.value})"


@contextmanager
def signing_transport(
    config,
    stages: Optional[Sequence[PipelineStage]] = None,
) -> Iterator[SigningTransport]:
    """
    Acquire a started transport for the duration of a with-block.

    The transport is stopped exactly once on every exit path. If the body
    raised, a teardown failure is logged and the body's error propagates;
    otherwise a teardown failure propagates.

    Args:
        config: PipelineConfig
        stages: Optional explicit stage list (defaults to signer + RPC transport)
    """
    transport = SigningTransport.from_config(config, stages=stages)
    transport.start()
    try:
        yield transport
    except BaseException:
        try:
            transport.stop()
        except Exception as stop_error:
            logger.warning(f"Transport teardown failed after operation error: {stop_error}")
        raise
    transport.stop()


def with_transport(
    config,
    fn: Callable[[SigningTransport], T],
    stages: Optional[Sequence[PipelineStage]] = None,
) -> T:
    """Run fn with a started transport and return its result"""
    with signing_transport(config, stages=stages) as transport:
        return fn(transport)
