"""
Shared fixtures for unit tests.

FakeNodeStage stands in for the RPC transport stage so the real signer stage
and pipeline can run without a node.
"""

import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest
from eth_account import Account
from web3 import Web3

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from dex_fixtures.config import PipelineConfig
from dex_fixtures.infra.stage import PipelineStage
from dex_fixtures.infra.wallet import MnemonicWalletStage

# First two accounts of the default development mnemonic
FIRST_ADDRESS = "0x5409ed021d9299bf6814279a6a1411a7e866a631"
SECOND_ADDRESS = "0x6ecbe1db9ef729cbe972c83fb886247691fb6beb"

FAKE_CHAIN_ID = 1337


class FakeNodeStage(PipelineStage):
    """Terminal stage answering the JSON-RPC methods the fixtures use"""

    name = "transport"
    terminal = True

    def __init__(self, balances: Optional[Dict[str, int]] = None):
        self.balances = {k.lower(): v for k, v in (balances or {}).items()}
        self.nonces: Dict[str, int] = {}
        self.requests: List[tuple] = []
        self.sent: List[Dict[str, Any]] = []
        self.reverted: set = set()
        self.start_calls = 0
        self.stop_calls = 0

    def start(self) -> None:
        self.start_calls += 1

    def stop(self) -> None:
        self.stop_calls += 1

    def handle(self, method, params, forward):
        self.requests.append((method, params))

        if method == "eth_getBalance":
            return hex(self.balances.get(params[0].lower(), 0))
        if method == "eth_getTransactionCount":
            return hex(self.nonces.get(params[0].lower(), 0))
        if method == "eth_gasPrice":
            return hex(1_000_000_000)
        if method == "eth_chainId":
            return hex(FAKE_CHAIN_ID)
        if method == "eth_sendRawTransaction":
            raw = params[0]
            sender = Account.recover_transaction(raw).lower()
            self.nonces[sender] = self.nonces.get(sender, 0) + 1
            tx_hash = Web3.to_hex(Web3.keccak(hexstr=raw))
            self.sent.append({"raw": raw, "sender": sender, "hash": tx_hash})
            return tx_hash
        if method == "eth_getTransactionReceipt":
            return {"transactionHash": params[0], "status": "0x0" if params[0] in self.reverted else "0x1"}
        if method == "eth_call":
            return "0x"
        raise AssertionError(f"Unexpected RPC method {method}")

    def methods(self) -> List[str]:
        return [method for method, _ in self.requests]


@pytest.fixture
def config():
    """Default configuration with a short search limit"""
    return PipelineConfig(address_search_limit=3, receipt_poll_interval_seconds=0)


@pytest.fixture
def fake_node():
    return FakeNodeStage()


@pytest.fixture
def signer(config):
    return MnemonicWalletStage.from_config(config)
