"""
Mnemonic wallet signer stage

Derives the node accounts from a BIP-39 mnemonic and signs locally:
- eth_accounts: answered from the derived accounts
- eth_sendTransaction: filled, signed and forwarded as eth_sendRawTransaction
- eth_signTypedData: EIP-712 signature by a derived account
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional

from eth_account import Account
from eth_account.messages import encode_typed_data
from eth_account.signers.local import LocalAccount
from web3 import Web3

from ..errors import TransportConstructionError
from .stage import Forward, PipelineStage, to_int, to_rpc_transaction

logger = logging.getLogger(__name__)

Account.enable_unaudited_hdwallet_features()

_TYPED_DATA_METHODS = ("eth_signTypedData", "eth_signTypedData_v3", "eth_signTypedData_v4")


class MnemonicWalletStage(PipelineStage):
    """
    Signer stage holding the accounts derived from one mnemonic

    Usage:
        signer = MnemonicWalletStage.from_config(config)
        signer.addresses  # ['0x5409ed02...', ...]
    """

    name = "signer"

    def __init__(
        self,
        mnemonic: str,
        derivation_paths: List[str],
        tx_gas: int = 400_000,
    ):
        """
        Args:
            mnemonic: BIP-39 mnemonic phrase
            derivation_paths: Full derivation path per account, index order
            tx_gas: Gas limit used when a transaction carries none
        """
        try:
            accounts = [Account.from_mnemonic(mnemonic, account_path=path) for path in derivation_paths]
        except Exception as e:
            raise TransportConstructionError.invalid_mnemonic(e) from e

        self._accounts: List[LocalAccount] = accounts
        self._by_address: Dict[str, LocalAccount] = {acct.address.lower(): acct for acct in accounts}
        self._tx_gas = tx_gas

    @classmethod
    def from_config(cls, config) -> "MnemonicWalletStage":
        paths = [config.derivation_path(i) for i in range(config.address_search_limit)]
        return cls(config.mnemonic, paths, tx_gas=config.tx_gas)

    @property
    def addresses(self) -> List[str]:
        """Derived addresses, lowercase, in index order"""
        return [acct.address.lower() for acct in self._accounts]

    def owns(self, address: str) -> bool:
        return address.lower() in self._by_address

    def handle(self, method: str, params: List[Any], forward: Optional[Forward]) -> Any:
        if method == "eth_accounts":
            return self.addresses

        if method == "eth_sendTransaction":
            tx = dict(params[0])
            sender = str(tx.get("from", "")).lower()
            if sender in self._by_address:
                return self._sign_and_forward(self._by_address[sender], tx, forward)
            return super().handle(method, [to_rpc_transaction(tx)], forward)

        if method in _TYPED_DATA_METHODS:
            address, typed_data = params[0], params[1]
            if address.lower() in self._by_address:
                return self._sign_typed_data(self._by_address[address.lower()], typed_data)

        return super().handle(method, params, forward)

    def _sign_and_forward(self, account: LocalAccount, tx: Dict[str, Any], forward: Forward) -> str:
        sender = account.address.lower()
        tx.pop("from", None)

        if "nonce" not in tx:
            tx["nonce"] = to_int(forward("eth_getTransactionCount", [sender, "pending"]))
        if "gasPrice" not in tx and "maxFeePerGas" not in tx:
            tx["gasPrice"] = to_int(forward("eth_gasPrice", []))
        if "chainId" not in tx:
            tx["chainId"] = to_int(forward("eth_chainId", []))
        tx.setdefault("gas", self._tx_gas)
        tx.setdefault("value", 0)
        if tx.get("to"):
            tx["to"] = Web3.to_checksum_address(tx["to"])

        signed = account.sign_transaction(tx)
        logger.debug(f"Signed tx from {sender[:10]}... nonce={tx['nonce']} to={tx.get('to')}")

        return forward("eth_sendRawTransaction", [Web3.to_hex(signed.raw_transaction)])

    @staticmethod
    def _sign_typed_data(account: LocalAccount, typed_data: Any) -> str:
        if isinstance(typed_data, str):
            typed_data = json.loads(typed_data)
        signable = encode_typed_data(full_message=typed_data)
        signed = account.sign_message(signable)
        return Web3.to_hex(signed.signature)

    def __repr__(self) -> str:
        return f"MnemonicWalletStage(accounts={len(self._accounts)})"
