"""
Native and wrapped-native transfers from the node's funded accounts
"""

import logging

from eth_abi import encode
from web3 import Web3

from ..types import get_network_addresses
from ..infra.tracing import log_with_correlation
from .accounts import select_funded_account

logger = logging.getLogger(__name__)


def function_selector(signature: str) -> str:
    """4-byte selector of a function signature, e.g. 'transfer(address,uint256)'"""
    return Web3.to_hex(Web3.keccak(text=signature)[:4])


def encode_call(signature: str, arg_types=(), args=()) -> str:
    """Calldata for a contract function call"""
    data = function_selector(signature)
    if arg_types:
        data += encode(list(arg_types), list(args)).hex()
    return data


def send_native(transport, to_address: str, amount: int, config) -> str:
    """
    Send amount wei from a funded node account to to_address

    Args:
        transport: Started SigningTransport
        to_address: Recipient (normalized to lowercase)
        amount: Amount in wei
        config: PipelineConfig

    Returns:
        Transaction hash
    """
    sender = select_funded_account(transport, amount)

    tx_hash = transport.send_transaction({
        "from": sender,
        "to": to_address.lower(),
        "value": amount,
        "gas": config.tx_gas,
    })

    log_with_correlation(
        logging.INFO,
        f"Sent {amount} wei {sender[:10]}... -> {to_address.lower()[:10]}... tx={tx_hash}",
        "send_native",
        log=logger,
    )
    return tx_hash


def send_wrapped_native(transport, to_address: str, amount: int, config) -> str:
    """
    Wrap amount wei into the ether token and transfer it to to_address

    Two sequential transactions from the same funded account: deposit(),
    then transfer(). If the transfer fails the deposited tokens stay with
    the funded account.

    Args:
        transport: Started SigningTransport
        to_address: Recipient (normalized to lowercase)
        amount: Amount in wei
        config: PipelineConfig

    Returns:
        Transaction hash of the transfer
    """
    sender = select_funded_account(transport, amount)
    ether_token = get_network_addresses(config.network_id).ether_token
    recipient = to_address.lower()

    deposit_hash = transport.send_transaction({
        "from": sender,
        "to": ether_token,
        "value": amount,
        "data": encode_call("deposit()"),
        "gas": config.tx_gas,
    })
    transport.wait_for_receipt(deposit_hash)

    log_with_correlation(
        logging.INFO,
        f"Wrapped {amount} wei for {sender[:10]}... tx={deposit_hash}",
        "send_wrapped_native",
        log=logger,
    )

    transfer_hash = transport.send_transaction({
        "from": sender,
        "to": ether_token,
        "data": encode_call("transfer(address,uint256)", ["address", "uint256"], [recipient, amount]),
        "gas": config.tx_gas,
    })

    log_with_correlation(
        logging.INFO,
        f"Transferred {amount} wrapped wei to {recipient[:10]}... tx={transfer_hash}",
        "send_wrapped_native",
        log=logger,
    )
    return transfer_hash
