"""
Order Fixture Generator

Signs a batch of maker sell orders (ZRX for WETH) against the local 0x
exchange, restricted to one taker wallet.

Usage:
    with signing_transport(config) as transport:
        orders = generate_sell_orders(transport, taker_wallet, config)
"""

import logging
import secrets
import time
from dataclasses import replace
from typing import Callable, List, Optional, Protocol

from web3 import Web3

from ..types import (
    NULL_ADDRESS,
    Order,
    SignedOrder,
    encode_erc20_asset_data,
    get_network_addresses,
    to_internal_order,
)
from ..infra.tracing import log_with_correlation
from .accounts import MAKER_ACCOUNT_INDEX
from .transfers import encode_call

logger = logging.getLogger(__name__)

SELL_ORDER_COUNT = 10

ZRX_TOKEN_ADDRESS = "0x871dd7c2b4b25e1aa18728e9d5f2af4c4e431f5c"
WETH_TOKEN_ADDRESS = "0x0b1ba0af832d7c05fd64161e0db78e85978e8082"

SELL_ORDER_MAKER_AMOUNT = 5 * 10 ** 17
SELL_ORDER_TAKER_AMOUNT = 10 ** 18

UNLIMITED_ALLOWANCE = 2 ** 256 - 1

# 0x v2 signature type appended after v, r, s
SIGNATURE_TYPE_EIP712 = 0x02


class OrderHelper(Protocol):
    """Allowance and order-signing operations used by the generator"""

    def grant_unlimited_allowance(self, asset_address: str, owner_address: str) -> str:
        ...

    def create_signed_order(
        self,
        maker: str,
        sender: str,
        maker_asset: str,
        maker_amount: int,
        taker_asset: str,
        taker_amount: int,
    ) -> SignedOrder:
        ...


def to_exchange_signature(signature: str) -> str:
    """
    Re-pack an r || s || v signature into the 0x layout v || r || s || type
    """
    raw = Web3.to_bytes(hexstr=signature)
    if len(raw) != 65:
        raise ValueError(f"Expected 65-byte signature, got {len(raw)} bytes")
    r, s, v = raw[:32], raw[32:64], raw[64]
    if v < 27:
        v += 27
    return Web3.to_hex(bytes([v]) + r + s + bytes([SIGNATURE_TYPE_EIP712]))


class OrderSigningHelper:
    """
    Default OrderHelper backed by a signing transport

    - grant_unlimited_allowance: ERC-20 approve of the exchange's ERC-20 proxy
    - create_signed_order: 0x v2 order signed by the maker over EIP-712
    """

    def __init__(
        self,
        transport,
        config,
        salt_factory: Optional[Callable[[], int]] = None,
        clock: Optional[Callable[[], float]] = None,
    ):
        self._transport = transport
        self._config = config
        self._addresses = get_network_addresses(config.network_id)
        self._salt_factory = salt_factory or (lambda: secrets.randbits(256))
        self._clock = clock or time.time

    def grant_unlimited_allowance(self, asset_address: str, owner_address: str) -> str:
        tx_hash = self._transport.send_transaction({
            "from": owner_address.lower(),
            "to": asset_address.lower(),
            "data": encode_call(
                "approve(address,uint256)",
                ["address", "uint256"],
                [self._addresses.erc20_proxy, UNLIMITED_ALLOWANCE],
            ),
            "gas": self._config.tx_gas,
        })
        self._transport.wait_for_receipt(tx_hash)
        logger.info(f"Unlimited allowance for {asset_address[:10]}... granted by {owner_address[:10]}...")
        return tx_hash

    def create_signed_order(
        self,
        maker: str,
        sender: str,
        maker_asset: str,
        maker_amount: int,
        taker_asset: str,
        taker_amount: int,
    ) -> SignedOrder:
        order = SignedOrder(
            maker_address=maker.lower(),
            taker_address=sender.lower(),
            fee_recipient_address=NULL_ADDRESS,
            sender_address=sender.lower(),
            maker_asset_amount=maker_amount,
            taker_asset_amount=taker_amount,
            maker_fee=0,
            taker_fee=0,
            expiration_time_seconds=int(self._clock()) + self._config.order_ttl_seconds,
            salt=self._salt_factory(),
            maker_asset_data=encode_erc20_asset_data(maker_asset),
            taker_asset_data=encode_erc20_asset_data(taker_asset),
            exchange_address=self._addresses.exchange,
        )

        signature = self._transport.sign_typed_data(order.maker_address, order.typed_data())
        return replace(order, signature=to_exchange_signature(signature))


def _wallet_address(taker_wallet) -> str:
    address = getattr(taker_wallet, "address", taker_wallet)
    if not isinstance(address, str) or not Web3.is_address(address.lower()):
        raise ValueError(f"Taker wallet has no valid address: {taker_wallet!r}")
    return address.lower()


def generate_sell_orders(
    transport,
    taker_wallet,
    config,
    helper: Optional[OrderHelper] = None,
) -> List[Order]:
    """
    Generate SELL_ORDER_COUNT signed sell orders from the maker account

    All orders share the ZRX/WETH pair, the fixed amounts, the maker (the
    address at MAKER_ACCOUNT_INDEX) and the taker wallet as sender. The
    allowance is granted once, before any order is signed.

    Args:
        transport: Started SigningTransport
        taker_wallet: Wallet object with an .address, or an address string
        config: PipelineConfig
        helper: Allowance/signing helper (defaults to OrderSigningHelper)

    Returns:
        List of internal orders, in signing order

    Raises:
        ValueError: If taker_wallet does not carry a hex address
    """
    sender = _wallet_address(taker_wallet)
    helper = helper or OrderSigningHelper(transport, config)

    maker = transport.list_addresses()[MAKER_ACCOUNT_INDEX]

    helper.grant_unlimited_allowance(ZRX_TOKEN_ADDRESS, maker)

    orders = []
    for _ in range(SELL_ORDER_COUNT):
        signed_order = helper.create_signed_order(
            maker,
            sender,
            ZRX_TOKEN_ADDRESS,
            SELL_ORDER_MAKER_AMOUNT,
            WETH_TOKEN_ADDRESS,
            SELL_ORDER_TAKER_AMOUNT,
        )
        orders.append(to_internal_order(signed_order))

    log_with_correlation(
        logging.INFO,
        f"Generated {len(orders)} sell orders maker={maker[:10]}... taker={sender[:10]}...",
        "generate_sell_orders",
        log=logger,
    )
    return orders
