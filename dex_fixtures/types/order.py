"""
Order type definitions

SignedOrder mirrors the 0x v2 order struct as signed by the maker.
Order is the internal representation handed to the exchange client.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Dict

from eth_account.messages import encode_typed_data
from web3 import Web3

from .network import NULL_ADDRESS

# bytes4(keccak256("ERC20Token(address)"))
ERC20_ASSET_PROXY_ID = "0xf47261b0"

EXCHANGE_DOMAIN_NAME = "0x Protocol"
EXCHANGE_DOMAIN_VERSION = "2"

EIP712_DOMAIN_TYPE = [
    {"name": "name", "type": "string"},
    {"name": "version", "type": "string"},
    {"name": "verifyingContract", "type": "address"},
]

ORDER_TYPE = [
    {"name": "makerAddress", "type": "address"},
    {"name": "takerAddress", "type": "address"},
    {"name": "feeRecipientAddress", "type": "address"},
    {"name": "senderAddress", "type": "address"},
    {"name": "makerAssetAmount", "type": "uint256"},
    {"name": "takerAssetAmount", "type": "uint256"},
    {"name": "makerFee", "type": "uint256"},
    {"name": "takerFee", "type": "uint256"},
    {"name": "expirationTimeSeconds", "type": "uint256"},
    {"name": "salt", "type": "uint256"},
    {"name": "makerAssetData", "type": "bytes"},
    {"name": "takerAssetData", "type": "bytes"},
]


def encode_erc20_asset_data(token_address: str) -> str:
    """ERC-20 asset data: proxy id followed by the left-padded token address"""
    return ERC20_ASSET_PROXY_ID + token_address.lower()[2:].rjust(64, "0")


def decode_erc20_asset_data(asset_data: str) -> str:
    """Token address carried by ERC-20 asset data"""
    if not asset_data.lower().startswith(ERC20_ASSET_PROXY_ID):
        raise ValueError(f"Not ERC-20 asset data: {asset_data}")
    return "0x" + asset_data[-40:].lower()


@dataclass(frozen=True)
class SignedOrder:
    """
    0x v2 order signed by its maker

    Attributes:
        maker_address: Order creator
        taker_address: Only this address may fill (NULL_ADDRESS for anyone)
        fee_recipient_address: Relayer receiving fees
        sender_address: Only this address may submit the fill
        maker_asset_amount: Maker asset amount in base units
        taker_asset_amount: Taker asset amount in base units
        maker_fee: Fee paid by maker in ZRX base units
        taker_fee: Fee paid by taker in ZRX base units
        expiration_time_seconds: Unix expiration timestamp
        salt: Random value making the order hash unique
        maker_asset_data: Encoded maker asset
        taker_asset_data: Encoded taker asset
        exchange_address: Exchange contract the order is signed for
        signature: 0x signature bytes (v, r, s, signature type) as hex
    """
    maker_address: str
    taker_address: str
    fee_recipient_address: str
    sender_address: str
    maker_asset_amount: int
    taker_asset_amount: int
    maker_fee: int
    taker_fee: int
    expiration_time_seconds: int
    salt: int
    maker_asset_data: str
    taker_asset_data: str
    exchange_address: str
    signature: str = "0x"

    @property
    def maker_token_address(self) -> str:
        return decode_erc20_asset_data(self.maker_asset_data)

    @property
    def taker_token_address(self) -> str:
        return decode_erc20_asset_data(self.taker_asset_data)

    def typed_data(self) -> Dict[str, Any]:
        """EIP-712 typed data of this order (signature excluded)"""
        return {
            "types": {
                "EIP712Domain": EIP712_DOMAIN_TYPE,
                "Order": ORDER_TYPE,
            },
            "primaryType": "Order",
            "domain": {
                "name": EXCHANGE_DOMAIN_NAME,
                "version": EXCHANGE_DOMAIN_VERSION,
                "verifyingContract": self.exchange_address,
            },
            "message": {
                "makerAddress": self.maker_address,
                "takerAddress": self.taker_address,
                "feeRecipientAddress": self.fee_recipient_address,
                "senderAddress": self.sender_address,
                "makerAssetAmount": self.maker_asset_amount,
                "takerAssetAmount": self.taker_asset_amount,
                "makerFee": self.maker_fee,
                "takerFee": self.taker_fee,
                "expirationTimeSeconds": self.expiration_time_seconds,
                "salt": self.salt,
                "makerAssetData": self.maker_asset_data,
                "takerAssetData": self.taker_asset_data,
            },
        }

    def order_hash(self) -> str:
        """EIP-712 hash of the order, as the exchange computes it"""
        signable = encode_typed_data(full_message=self.typed_data())
        digest = Web3.keccak(b"\x19" + signable.version + signable.header + signable.body)
        return Web3.to_hex(digest)


@dataclass(frozen=True)
class Order:
    """
    Internal order representation

    Attributes:
        id: Order hash
        maker: Maker address
        taker: Address allowed to fill (NULL_ADDRESS for anyone)
        maker_token: Token the maker sells
        taker_token: Token the maker receives
        maker_amount: Maker token amount in base units
        taker_amount: Taker token amount in base units
        price: Taker token paid per maker token
        expires_at: Expiration time (UTC)
        salt: Order salt
        signature: Maker signature
        signed_order: Source order, kept for on-chain submission
    """
    id: str
    maker: str
    taker: str
    maker_token: str
    taker_token: str
    maker_amount: int
    taker_amount: int
    price: Decimal
    expires_at: datetime
    salt: int
    signature: str
    signed_order: SignedOrder

    @property
    def is_open(self) -> bool:
        """Whether the order accepts any taker"""
        return self.taker == NULL_ADDRESS

    def is_expired(self, now: datetime = None) -> bool:
        now = now or datetime.now(timezone.utc)
        return now >= self.expires_at


def to_internal_order(signed_order: SignedOrder) -> Order:
    """Convert a signed 0x order into the internal representation"""
    if signed_order.maker_asset_amount <= 0:
        raise ValueError("maker_asset_amount must be positive")

    return Order(
        id=signed_order.order_hash(),
        maker=signed_order.maker_address.lower(),
        taker=signed_order.taker_address.lower(),
        maker_token=signed_order.maker_token_address,
        taker_token=signed_order.taker_token_address,
        maker_amount=signed_order.maker_asset_amount,
        taker_amount=signed_order.taker_asset_amount,
        price=Decimal(signed_order.taker_asset_amount) / Decimal(signed_order.maker_asset_amount),
        expires_at=datetime.fromtimestamp(signed_order.expiration_time_seconds, tz=timezone.utc),
        salt=signed_order.salt,
        signature=signed_order.signature,
        signed_order=signed_order,
    )
