"""
Type Definition Unit Tests

Tests for the network registry and order types.
"""

import sys
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from pathlib import Path

import pytest

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from dex_fixtures.errors import ConfigurationError, ErrorCode
from dex_fixtures.types import (
    LOCAL_NETWORK_ID,
    NULL_ADDRESS,
    ROPSTEN_NETWORK_ID,
    SignedOrder,
    decode_erc20_asset_data,
    encode_erc20_asset_data,
    get_network_addresses,
    network_prompt,
    target_network_name,
    to_internal_order,
)

ZRX = "0x871dd7c2b4b25e1aa18728e9d5f2af4c4e431f5c"
WETH = "0x0b1ba0af832d7c05fd64161e0db78e85978e8082"
MAKER = "0x5409ed021d9299bf6814279a6a1411a7e866a631"


def make_signed_order(**overrides):
    fields = dict(
        maker_address=MAKER,
        taker_address=NULL_ADDRESS,
        fee_recipient_address=NULL_ADDRESS,
        sender_address=NULL_ADDRESS,
        maker_asset_amount=5 * 10 ** 17,
        taker_asset_amount=10 ** 18,
        maker_fee=0,
        taker_fee=0,
        expiration_time_seconds=1_700_000_000,
        salt=12345,
        maker_asset_data=encode_erc20_asset_data(ZRX),
        taker_asset_data=encode_erc20_asset_data(WETH),
        exchange_address=get_network_addresses(LOCAL_NETWORK_ID).exchange,
    )
    fields.update(overrides)
    return SignedOrder(**fields)


class TestNetworkRegistry:
    """Tests for network addresses and prompts"""

    def test_local_addresses(self):
        addresses = get_network_addresses(LOCAL_NETWORK_ID)

        assert addresses.network_id == 50
        assert addresses.ether_token == WETH
        assert addresses.zrx_token == ZRX
        assert addresses.exchange == "0x48bacb9266a570d521063ef5dd96e61686dbe788"
        assert addresses.erc20_proxy == "0x1dc4c1cefef38a777b15aa20260a54e584b16c48"

    def test_unknown_network(self):
        with pytest.raises(ConfigurationError) as exc_info:
            get_network_addresses(999)
        assert exc_info.value.code == ErrorCode.CONFIG_UNKNOWN_NETWORK

    @pytest.mark.parametrize("network_id,expected", [
        (ROPSTEN_NETWORK_ID, "Ropsten"),
        (LOCAL_NETWORK_ID, "localhost:8545"),
        (1, "localhost:8545"),
    ])
    def test_target_network_name(self, network_id, expected):
        assert target_network_name(network_id) == expected

    def test_network_prompt(self):
        assert network_prompt(3) == "Please change the network in MetaMask to Ropsten and refresh"
        assert network_prompt(50) == "Please change the network in MetaMask to localhost:8545 and refresh"


class TestAssetData:
    """Tests for ERC-20 asset data"""

    def test_encode(self):
        data = encode_erc20_asset_data(ZRX.upper().replace("0X", "0x"))

        assert data == "0xf47261b0" + "0" * 24 + ZRX[2:]
        assert len(data) == 2 + 8 + 64

    def test_decode(self):
        assert decode_erc20_asset_data(encode_erc20_asset_data(WETH)) == WETH

    def test_decode_rejects_other_proxy(self):
        with pytest.raises(ValueError):
            decode_erc20_asset_data("0x02571792" + "0" * 24 + ZRX[2:])


class TestSignedOrder:
    """Tests for SignedOrder"""

    def test_token_addresses(self):
        order = make_signed_order()

        assert order.maker_token_address == ZRX
        assert order.taker_token_address == WETH

    def test_typed_data_domain(self):
        typed = make_signed_order().typed_data()

        assert typed["primaryType"] == "Order"
        assert typed["domain"] == {
            "name": "0x Protocol",
            "version": "2",
            "verifyingContract": get_network_addresses(LOCAL_NETWORK_ID).exchange,
        }
        assert [field["name"] for field in typed["types"]["Order"]][:4] == [
            "makerAddress", "takerAddress", "feeRecipientAddress", "senderAddress",
        ]

    def test_order_hash_changes_with_salt(self):
        first = make_signed_order(salt=1)
        second = make_signed_order(salt=2)

        assert first.order_hash() != second.order_hash()
        assert first.order_hash() == make_signed_order(salt=1).order_hash()
        assert len(first.order_hash()) == 66

    def test_frozen(self):
        order = make_signed_order()
        with pytest.raises(AttributeError):
            order.salt = 1


class TestInternalOrder:
    """Tests for to_internal_order and Order"""

    def test_conversion(self):
        signed = make_signed_order(signature="0x1b" + "00" * 65)

        order = to_internal_order(signed)

        assert order.id == signed.order_hash()
        assert order.maker == MAKER
        assert order.maker_token == ZRX
        assert order.taker_token == WETH
        assert order.price == Decimal("2")
        assert order.expires_at == datetime.fromtimestamp(1_700_000_000, tz=timezone.utc)
        assert order.salt == 12345
        assert order.signature == signed.signature
        assert order.signed_order is signed

    def test_taker_lowercased(self):
        order = to_internal_order(make_signed_order(taker_address=MAKER.upper().replace("0X", "0x")))
        assert order.taker == MAKER

    def test_rejects_zero_maker_amount(self):
        with pytest.raises(ValueError):
            to_internal_order(make_signed_order(maker_asset_amount=0))

    def test_is_open(self):
        assert to_internal_order(make_signed_order()).is_open
        assert not to_internal_order(make_signed_order(taker_address=MAKER)).is_open

    def test_is_expired(self):
        order = to_internal_order(make_signed_order())

        assert order.is_expired(order.expires_at)
        assert not order.is_expired(order.expires_at - timedelta(seconds=1))
        assert order.is_expired()
