"""
Fixture services

Each service takes a started SigningTransport; FixtureClient owns acquisition.
- accounts: funded account selection, readiness check
- transfers: native and wrapped-native transfers
- orders: signed sell order generation
"""

from .accounts import (
    MAKER_ACCOUNT_INDEX,
    SUFFICIENT_BALANCE_WEI,
    WEI_PER_ETHER,
    select_funded_account,
    has_sufficient_balance,
)
from .transfers import send_native, send_wrapped_native, encode_call, function_selector
from .orders import (
    SELL_ORDER_COUNT,
    ZRX_TOKEN_ADDRESS,
    WETH_TOKEN_ADDRESS,
    SELL_ORDER_MAKER_AMOUNT,
    SELL_ORDER_TAKER_AMOUNT,
    OrderHelper,
    OrderSigningHelper,
    generate_sell_orders,
    to_exchange_signature,
)

__all__ = [
    "MAKER_ACCOUNT_INDEX",
    "SUFFICIENT_BALANCE_WEI",
    "WEI_PER_ETHER",
    "select_funded_account",
    "has_sufficient_balance",
    "send_native",
    "send_wrapped_native",
    "encode_call",
    "function_selector",
    "SELL_ORDER_COUNT",
    "ZRX_TOKEN_ADDRESS",
    "WETH_TOKEN_ADDRESS",
    "SELL_ORDER_MAKER_AMOUNT",
    "SELL_ORDER_TAKER_AMOUNT",
    "OrderHelper",
    "OrderSigningHelper",
    "generate_sell_orders",
    "to_exchange_signature",
]
