"""
Type definitions for DEX fixtures
"""

from .network import (
    NULL_ADDRESS,
    ROPSTEN_NETWORK_ID,
    LOCAL_NETWORK_ID,
    NetworkAddresses,
    NETWORK_ADDRESSES,
    get_network_addresses,
    target_network_name,
    network_prompt,
)
from .order import (
    SignedOrder,
    Order,
    to_internal_order,
    encode_erc20_asset_data,
    decode_erc20_asset_data,
)

__all__ = [
    # Network registry
    "NULL_ADDRESS",
    "ROPSTEN_NETWORK_ID",
    "LOCAL_NETWORK_ID",
    "NetworkAddresses",
    "NETWORK_ADDRESSES",
    "get_network_addresses",
    "target_network_name",
    "network_prompt",
    # Orders
    "SignedOrder",
    "Order",
    "to_internal_order",
    "encode_erc20_asset_data",
    "decode_erc20_asset_data",
]
