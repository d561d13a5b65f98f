"""
Network registry for the 0x v2 development snapshot

Contract addresses per network id, plus the label shown when the browser
wallet points at the wrong network.
"""

from dataclasses import dataclass
from typing import Dict

from ..errors import ConfigurationError

NULL_ADDRESS = "0x0000000000000000000000000000000000000000"

ROPSTEN_NETWORK_ID = 3
LOCAL_NETWORK_ID = 50

LOCALHOST_NETWORK_NAME = "localhost:8545"


@dataclass(frozen=True)
class NetworkAddresses:
    """0x v2 contract addresses on one network"""
    network_id: int
    exchange: str
    erc20_proxy: str
    ether_token: str
    zrx_token: str


# =============================================================================
# Local ganache snapshot (Network ID: 50)
# =============================================================================

LOCAL_NETWORK_ADDRESSES = NetworkAddresses(
    network_id=LOCAL_NETWORK_ID,
    exchange="0x48bacb9266a570d521063ef5dd96e61686dbe788",
    erc20_proxy="0x1dc4c1cefef38a777b15aa20260a54e584b16c48",
    ether_token="0x0b1ba0af832d7c05fd64161e0db78e85978e8082",
    zrx_token="0x871dd7c2b4b25e1aa18728e9d5f2af4c4e431f5c",
)

NETWORK_ADDRESSES: Dict[int, NetworkAddresses] = {
    LOCAL_NETWORK_ID: LOCAL_NETWORK_ADDRESSES,
}


def get_network_addresses(network_id: int) -> NetworkAddresses:
    """
    Get contract addresses for a network

    Raises:
        ConfigurationError: If the network is not registered
    """
    addresses = NETWORK_ADDRESSES.get(network_id)
    if addresses is None:
        raise ConfigurationError.unknown_network(network_id)
    return addresses


def target_network_name(remote_network_id: int) -> str:
    """Name of the network the browser wallet should switch to"""
    if remote_network_id == ROPSTEN_NETWORK_ID:
        return "Ropsten"
    return LOCALHOST_NETWORK_NAME


def network_prompt(remote_network_id: int) -> str:
    return f"Please change the network in MetaMask to {target_network_name(remote_network_id)} and refresh"
