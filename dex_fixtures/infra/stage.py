"""
Pipeline stage abstraction for the signing transport

A request travels through the stages in order. Each stage either answers it
or forwards it (possibly rewritten) to the next stage. The last stage is
terminal and talks to the node.
"""

from typing import Any, Callable, Dict, List, Optional

from web3 import Web3

from ..errors import RpcCallError

Forward = Callable[[str, List[Any]], Any]


class PipelineStage:
    """
    Base pipeline stage

    Subclasses override handle() and, when they hold resources, start()/stop().
    """

    name: str = "stage"
    terminal: bool = False

    def start(self) -> None:
        pass

    def stop(self) -> None:
        pass

    def handle(self, method: str, params: List[Any], forward: Optional[Forward]) -> Any:
        if forward is None:
            raise RpcCallError.invalid_response(method, f"no stage after '{self.name}' to handle request")
        return forward(method, params)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"


def to_int(value: Any) -> int:
    """Decode a JSON-RPC quantity (hex string or int) into an int"""
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        return int(value, 16) if value.startswith(("0x", "0X")) else int(value)
    raise ValueError(f"Not a quantity: {value!r}")


_QUANTITY_FIELDS = ("value", "gas", "gasPrice", "nonce", "chainId", "maxFeePerGas", "maxPriorityFeePerGas")


def to_rpc_transaction(tx: Dict[str, Any]) -> Dict[str, Any]:
    """Hex-encode integer fields of a transaction dict for the wire"""
    formatted = {}
    for key, value in tx.items():
        if key in _QUANTITY_FIELDS and isinstance(value, int):
            formatted[key] = hex(value)
        elif isinstance(value, (bytes, bytearray)):
            formatted[key] = Web3.to_hex(value)
        else:
            formatted[key] = value
    return formatted
