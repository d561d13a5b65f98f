"""
JSON-RPC transport stage

Terminal stage of the signing transport: sends every request it receives to
the node over HTTP through web3's HTTPProvider.
"""

import logging
import time
from typing import Any, List, Optional

import requests
from web3 import HTTPProvider, Web3
from web3.exceptions import Web3Exception
from web3.types import RPCEndpoint

from ..errors import RpcCallError, TransportConstructionError
from .stage import Forward, PipelineStage

logger = logging.getLogger(__name__)


class RpcTransportStage(PipelineStage):
    """
    HTTP JSON-RPC transport

    The provider is created on start() and released on stop(). Requests are
    sent once; there is no retry.
    """

    name = "transport"
    terminal = True

    def __init__(self, rpc_url: str, timeout_seconds: float = 1.0):
        self._rpc_url = rpc_url
        self._timeout = timeout_seconds
        self._provider: Optional[HTTPProvider] = None

    @classmethod
    def from_config(cls, config) -> "RpcTransportStage":
        return cls(config.rpc_url, timeout_seconds=config.rpc_timeout_seconds)

    @property
    def rpc_url(self) -> str:
        return self._rpc_url

    def start(self) -> None:
        provider = HTTPProvider(
            self._rpc_url,
            request_kwargs={"timeout": self._timeout},
            exception_retry_configuration=None,
        )
        if not Web3(provider).is_connected():
            raise TransportConstructionError.unreachable(self._rpc_url)
        self._provider = provider
        logger.debug(f"RPC transport connected: {self._rpc_url}")

    def stop(self) -> None:
        self._provider = None
        logger.debug(f"RPC transport released: {self._rpc_url}")

    def handle(self, method: str, params: List[Any], forward: Optional[Forward]) -> Any:
        if self._provider is None:
            raise RpcCallError.request_failed(method, RuntimeError("provider not started"))

        start_time = time.time()
        try:
            response = self._provider.make_request(RPCEndpoint(method), params)
        except (requests.RequestException, Web3Exception, OSError) as e:
            logger.error(f"RPC {method} failed: {e}")
            raise RpcCallError.request_failed(method, e) from e

        elapsed_ms = (time.time() - start_time) * 1000
        logger.debug(f"RPC {method} took {elapsed_ms:.2f}ms")

        if response.get("error"):
            raise RpcCallError.rpc_error(method, dict(response["error"]))
        if "result" not in response:
            raise RpcCallError.invalid_response(method, "missing 'result' field")

        return response["result"]

    def __repr__(self) -> str:
        return f"RpcTransportStage(url={self._rpc_url})"
