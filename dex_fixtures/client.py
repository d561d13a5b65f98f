"""
FixtureClient - entry point for provisioning exchange fixtures

Every operation acquires its own signing transport and releases it before
returning; no transport outlives the call that created it.
"""

from __future__ import annotations

import logging
from typing import Callable, ContextManager, List, Optional, TYPE_CHECKING

from .config import PipelineConfig, should_seed_fixtures
from .infra import CorrelationContext, SigningTransport, signing_transport
from .modules import (
    generate_sell_orders,
    has_sufficient_balance,
    send_native,
    send_wrapped_native,
)

if TYPE_CHECKING:
    from .modules import OrderHelper
    from .types import Order

logger = logging.getLogger(__name__)

TransportFactory = Callable[[PipelineConfig], ContextManager[SigningTransport]]


class FixtureClient:
    """
    Fixture provisioning against a local node

    Usage:
        client = FixtureClient()  # configuration from environment

        if FixtureClient.should_seed_fixtures():
            client.send_native(wallet.address, 10 ** 18)
            client.send_wrapped_native(wallet.address, 10 ** 18)
            orders = client.generate_sell_orders(wallet)
    """

    def __init__(
        self,
        config: Optional[PipelineConfig] = None,
        transport_factory: Optional[TransportFactory] = None,
        order_helper_factory: Optional[Callable[[SigningTransport, PipelineConfig], "OrderHelper"]] = None,
    ):
        """
        Args:
            config: Pipeline configuration (built from environment if None)
            transport_factory: Context manager factory yielding a started transport
            order_helper_factory: Builds the allowance/signing helper for a transport
        """
        self._config = (config or PipelineConfig.from_env()).validate()
        self._transport_factory = transport_factory or signing_transport
        self._order_helper_factory = order_helper_factory

    @property
    def config(self) -> PipelineConfig:
        return self._config

    @staticmethod
    def should_seed_fixtures() -> bool:
        return should_seed_fixtures()

    def send_native(self, to_address: str, amount: int) -> str:
        """Send amount wei from a funded node account; returns the tx hash"""
        with CorrelationContext("native"), self._transport_factory(self._config) as transport:
            return send_native(transport, to_address, amount, self._config)

    def send_wrapped_native(self, to_address: str, amount: int) -> str:
        """Wrap amount wei and transfer the tokens; returns the transfer tx hash"""
        with CorrelationContext("wrapped"), self._transport_factory(self._config) as transport:
            return send_wrapped_native(transport, to_address, amount, self._config)

    def has_sufficient_balance(self, address: str) -> bool:
        with CorrelationContext("balance"), self._transport_factory(self._config) as transport:
            return has_sufficient_balance(transport, address)

    def generate_sell_orders(self, taker_wallet) -> List["Order"]:
        """Sign the batch of sell orders restricted to taker_wallet"""
        with CorrelationContext("orders"), self._transport_factory(self._config) as transport:
            helper = None
            if self._order_helper_factory is not None:
                helper = self._order_helper_factory(transport, self._config)
            return generate_sell_orders(transport, taker_wallet, self._config, helper=helper)

    def __repr__(self) -> str:
        return f"FixtureClient(rpc_url={self._config.rpc_url}, network_id={self._config.network_id})"
