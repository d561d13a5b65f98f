"""
Account funding selection

Picks a node account that holds enough native currency to fund a fixture.

Invariant: the address at MAKER_ACCOUNT_INDEX (index 0) is the maker account
of generated orders. It is never returned as a funding source, so a fixture
never spends from the account that also signs the orders.
"""

import logging

from ..errors import InsufficientFundsError

logger = logging.getLogger(__name__)

MAKER_ACCOUNT_INDEX = 0

WEI_PER_ETHER = 10 ** 18

# Minimum node balance considered ready to seed fixtures
SUFFICIENT_BALANCE_WEI = 3 * WEI_PER_ETHER


def select_funded_account(transport, minimum_balance: int) -> str:
    """
    Return the highest-index address whose balance is strictly greater than
    minimum_balance.

    Args:
        transport: Started SigningTransport
        minimum_balance: Threshold in wei (exclusive)

    Returns:
        Lowercase address

    Raises:
        InsufficientFundsError: If no address other than the maker qualifies
    """
    addresses = transport.list_addresses()

    for index in range(len(addresses) - 1, MAKER_ACCOUNT_INDEX, -1):
        address = addresses[index]
        balance = transport.get_balance(address)
        if balance > minimum_balance:
            logger.debug(f"Funding account #{index} {address[:10]}... balance={balance}")
            return address

    raise InsufficientFundsError.no_funded_account(minimum_balance, searched=max(len(addresses) - 1, 0))


def has_sufficient_balance(transport, address: str) -> bool:
    """Whether address holds at least SUFFICIENT_BALANCE_WEI"""
    return transport.get_balance(address.lower()) >= SUFFICIENT_BALANCE_WEI
