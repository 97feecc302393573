"""
Pytest fixtures for the circulating supply service. The chain reader is replaced
by a scripted fake so no provider is contacted.
"""

import pytest

from supplyapi.supply_calculator import SupplyCalculator
from supplyapi.utils import ProviderError

LOCKED_1 = "0x7eaB1c8a3E722fe477e28C7CDc7F954A54Ea3213"
LOCKED_2 = "0x05b2607d070f9206eb595c0596fd78748751a8e7"


class FakeReader:
    """Returns queued results; an Exception instance in place of a value is raised."""

    def __init__(self, total_supply=0, balances=None):
        self.total_supply = total_supply
        self.balances = balances or {}
        self.calls = []

    async def get_total_supply(self):
        self.calls.append("totalSupply")
        if isinstance(self.total_supply, Exception):
            raise self.total_supply
        return self.total_supply

    async def get_balance(self, address):
        self.calls.append(address)
        balance = self.balances.get(address, 0)
        if isinstance(balance, Exception):
            raise balance
        return balance


@pytest.fixture
def reader():
    return FakeReader(total_supply=1000, balances={LOCKED_1: 100, LOCKED_2: 200})


@pytest.fixture
def calculator(reader):
    return SupplyCalculator(reader, locked_addresses=[LOCKED_1, LOCKED_2])


@pytest.fixture
def provider_error():
    return ProviderError("rate limited")
