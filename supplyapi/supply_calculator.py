from supplyapi.utils import *
import asyncio
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)

@dataclass(frozen=True)
class BalanceResult:
    address: str
    balance: int = 0
    error: Optional[Exception] = None

    @property
    def ok(self):
        return self.error is None

class SupplyCache:
    """Holds the last circulating supply that was computed successfully.

    Starts empty, is overwritten on every success and is never cleared. A
    failing request may read it while a concurrent request is about to
    overwrite it, so it can observe either the old or the new value.
    """

    def __init__(self):
        self._value: Optional[int] = None

    def get(self) -> Optional[int]:
        return self._value

    def set(self, value: int):
        self._value = value

    def has_value(self) -> bool:
        return self._value is not None

class SupplyCalculator:

    def __init__(self, reader, locked_addresses=LOCKED_ADDRESSES, cache=None):
        self.reader = reader
        self.locked_addresses = list(locked_addresses)
        self.cache = cache if cache is not None else SupplyCache()

    async def fetch_balance(self, address) -> BalanceResult:
        try:
            balance = await self.reader.get_balance(address)
        except ProviderError as e:
            return BalanceResult(address, error=e)
        logger.info(f"Balance of {address}: {balance}")
        return BalanceResult(address, balance)

    def sum_locked(self, results) -> int:
        total_locked = 0
        for result in results:
            if not result.ok:
                # an unreachable locked address counts as empty
                logger.warning(f"Error fetching balance for {result.address}, counting it as 0: {result.error}")
                continue
            total_locked += result.balance
        return total_locked

    async def compute_circulating_supply(self) -> int:
        try:
            total_supply = await self.reader.get_total_supply()
        except ProviderError as e:
            logger.error(f"Error fetching total supply: {e}")
            raise ComputationError("could not fetch total supply") from e
        logger.info(f"Total Supply: {total_supply}")

        results = await asyncio.gather(*[self.fetch_balance(addr) for addr in self.locked_addresses])

        # not clamped, locked balances above total supply give a negative value
        circulating_supply = total_supply - self.sum_locked(results)
        logger.info(f"Circulating Supply: {circulating_supply}")

        self.cache.set(circulating_supply)
        return circulating_supply
