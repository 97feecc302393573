from supplyapi.utils import *

class ChainReader:
    """Read-only ERC-20 queries against a single token contract.

    Every call goes straight to the provider: no retries, no caching. Any
    failure surfaces as a ProviderError with the original exception chained.
    """

    def __init__(self, contract):
        self.contract = contract

    @classmethod
    def from_config(cls, cfg):
        w3 = AsyncWeb3(AsyncWeb3.AsyncHTTPProvider(cfg["provider_url"]))
        contract = w3.eth.contract(address=AsyncWeb3.to_checksum_address(cfg["token_address"]), abi=erc20Json)
        return cls(contract)

    async def get_total_supply(self) -> int:
        try:
            return int(await self.contract.functions.totalSupply().call())
        except Exception as e:
            raise ProviderError("totalSupply() failed: {}".format(e)) from e

    async def get_balance(self, address: str) -> int:
        try:
            owner = AsyncWeb3.to_checksum_address(address)
            return int(await self.contract.functions.balanceOf(owner).call())
        except Exception as e:
            raise ProviderError("balanceOf({}) failed: {}".format(address, e)) from e
