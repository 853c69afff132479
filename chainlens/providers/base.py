from abc import ABC, abstractmethod
from typing import Any, Dict, List


class UpstreamDataError(Exception):
    """Raised when a blockchain data provider call fails."""

    def __init__(self, message: str, *, chain: str | None = None, status_code: int | None = None):
        super().__init__(message)
        self.chain = chain
        self.status_code = status_code


class Provider(ABC):
    """Anything the service reaches over the network for chain data."""

    name: str
    timeout_s: int = 10

    @abstractmethod
    async def ready(self) -> bool:
        """True when credentials are present; does not touch the network."""

    @abstractmethod
    async def health_check(self) -> Dict[str, Any]:
        """``{"status": "healthy" | "unavailable" | "error", ...}``"""


class IndexerProvider(Provider):
    """Per-chain balances and network state for the catalog chains.

    Every method raises ``UpstreamDataError`` on failure, except
    ``get_token_balances`` which degrades to an empty list.
    """

    @abstractmethod
    async def get_native_balance(self, address: str, chain: str) -> Dict[str, Any]:
        """Return at least ``balance_wei`` and ``symbol``."""

    @abstractmethod
    async def get_token_balances(self, address: str, chain: str) -> List[Dict[str, Any]]:
        ...

    @abstractmethod
    async def get_gas_price(self, chain: str) -> float:
        """Current gas price in Gwei."""

    @abstractmethod
    async def get_block_number(self, chain: str) -> int:
        ...
