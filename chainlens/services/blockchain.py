"""Result-returning facade over the blockchain data provider."""

from typing import Iterable

import structlog

from ..core.results import Result
from ..providers.base import IndexerProvider, UpstreamDataError
from ..types.wallet import WalletContext
from .wallet_context import fetch_wallet_context

logger = structlog.stdlib.get_logger(__name__)


class BlockchainDataService:
    def __init__(self, provider: IndexerProvider):
        self.provider = provider

    async def gas_price(self, chain: str) -> Result[float]:
        """Gas price in Gwei. A zero price is reported as a failure."""
        try:
            gwei = await self.provider.get_gas_price(chain)
        except UpstreamDataError as exc:
            logger.warning("gas_price_unavailable", chain=chain, error=str(exc))
            return Result.failure(exc)
        if gwei <= 0:
            return Result.failure(f"no gas price reported for {chain}")
        return Result.success(gwei)

    async def wallet_context(self, address: str, chains: Iterable[str]) -> WalletContext:
        return await fetch_wallet_context(self.provider, address, chains)
