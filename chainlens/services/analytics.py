"""Per-chain network snapshot: current gas price and latest block."""

import structlog

from ..providers.base import IndexerProvider, UpstreamDataError
from ..types.responses import AnalyticsData, ChainNetworkStats
from .chains import list_chains

logger = structlog.stdlib.get_logger(__name__)


async def get_network_analytics(provider: IndexerProvider) -> AnalyticsData:
    chains = list_chains()
    analytics = AnalyticsData(total_chains=len(chains))

    for chain in chains:
        stats = ChainNetworkStats(name=chain.display_name, symbol=chain.symbol)
        try:
            stats.gas_price = await provider.get_gas_price(chain.id)
            stats.block_number = await provider.get_block_number(chain.id)
            analytics.reachable_chains += 1
        except UpstreamDataError as exc:
            logger.warning("network_stats_unavailable", chain=chain.id, error=str(exc))
            stats.error = str(exc)
        analytics.chain_distribution[chain.id] = stats

    return analytics
