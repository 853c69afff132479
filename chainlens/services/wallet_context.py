"""
Multi-chain wallet context used to ground model answers.

Chains are fetched one at a time. A chain that fails is recorded with an
``error`` and never aborts the chains after it.
"""

from typing import Iterable, Optional

import structlog

from ..providers.base import IndexerProvider, UpstreamDataError
from ..types.wallet import ChainSummary, ChainWalletData, WalletContext, WalletContextSummary
from .chains import get_chain
from .units import native_approx

logger = structlog.stdlib.get_logger(__name__)


async def fetch_wallet_context(
    provider: IndexerProvider,
    address: str,
    chains: Iterable[str] = ("ethereum",),
) -> WalletContext:
    results = []
    for chain in chains:
        try:
            native = await provider.get_native_balance(address, chain)
            tokens = await provider.get_token_balances(address, chain)
            entry = ChainWalletData(
                chain=chain,
                native_wei=int(native.get("balance_wei", 0)),
                native_symbol=native.get("symbol"),
                tokens=tokens,
            )
        except UpstreamDataError as exc:
            logger.warning("wallet_chain_fetch_failed", chain=chain, address=address, error=str(exc))
            entry = ChainWalletData(chain=chain, error=str(exc) or "fetch failed")
        except Exception as exc:  # noqa: BLE001
            logger.error("wallet_chain_fetch_crashed", chain=chain, address=address, error=str(exc), exc_info=True)
            entry = ChainWalletData(chain=chain, error=f"unexpected {exc.__class__.__name__}: {exc}")
        results.append(entry)
    return WalletContext(address=address, chains=results)


def summarize_wallet_counts(fetched: Optional[WalletContext]) -> Optional[WalletContextSummary]:
    """Reduce a fetch to native balance and token count per chain."""
    if fetched is None:
        return None

    summary = WalletContextSummary(address=fetched.address)
    for entry in fetched.chains:
        if not entry.ok:
            summary.per_chain[entry.chain] = ChainSummary(error=entry.error)
            continue

        descriptor = get_chain(entry.chain)
        decimals = descriptor.decimals if descriptor else 18
        symbol = entry.native_symbol or (descriptor.symbol if descriptor else entry.chain.upper())
        summary.per_chain[entry.chain] = ChainSummary(
            native_symbol=symbol,
            native_approx=native_approx(entry.native_wei or 0, decimals),
            token_count=len(entry.tokens),
        )
    return summary
