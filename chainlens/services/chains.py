"""
Static catalog of the EVM chains the service can query.

The catalog is fixed at import time and never mutated.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple


@dataclass(frozen=True)
class ChainDescriptor:
    """Catalog entry for a supported chain."""
    id: str
    display_name: str
    symbol: str
    decimals: int
    rpc_name: str
    data_slug: str
    aliases: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, str]:
        return {"id": self.id, "name": self.display_name, "symbol": self.symbol}


# Order matters: it is the order chains are fetched and listed in.
# Arbitrum, Base and Optimism are served through the ETH gateway node.
CHAIN_CATALOG: Tuple[ChainDescriptor, ...] = (
    ChainDescriptor("ethereum", "Ethereum", "ETH", 18, "ETH", "ethereum-mainnet", ("eth", "mainnet")),
    ChainDescriptor("polygon", "Polygon", "MATIC", 18, "MATIC", "polygon-mainnet", ("matic", "pol")),
    ChainDescriptor("bsc", "BNB Smart Chain", "BNB", 18, "BSC", "bsc-mainnet", ("bnb", "binance")),
    ChainDescriptor("arbitrum", "Arbitrum", "ETH", 18, "ETH", "arbitrum-one-mainnet", ("arb", "arbitrum-one")),
    ChainDescriptor("base", "Base", "ETH", 18, "ETH", "base-mainnet", ("base-mainnet",)),
    ChainDescriptor("optimism", "Optimism", "ETH", 18, "ETH", "optimism-mainnet", ("op",)),
)

CHAIN_IDS: Tuple[str, ...] = tuple(chain.id for chain in CHAIN_CATALOG)

_BY_ID: Dict[str, ChainDescriptor] = {chain.id: chain for chain in CHAIN_CATALOG}
_ALIASES: Dict[str, str] = {
    alias: chain.id for chain in CHAIN_CATALOG for alias in (chain.id, *chain.aliases)
}


def get_chain(chain_id: str) -> Optional[ChainDescriptor]:
    return _BY_ID.get(chain_id)


def is_supported_chain(chain: str) -> bool:
    return normalize_chain(chain) in _BY_ID


def normalize_chain(chain: str | None) -> str:
    """Collapse user-provided chain identifiers into catalog ids."""

    if not chain:
        return "ethereum"
    cleaned = chain.lower().strip()
    return _ALIASES.get(cleaned, cleaned)


def list_chains() -> List[ChainDescriptor]:
    return list(CHAIN_CATALOG)


def format_chain_list() -> str:
    """Human readable, comma separated ``Name (SYMBOL)`` list."""
    return ", ".join(f"{chain.display_name} ({chain.symbol})" for chain in CHAIN_CATALOG)
