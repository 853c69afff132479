from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ChainWalletData(BaseModel):
    """Raw per-chain fetch result; either balances or an error."""
    chain: str = Field(description="Catalog chain id")
    native_wei: Optional[int] = Field(default=None, description="Native balance in the smallest unit")
    native_symbol: Optional[str] = Field(default=None, description="Native coin symbol")
    tokens: List[Dict[str, Any]] = Field(default_factory=list, description="Token balances as returned upstream")
    error: Optional[str] = Field(default=None, description="Why this chain could not be fetched")

    @property
    def ok(self) -> bool:
        return self.error is None


class WalletContext(BaseModel):
    address: str = Field(description="Wallet address")
    chains: List[ChainWalletData] = Field(default_factory=list, description="One entry per requested chain")


class ChainSummary(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    native_symbol: Optional[str] = Field(default=None, description="Native coin symbol")
    native_approx: Optional[float] = Field(default=None, description="Native balance rounded to 6 decimals")
    token_count: Optional[int] = Field(default=None, description="Number of token balances held")
    error: Optional[str] = Field(default=None, description="Fetch error for this chain")


class WalletContextSummary(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    address: str = Field(description="Wallet address")
    per_chain: Dict[str, ChainSummary] = Field(default_factory=dict, description="Summary keyed by chain id")

    def successful_chains(self) -> List[str]:
        return [chain for chain, entry in self.per_chain.items() if entry.error is None]

    def to_prompt_json(self) -> str:
        return self.model_dump_json(by_alias=True, exclude_none=True)
