import asyncio
from typing import Any, Dict, List, Optional

from chainlens.core.supervisor import AIConnectionSupervisor
from chainlens.providers.base import IndexerProvider, UpstreamDataError
from chainlens.providers.llm.base import (
    LLMMessage,
    LLMProvider,
    LLMProviderAPIError,
    LLMResponse,
)
from chainlens.services.chains import get_chain
from chainlens.services.units import format_native_balance, gas_tiers

ADDRESS = "0xabcdef0123456789abcdef0123456789abcdef01"


class FakeLLMProvider(LLMProvider):
    """Scriptable model client; ``fail`` makes every call raise."""

    name = "fake"

    def __init__(self, reply: str = "ok from model", fail: bool = False, delay: float = 0.0):
        self.reply = reply
        self.fail = fail
        self.delay = delay
        self.prompts: List[str] = []
        self.closed = False
        super().__init__(api_key="test-key", model="fake-model")

    def _setup_client(self, **kwargs) -> None:
        return None

    async def generate_response(
        self,
        messages: List[LLMMessage],
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
        **kwargs,
    ) -> LLMResponse:
        if self.delay:
            await asyncio.sleep(self.delay)
        self.prompts.append(messages[-1].content)
        if self.fail:
            raise LLMProviderAPIError("model is down")
        return self._create_response(content=self.reply)

    async def close(self) -> None:
        self.closed = True


class FakeIndexer(IndexerProvider):
    """In-memory data provider keyed by chain id."""

    name = "fake-indexer"

    def __init__(
        self,
        balances: Optional[Dict[str, int]] = None,
        tokens: Optional[Dict[str, List[Dict[str, Any]]]] = None,
        failing: Optional[set] = None,
        gas_gwei: float = 42.0,
        gas_error: bool = False,
    ):
        self.balances = balances or {}
        self.tokens = tokens or {}
        self.failing = failing or set()
        self.gas_gwei = gas_gwei
        self.gas_error = gas_error
        self.calls: List[tuple] = []

    async def ready(self) -> bool:
        return True

    async def health_check(self) -> Dict[str, Any]:
        return {"status": "healthy"}

    async def get_native_balance(self, address: str, chain: str) -> Dict[str, Any]:
        self.calls.append(("native", chain))
        if chain in self.failing:
            raise UpstreamDataError(f"{chain} node unreachable", chain=chain)
        wei = self.balances.get(chain, 0)
        return {
            "chain": chain,
            "address": address,
            "symbol": get_chain(chain).symbol,
            "balance_wei": wei,
            "balance_formatted": format_native_balance(wei),
        }

    async def get_token_balances(self, address: str, chain: str) -> List[Dict[str, Any]]:
        return self.tokens.get(chain, [])

    async def get_gas_price(self, chain: str) -> float:
        self.calls.append(("gas", chain))
        if self.gas_error or chain in self.failing:
            raise UpstreamDataError("gas unavailable", chain=chain)
        return self.gas_gwei

    async def get_gas_tiers(self, chain: str) -> Dict[str, int]:
        return gas_tiers(await self.get_gas_price(chain))

    async def get_block_number(self, chain: str) -> int:
        if chain in self.failing:
            raise UpstreamDataError(f"{chain} node unreachable", chain=chain)
        return 19_000_000

    async def test_api_key(self, api_key: Optional[str] = None) -> Dict[str, Any]:
        if api_key == "good-key":
            return {"success": True, "message": "API key is valid", "data": {"balance": "1"}}
        return {"success": False, "message": "API key is invalid or expired", "error": "Unauthorized"}


def make_supervisor(provider: LLMProvider, **kwargs) -> AIConnectionSupervisor:
    kwargs.setdefault("health_check_interval", 0.01)
    kwargs.setdefault("enable_health_check", False)
    return AIConnectionSupervisor(lambda: provider, **kwargs)
