from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .status import ConnectionStatus


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _utcnow() -> str:
    return datetime.now(timezone.utc).isoformat()


class ChatResponse(CamelModel):
    response: str = Field(description="Reply text")
    mcp_connected: bool = Field(description="Whether the language model produced or could produce this reply")
    fallback_mode: bool = Field(description="Whether canned fallback responses are active")
    last_error: Optional[str] = Field(default=None, description="Most recent model failure")
    status: str = Field(description="AI Active, Fallback Mode or AI Inactive")
    used_model: bool = Field(default=False, description="Whether this reply came from the model")
    intent: Optional[str] = Field(default=None, description="Classified intent category")


class ChainInfo(BaseModel):
    id: str
    name: str
    symbol: str


class ChainsResponse(CamelModel):
    chains: List[ChainInfo]
    mcp_connected: bool = False


class NativeBalance(CamelModel):
    balance: str = Field(description="Native balance, 6 decimal places")
    usd_value: float = Field(default=0, description="Not priced; always 0")


class WalletBalanceResponse(BaseModel):
    balance: NativeBalance
    chain: str
    address: str


class GasTiers(CamelModel):
    slow: int
    standard: int
    fast: int
    base_fee: int


class GasPriceResponse(CamelModel):
    gas_price: GasTiers
    chain: str


class McpStatusResponse(BaseModel):
    success: bool = True
    mcp: ConnectionStatus
    timestamp: str = Field(default_factory=_utcnow)


class ServerInfo(BaseModel):
    status: str = "running"
    port: int
    uptime: float


class AppStatusResponse(BaseModel):
    success: bool = True
    server: ServerInfo
    mcp: Dict[str, Any]
    timestamp: str = Field(default_factory=_utcnow)


class SupervisorActionResponse(BaseModel):
    success: bool
    message: str
    mcp: ConnectionStatus


class ApiKeyTestResponse(BaseModel):
    success: bool
    message: str
    data: Optional[Any] = None
    error: Optional[str] = None


class ChainNetworkStats(CamelModel):
    name: str
    symbol: str
    gas_price: float = 0.0
    block_number: int = 0
    error: Optional[str] = None


class AnalyticsData(CamelModel):
    reachable_chains: int = 0
    total_chains: int = 0
    chain_distribution: Dict[str, ChainNetworkStats] = Field(default_factory=dict)


class AnalyticsResponse(BaseModel):
    success: bool = True
    data: AnalyticsData
