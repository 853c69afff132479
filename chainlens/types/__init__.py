from .requests import ApiKeyTestRequest, ChatRequest
from .responses import (
    AnalyticsData,
    AnalyticsResponse,
    ApiKeyTestResponse,
    AppStatusResponse,
    ChainInfo,
    ChainNetworkStats,
    ChainsResponse,
    ChatResponse,
    GasPriceResponse,
    GasTiers,
    McpStatusResponse,
    NativeBalance,
    ServerInfo,
    SupervisorActionResponse,
    WalletBalanceResponse,
)
from .status import ConnectionStatus
from .wallet import ChainSummary, ChainWalletData, WalletContext, WalletContextSummary

__all__ = [
    "ApiKeyTestRequest",
    "ChatRequest",
    "AnalyticsData",
    "AnalyticsResponse",
    "ApiKeyTestResponse",
    "AppStatusResponse",
    "ChainInfo",
    "ChainNetworkStats",
    "ChainsResponse",
    "ChatResponse",
    "GasPriceResponse",
    "GasTiers",
    "McpStatusResponse",
    "NativeBalance",
    "ServerInfo",
    "SupervisorActionResponse",
    "WalletBalanceResponse",
    "ConnectionStatus",
    "ChainSummary",
    "ChainWalletData",
    "WalletContext",
    "WalletContextSummary",
]
