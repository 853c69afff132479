"""
Turns a chat message into a reply.

Operational commands never reach the model. Data questions are answered
by the model from a wallet summary when it is connected and from the
canned catalog otherwise. Every path ends in a reply string.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import structlog

from ..config import Settings, settings as default_settings
from ..services.blockchain import BlockchainDataService
from ..services.chains import format_chain_list
from ..services.units import format_gwei
from ..services.wallet_context import summarize_wallet_counts
from ..types.wallet import WalletContextSummary
from .classifier import Intent, IntentCategory, IntentClassifier
from .fallback import fallback_response
from .prompts import build_grounded_prompt
from .supervisor import AIConnectionSupervisor

logger = structlog.stdlib.get_logger(__name__)

FORCED_FALLBACK_REASON = "Forced via chat command"


@dataclass
class ChatOutcome:
    text: str
    used_model: bool
    fallback_active: bool
    last_error: Optional[str]
    connected: bool = False
    intent: Optional[Intent] = None

    @property
    def status_label(self) -> str:
        if self.connected:
            return "AI Active"
        return "Fallback Mode" if self.fallback_active else "AI Inactive"


class ChatResponder:
    def __init__(
        self,
        supervisor: AIConnectionSupervisor,
        data_service: BlockchainDataService,
        *,
        classifier: Optional[IntentClassifier] = None,
        config: Optional[Settings] = None,
    ) -> None:
        self.supervisor = supervisor
        self.data = data_service
        self.classifier = classifier or IntentClassifier()
        self.max_prompt_chars = (config or default_settings).max_prompt_chars

    async def classify_and_respond(self, message: str) -> ChatOutcome:
        intent = self.classifier.classify(message)
        log = logger.bind(category=intent.category.value, chain=intent.chain, multi_chain=intent.multi_chain)
        log.info("chat_message_classified")

        used_model = False
        try:
            text, used_model = await self._respond(message, intent)
        except Exception as exc:  # noqa: BLE001
            log.error("chat_response_failed", error=str(exc), exc_info=True)
            text = self._fallback(message)

        return ChatOutcome(
            text=text,
            used_model=used_model,
            fallback_active=self.supervisor.fallback_active,
            last_error=self.supervisor.last_error,
            connected=self.supervisor.connected,
            intent=intent,
        )

    async def _respond(self, message: str, intent: Intent) -> tuple[str, bool]:
        category = intent.category

        if category == IntentCategory.SYSTEM_STATUS:
            return self._system_status_text(), False
        if category == IntentCategory.MCP_STATUS:
            return self._mcp_status_text(), False
        if category == IntentCategory.RESTART:
            ok = await self.supervisor.restart()
            return ("MCP server restarted successfully." if ok else "Failed to restart MCP server."), False
        if category == IntentCategory.FORCE_FALLBACK:
            self.supervisor.enable_fallback_mode(FORCED_FALLBACK_REASON)
            return "Fallback mode activated.", False
        if category == IntentCategory.GAS:
            return await self._gas_text(intent.chain or "ethereum"), False
        if category == IntentCategory.CHAIN_INFO:
            return f"Supported chains: {format_chain_list()}", False

        summary: Optional[WalletContextSummary] = None
        if intent.needs_wallet_data:
            fetched = await self.data.wallet_context(intent.address, intent.target_chains())
            summary = summarize_wallet_counts(fetched)

        if not self.supervisor.connected:
            return self._fallback(message, summary), False

        if category == IntentCategory.GENERAL_CHAT:
            prompt = message
        else:
            prompt = build_grounded_prompt(message, intent, summary, self.max_prompt_chars)

        result = await self.supervisor.generate(prompt)
        if result.ok:
            return result.value or "", True
        return self._fallback(message, summary), False

    def _fallback(self, message: str, summary: Optional[WalletContextSummary] = None) -> str:
        return fallback_response(
            message,
            summary,
            connected=self.supervisor.connected,
            fallback_active=self.supervisor.fallback_active,
        )

    async def _gas_text(self, chain: str) -> str:
        result = await self.data.gas_price(chain)
        if result.ok:
            return f"⛽ Gas price on {chain.upper()}: ~{format_gwei(result.value)} Gwei (estimate)"
        return f"⛽ Gas price on {chain.upper()}: data unavailable right now."

    def _system_status_text(self) -> str:
        status = self.supervisor.get_status()
        return (
            "System status: server running, "
            f"MCP: {'connected' if status.connected else 'not connected'}, "
            f"fallback: {'on' if status.fallback_active else 'off'}"
        )

    def _mcp_status_text(self) -> str:
        status = self.supervisor.get_status()
        return (
            f"MCP status -> connected: {str(status.connected).lower()}, "
            f"fallback: {str(status.fallback_active).lower()}, "
            f"lastError: {status.last_error or 'none'}"
        )
