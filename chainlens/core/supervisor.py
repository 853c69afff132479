"""
Supervisor for the hosted language-model connection.

Lifecycle::

    UNINITIALIZED -> STARTING -> CONNECTED
                     STARTING -> FALLBACK_ACTIVE
    CONNECTED       -> FALLBACK_ACTIVE   (health probe failure, forced, repeated chat failures)
    FALLBACK_ACTIVE -> STARTING          (restart)

``connected`` and ``fallback_active`` are never both true, and
``connected`` only becomes true after a probe call succeeded.
"""

from __future__ import annotations

import asyncio
from enum import Enum
from typing import Callable, Optional

import structlog

from ..config import Settings, settings as default_settings
from ..providers.llm import LLMProvider, ModelUnavailableError, get_llm_provider
from ..types.status import ConnectionStatus
from .results import Result

logger = structlog.stdlib.get_logger(__name__)

START_PROBE_PROMPT = "Hello, are you working?"
HEALTH_PROBE_PROMPT = "health check"

ProviderFactory = Callable[[], LLMProvider]


class SupervisorState(str, Enum):
    UNINITIALIZED = "uninitialized"
    STARTING = "starting"
    CONNECTED = "connected"
    FALLBACK_ACTIVE = "fallback_active"


class AIConnectionSupervisor:
    """Owns the model client and decides whether chat goes to the model."""

    def __init__(
        self,
        provider_factory: Optional[ProviderFactory] = None,
        *,
        config: Optional[Settings] = None,
        health_check_interval: Optional[float] = None,
        probe_timeout: Optional[float] = None,
        chat_timeout: Optional[float] = None,
        enable_health_check: Optional[bool] = None,
    ) -> None:
        cfg = config or default_settings
        self._provider_factory = provider_factory or get_llm_provider
        self._health_interval = health_check_interval or cfg.health_check_interval_seconds
        self._probe_timeout = probe_timeout or cfg.llm_probe_timeout_seconds
        self._chat_timeout = chat_timeout or cfg.llm_chat_timeout_seconds
        self._health_enabled = cfg.enable_llm_health_check if enable_health_check is None else enable_health_check

        self._state = SupervisorState.UNINITIALIZED
        self._provider: Optional[LLMProvider] = None
        self._connected = False
        self._fallback_active = False
        self._last_error: Optional[str] = None
        self._retry_count = 0
        self._max_retries = cfg.max_retries
        self._connection_attempts = 0
        self._max_connection_attempts = cfg.max_connection_attempts

        self._health_task: Optional[asyncio.Task] = None
        self._inflight_probes: set[asyncio.Task] = set()
        self._lifecycle_lock = asyncio.Lock()

    # ---------------------------
    # Read side
    # ---------------------------
    @property
    def state(self) -> SupervisorState:
        return self._state

    @property
    def connected(self) -> bool:
        return self._connected

    @property
    def fallback_active(self) -> bool:
        return self._fallback_active

    @property
    def last_error(self) -> Optional[str]:
        return self._last_error

    @property
    def health_check_running(self) -> bool:
        return self._health_task is not None and not self._health_task.done()

    def get_status(self) -> ConnectionStatus:
        return ConnectionStatus(
            state=self._state.value,
            connected=self._connected,
            fallback_active=self._fallback_active,
            last_error=self._last_error,
            retry_count=self._retry_count,
            max_retries=self._max_retries,
            connection_attempts=self._connection_attempts,
            max_connection_attempts=self._max_connection_attempts,
            has_model=self._provider is not None,
            health_check_active=self.health_check_running,
        )

    # ---------------------------
    # Lifecycle
    # ---------------------------
    async def start(self) -> bool:
        """Build the model client and probe it once. Never raises."""
        async with self._lifecycle_lock:
            return await self._start_locked()

    async def restart(self) -> bool:
        async with self._lifecycle_lock:
            logger.info("supervisor_restarting", state=self._state.value)
            self.stop_health_check()
            self._connected = False
            self._retry_count = 0
            return await self._start_locked()

    async def shutdown(self) -> None:
        async with self._lifecycle_lock:
            self.stop_health_check()
            await self._close_provider()

    async def _start_locked(self) -> bool:
        self.stop_health_check()
        self._state = SupervisorState.STARTING
        self._connection_attempts += 1

        if self._connection_attempts > self._max_connection_attempts:
            self.enable_fallback_mode(
                f"Maximum connection attempts reached ({self._max_connection_attempts})"
            )
            return False

        await self._close_provider()
        try:
            self._provider = self._provider_factory()
        except (ValueError, ImportError) as exc:
            logger.error("model_client_init_failed", error=str(exc))
            self.enable_fallback_mode(f"Model initialization failed: {exc}")
            return False

        probe = await self.probe(START_PROBE_PROMPT)
        if not probe.ok:
            self.enable_fallback_mode(f"Model initialization failed: {probe.error}")
            return False

        self._connected = True
        self._fallback_active = False
        self._retry_count = 0
        self._connection_attempts = 0
        self._state = SupervisorState.CONNECTED
        logger.info(
            "supervisor_connected",
            provider=self._provider.name,
            model=self._provider.model,
            reply_preview=(probe.value or "")[:60],
        )
        if self._health_enabled:
            self.start_health_check()
        return True

    async def _close_provider(self) -> None:
        provider, self._provider = self._provider, None
        if provider is None:
            return
        try:
            await provider.close()
        except Exception as exc:  # noqa: BLE001
            logger.warning("model_client_close_failed", error=str(exc))

    def enable_fallback_mode(self, reason: str) -> None:
        """Route chat to canned responses. Repeat calls only refresh ``last_error``."""
        self._fallback_active = True
        self._connected = False
        self._last_error = reason
        self._state = SupervisorState.FALLBACK_ACTIVE
        logger.warning("fallback_enabled", reason=reason)

    # ---------------------------
    # Health check
    # ---------------------------
    def start_health_check(self) -> None:
        """Arm the periodic probe, replacing any timer already running."""
        self.stop_health_check()
        self._health_task = asyncio.create_task(self._health_loop(), name="llm-health-check")

    def stop_health_check(self) -> None:
        if self._health_task is not None:
            self._health_task.cancel()
            self._health_task = None
        for task in list(self._inflight_probes):
            task.cancel()
        self._inflight_probes.clear()

    async def _health_loop(self) -> None:
        # Each tick spawns its own probe so a slow probe never delays the next tick.
        try:
            while True:
                await asyncio.sleep(self._health_interval)
                task = asyncio.create_task(self._health_tick())
                self._inflight_probes.add(task)
                task.add_done_callback(self._inflight_probes.discard)
        except asyncio.CancelledError:
            return

    async def _health_tick(self) -> None:
        if self._provider is None:
            return
        result = await self.probe(HEALTH_PROBE_PROMPT)
        if result.ok:
            logger.debug("health_check_passed")
            return
        logger.warning("health_check_failed", error=result.error)
        self._retry_count += 1
        self.enable_fallback_mode(f"Health check failed: {result.error}")

    # ---------------------------
    # Model calls
    # ---------------------------
    async def probe(self, prompt: str = HEALTH_PROBE_PROMPT) -> Result[str]:
        return await self._call_model(prompt, self._probe_timeout)

    async def generate(self, prompt: str) -> Result[str]:
        """Ask the model for a reply while connected.

        ``max_retries`` consecutive failures switch the supervisor to fallback.
        """
        if not self._connected or self._provider is None:
            return Result.failure(ModelUnavailableError("model not connected"))

        result = await self._call_model(prompt, self._chat_timeout)
        if result.ok:
            self._retry_count = 0
            return result

        self._retry_count += 1
        logger.warning(
            "model_generate_failed",
            error=result.error,
            retry_count=self._retry_count,
            max_retries=self._max_retries,
        )
        if self._retry_count >= self._max_retries:
            self.enable_fallback_mode(f"Model generation failed: {result.error}")
        return result

    async def _call_model(self, prompt: str, timeout: float) -> Result[str]:
        provider = self._provider
        if provider is None:
            return Result.failure(ModelUnavailableError("no model client"))
        try:
            text = await asyncio.wait_for(provider.generate_text(prompt), timeout=timeout)
        except asyncio.TimeoutError:
            return Result.failure(f"model call timed out after {timeout:g}s")
        except asyncio.CancelledError:
            raise
        except Exception as exc:  # noqa: BLE001
            return Result.failure(exc)
        return Result.success(text)


__all__ = ["AIConnectionSupervisor", "ConnectionStatus", "SupervisorState", "Result"]
