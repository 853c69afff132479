from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .api import analytics, chat, health, keys, status, wallet
from .config import settings
from .core.responder import ChatResponder
from .core.supervisor import AIConnectionSupervisor
from .logging_config import setup_logging
from .middleware import RequestLoggingMiddleware
from .providers.tatum import TatumProvider
from .services.blockchain import BlockchainDataService

logger = structlog.stdlib.get_logger(__name__)


def create_app(
    supervisor: Optional[AIConnectionSupervisor] = None,
    data_provider: Optional[TatumProvider] = None,
    *,
    configure_logging: bool = True,
) -> FastAPI:
    """Build the API. Collaborators can be injected for tests."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if configure_logging:
            setup_logging()
        sup = supervisor or AIConnectionSupervisor()
        provider = data_provider or TatumProvider()
        app.state.supervisor = sup
        app.state.data_provider = provider
        app.state.responder = ChatResponder(sup, BlockchainDataService(provider))

        connected = await sup.start()
        if connected:
            logger.info("model_ready")
        else:
            logger.warning("model_unavailable_using_fallback", reason=sup.last_error)
        try:
            yield
        finally:
            await sup.shutdown()

    app = FastAPI(
        title="Chainlens API",
        description="Multi-chain wallet lookups with an AI chat assistant",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router, tags=["Health"])
    app.include_router(chat.router, tags=["Chat"])
    app.include_router(status.router, tags=["Status"])
    app.include_router(wallet.router, tags=["Wallet"])
    app.include_router(analytics.router, tags=["Analytics"])
    app.include_router(keys.router, tags=["Keys"])

    @app.get("/")
    async def root():
        """Root endpoint with basic info"""
        return {
            "name": "Chainlens API",
            "version": __version__,
            "docs": "/docs",
            "health": "/healthz",
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "chainlens.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower()
    )
