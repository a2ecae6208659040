"""
Production FastAPI Application

Stateless gateway in front of the remote ticketing backend: resale listing,
purchases and ticket verification.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import RedirectResponse

from src.platform.app_factory import create_app
from src.platform.config.di import container
from src.platform.config.wire_modules import WIRE_MODULES
from src.platform.logging.loguru_io import Logger
from src.platform.observability.tracing import TracingConfig


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    Logger.base.info('🚀 [Ticket Resale] Starting up...')

    tracing = TracingConfig(service_name=container.config_service().SERVICE_NAME)
    tracing.setup()

    container.wire(modules=WIRE_MODULES)
    Logger.base.info('🔌 [Ticket Resale] Dependency injection wired')

    http_client = container.http_client()
    tracing.instrument_httpx(client=http_client)
    Logger.base.info(f'📡 [Ticket Resale] Backend at {container.config_service().BACKEND_API_URL}')

    yield

    Logger.base.info('🛑 [Ticket Resale] Shutting down...')
    await http_client.aclose()
    tracing.shutdown()
    container.unwire()
    Logger.base.info('👋 [Ticket Resale] Shutdown complete')


app = create_app(lifespan=lifespan)


@app.get('/')
async def root() -> RedirectResponse:
    return RedirectResponse(url='/docs')
