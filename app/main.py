from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.deps import build_gas_price_refresh_scheduler
from app.api.routers.gas_price import router as gas_price_router
from app.api.routers.heartbeat import router as heartbeat_router
from app.api.routers.swap_quote import router as swap_quote_router
from app.shared.config import get_settings


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    scheduler = None
    if settings.gas_price_refresh_enabled:
        scheduler = build_gas_price_refresh_scheduler()
        scheduler.start()
    else:
        logger.info("main: gas_price_refresh disabled")
    app.state.gas_price_scheduler = scheduler

    try:
        yield
    finally:
        if scheduler is not None:
            scheduler.stop()


app = FastAPI(title="Chain Quote API", lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(heartbeat_router)
app.include_router(gas_price_router)
app.include_router(swap_quote_router)
