from __future__ import annotations

import logging
import time

from fastapi import APIRouter, Depends, HTTPException

from app.api.deps import get_gas_price_use_case, get_service_health_use_case
from app.api.schemas.gas_price import GasPriceResponse, HealthResponse
from app.application.use_cases.get_gas_price import GetGasPriceUseCase
from app.application.use_cases.get_service_health import GetServiceHealthUseCase
from app.domain.exceptions import DomainError

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/gasPrice", response_model=GasPriceResponse)
def get_gas_price(use_case: GetGasPriceUseCase = Depends(get_gas_price_use_case)):
    started = time.perf_counter()
    try:
        result = use_case.execute()
    except DomainError as exc:
        logger.error("gas_price_router: failed detail=%s", exc)
        raise HTTPException(status_code=500, detail="Failed to retrieve gas price") from exc

    logger.debug(
        "gas_price_router: served elapsed_ms=%.2f fresh=%s",
        (time.perf_counter() - started) * 1000,
        result.is_fresh,
    )
    snapshot = result.snapshot
    return GasPriceResponse(
        gas_price=str(snapshot.gas_price),
        max_fee_per_gas=str(snapshot.max_fee_per_gas),
        max_priority_fee_per_gas=str(snapshot.max_priority_fee_per_gas),
        timestamp=int(snapshot.captured_at * 1000),
    )


@router.get("/v1/health", response_model=HealthResponse)
def get_health(use_case: GetServiceHealthUseCase = Depends(get_service_health_use_case)):
    result = use_case.execute()
    return HealthResponse(
        chain_reachable=result.chain_reachable,
        gas_price_cached=result.gas_price_cached,
        gas_price_fresh=result.gas_price_fresh,
        gas_price_age_seconds=result.gas_price_age_seconds,
    )
