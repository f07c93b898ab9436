from __future__ import annotations

import logging
from decimal import ROUND_HALF_EVEN, Decimal

from fastapi import APIRouter, Depends, HTTPException

from app.api.deps import get_quote_swap_use_case
from app.api.schemas.swap_quote import SwapQuoteResponse
from app.application.dto.swap_quote import QuoteSwapInput
from app.application.use_cases.quote_swap import QuoteSwapUseCase
from app.domain.exceptions import (
    InsufficientLiquidityError,
    InvalidAddressError,
    InvalidAmountError,
    PairNotFoundError,
)
from app.domain.services.amm_math import WIDE_CONTEXT

router = APIRouter()
logger = logging.getLogger(__name__)

PRICE_IMPACT_PLACES = Decimal("1e-18")


def _dec_to_str(value: Decimal) -> str:
    if value.is_zero():
        return "0"
    return format(value.normalize(context=WIDE_CONTEXT), "f")


def _impact_to_str(value: Decimal) -> str:
    return _dec_to_str(value.quantize(PRICE_IMPACT_PLACES, rounding=ROUND_HALF_EVEN, context=WIDE_CONTEXT))


@router.get(
    "/return/{from_token_address}/{to_token_address}/{amount_in}",
    response_model=SwapQuoteResponse,
)
def get_return(
    from_token_address: str,
    to_token_address: str,
    amount_in: str,
    use_case: QuoteSwapUseCase = Depends(get_quote_swap_use_case),
):
    try:
        result = use_case.execute(
            QuoteSwapInput(
                from_token=from_token_address.strip(),
                to_token=to_token_address.strip(),
                amount_in=amount_in,
            )
        )
    except (InvalidAddressError, InvalidAmountError) as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except (PairNotFoundError, InsufficientLiquidityError) as exc:
        logger.warning(
            "swap_quote_router: rejected from=%s to=%s amount_in=%s detail=%s",
            from_token_address,
            to_token_address,
            amount_in,
            exc,
        )
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except Exception as exc:
        logger.error(
            "swap_quote_router: failed from=%s to=%s amount_in=%s detail=%s",
            from_token_address,
            to_token_address,
            amount_in,
            exc,
        )
        raise HTTPException(status_code=500, detail="Failed to calculate return amount") from exc

    return SwapQuoteResponse(
        from_token_address=result.from_token,
        to_token_address=result.to_token,
        amount_in=amount_in,
        amount_out=_dec_to_str(result.amount_out),
        price_impact=_impact_to_str(result.price_impact_pct),
        timestamp=int(result.timestamp * 1000),
    )
