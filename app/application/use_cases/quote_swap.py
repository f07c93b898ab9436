from __future__ import annotations

import logging
import time
from decimal import Decimal
from typing import Callable

from app.application.dto.swap_quote import QuoteSwapInput, SwapQuoterSettings
from app.application.ports.chain_data_port import ChainDataPort
from app.domain.entities.swap_quote import PairReserves, QuoteResult, ReserveState
from app.domain.exceptions import (
    DomainError,
    InsufficientLiquidityError,
    InvalidAddressError,
    InvalidAmountError,
    PairNotFoundError,
)
from app.domain.services.address import is_valid_address, is_zero_address, same_address
from app.domain.services.amm_math import (
    from_raw_amount,
    get_amount_out,
    parse_amount,
    price_impact_pct,
    to_raw_amount,
    truncate_to_units,
)


logger = logging.getLogger(__name__)

GET_PAIR = "getPair(address,address)(address)"
GET_RESERVES = "getReserves()(uint112,uint112,uint32)"
TOKEN0 = "token0()(address)"
TOKEN1 = "token1()(address)"
DECIMALS = "decimals()(uint8)"


class QuoteSwapUseCase:
    """Quotes a UniswapV2 swap from live pair reserves.

    Reserves and token decimals are separate reads and are not pinned to one
    block. A quote can therefore combine reserves from block N with decimals
    read at N+1; decimals are immutable for standard ERC20s, so this is
    accepted.
    """

    def __init__(
        self,
        *,
        chain_port: ChainDataPort,
        settings: SwapQuoterSettings,
        clock: Callable[[], float] = time.time,
    ):
        self._chain_port = chain_port
        self._settings = settings
        self._clock = clock

    def execute(self, command: QuoteSwapInput) -> QuoteResult:
        logger.debug(
            "quote_swap: start from=%s to=%s amount_in=%s",
            command.from_token,
            command.to_token,
            command.amount_in,
        )
        amount_in = self._validate(command)
        try:
            return self._quote(command, amount_in)
        except DomainError:
            raise
        except Exception as exc:
            logger.error(
                "quote_swap: failed from=%s to=%s amount_in=%s detail=%s",
                command.from_token,
                command.to_token,
                command.amount_in,
                exc,
                exc_info=True,
            )
            raise

    def _validate(self, command: QuoteSwapInput) -> Decimal:
        if not is_valid_address(command.from_token) or not is_valid_address(command.to_token):
            raise InvalidAddressError("Invalid token addresses.")
        if same_address(command.from_token, command.to_token):
            raise InvalidAddressError("fromTokenAddress and toTokenAddress must differ.")
        try:
            amount_in = parse_amount(command.amount_in)
        except ValueError as exc:
            raise InvalidAmountError(str(exc)) from exc
        if amount_in <= 0:
            raise InvalidAmountError("Amount in must be greater than 0.")
        return amount_in

    def _quote(self, command: QuoteSwapInput, amount_in: Decimal) -> QuoteResult:
        pair_address = self._get_pair_address(command.from_token, command.to_token)
        if is_zero_address(pair_address):
            raise PairNotFoundError("Pair does not exist.")

        pair = self._get_pair_reserves(pair_address)
        reserve_in, reserve_out = pair.reserves_for(command.from_token)
        state = ReserveState(
            pair_address=pair.pair_address,
            reserve_in=reserve_in,
            reserve_out=reserve_out,
            decimals_in=self._get_token_decimals(command.from_token),
            decimals_out=self._get_token_decimals(command.to_token),
        )

        amount_in_raw = truncate_to_units(to_raw_amount(amount_in, state.decimals_in))
        if amount_in_raw <= 0:
            raise InvalidAmountError("Amount in must be greater than 0.")
        if state.reserve_in <= 0 or state.reserve_out <= 0:
            raise InsufficientLiquidityError("Insufficient liquidity.")

        amount_out_raw = get_amount_out(
            amount_in_raw,
            state.reserve_in,
            state.reserve_out,
            fee_numerator=self._settings.fee_numerator,
            fee_denominator=self._settings.fee_denominator,
        )
        impact = price_impact_pct(
            amount_in=amount_in_raw,
            amount_out=amount_out_raw,
            reserve_in=state.reserve_in,
            reserve_out=state.reserve_out,
        )

        logger.debug(
            "quote_swap: computed pair=%s reserve_in=%s reserve_out=%s amount_in_raw=%s amount_out_raw=%s",
            state.pair_address,
            state.reserve_in,
            state.reserve_out,
            amount_in_raw,
            amount_out_raw,
        )
        return QuoteResult(
            from_token=command.from_token,
            to_token=command.to_token,
            amount_in=amount_in,
            amount_out=from_raw_amount(amount_out_raw, state.decimals_out),
            price_impact_pct=impact,
            timestamp=self._clock(),
        )

    def _get_pair_address(self, token_a: str, token_b: str) -> str:
        return str(
            self._chain_port.read_contract(
                self._settings.factory_address,
                GET_PAIR,
                (token_a, token_b),
            )
        )

    def _get_pair_reserves(self, pair_address: str) -> PairReserves:
        reserve0, reserve1, _block_timestamp_last = self._chain_port.read_contract(
            pair_address,
            GET_RESERVES,
        )
        token0 = self._chain_port.read_contract(pair_address, TOKEN0)
        token1 = self._chain_port.read_contract(pair_address, TOKEN1)
        return PairReserves(
            pair_address=pair_address,
            token0=str(token0),
            token1=str(token1),
            reserve0=int(reserve0),
            reserve1=int(reserve1),
        )

    def _get_token_decimals(self, token_address: str) -> int:
        if same_address(token_address, self._settings.wrapped_native_address):
            return self._settings.wrapped_native_decimals
        return int(self._chain_port.read_contract(token_address, DECIMALS))
