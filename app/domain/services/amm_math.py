from __future__ import annotations

from decimal import MAX_EMAX, MIN_EMIN, ROUND_DOWN, Context, Decimal, InvalidOperation


SWAP_FEE_NUMERATOR = 997
SWAP_FEE_DENOMINATOR = 1000

# uint112 reserves times uint256-sized inputs stay well inside this many digits.
WIDE_CONTEXT = Context(prec=96)

# 2**256 - 1 is about 1.16e77; nothing larger fits a uint256 at any decimals.
MAX_AMOUNT_EXPONENT = 77
# decimals() is a uint8, so anything below 1e-256 is dust for every token.
MIN_AMOUNT_EXPONENT = -256

_HUNDRED = Decimal(100)


def parse_amount(value: str | Decimal) -> Decimal:
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except InvalidOperation as exc:
        raise ValueError(f"amount '{value}' is not a number.") from exc
    if not amount.is_finite():
        raise ValueError(f"amount '{value}' is not a finite number.")
    if not amount.is_zero() and not MIN_AMOUNT_EXPONENT <= amount.adjusted() <= MAX_AMOUNT_EXPONENT:
        raise ValueError(f"amount '{value}' is out of range.")
    return amount


def to_raw_amount(amount: Decimal, decimals: int) -> Decimal:
    """Shift ``amount`` by ``decimals`` places without touching its digits."""
    _check_decimals(decimals)
    return amount.scaleb(decimals, context=_exact_context(amount))


def from_raw_amount(raw: int | Decimal, decimals: int) -> Decimal:
    _check_decimals(decimals)
    value = Decimal(raw)
    return value.scaleb(-decimals, context=_exact_context(value))


def truncate_to_units(raw: Decimal) -> int:
    """Drop sub-unit dust; on-chain amounts are whole smallest units."""
    return int(raw.to_integral_value(rounding=ROUND_DOWN))


def get_amount_out(
    amount_in: int,
    reserve_in: int,
    reserve_out: int,
    *,
    fee_numerator: int = SWAP_FEE_NUMERATOR,
    fee_denominator: int = SWAP_FEE_DENOMINATOR,
) -> int:
    if amount_in <= 0:
        raise ValueError("amount_in must be greater than 0.")
    if reserve_in <= 0 or reserve_out <= 0:
        raise ValueError("reserves must be greater than 0.")
    if not 0 < fee_numerator <= fee_denominator:
        raise ValueError("fee_numerator must be in (0, fee_denominator].")

    amount_in_with_fee = amount_in * fee_numerator
    numerator = amount_in_with_fee * reserve_out
    denominator = reserve_in * fee_denominator + amount_in_with_fee
    return numerator // denominator


def price_impact_pct(
    *,
    amount_in: int,
    amount_out: int,
    reserve_in: int,
    reserve_out: int,
) -> Decimal:
    if reserve_in <= 0 or reserve_out <= 0:
        raise ValueError("reserves must be greater than 0.")
    ctx = WIDE_CONTEXT
    price_before = ctx.divide(Decimal(reserve_out), Decimal(reserve_in))
    price_after = ctx.divide(
        Decimal(reserve_out - amount_out),
        Decimal(reserve_in + amount_in),
    )
    drop = ctx.subtract(price_before, price_after)
    return ctx.multiply(ctx.divide(drop, price_before), _HUNDRED)


def _exact_context(value: Decimal) -> Context:
    # scaleb keeps the coefficient, so precision equal to its length never rounds
    return Context(prec=max(len(value.as_tuple().digits), 1), Emax=MAX_EMAX, Emin=MIN_EMIN)


def _check_decimals(decimals: int) -> None:
    if decimals < 0:
        raise ValueError("decimals must be non-negative.")
