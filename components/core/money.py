"""Exact decimal helpers for money and percentage values."""

from decimal import Decimal, ROUND_FLOOR, ROUND_HALF_UP
from typing import Iterable, List, Union

from components.core.exceptions import InvalidArgumentError
from components.core.schemas import PercentageValidation

Number = Union[Decimal, int, float, str]

CENT = Decimal("0.01")
ZERO = Decimal("0.00")
HUNDRED = Decimal("100")
PERCENT_TOLERANCE = Decimal("0.01")


def to_decimal(value: Number) -> Decimal:
    """Convert a number to Decimal without picking up binary float noise."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(repr(value))
    return Decimal(value)


def round_money(value: Number) -> Decimal:
    """Round to the cent (half up)."""
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def to_cents(value: Number) -> int:
    return int(round_money(value) * 100)


def from_cents(cents: int) -> Decimal:
    return (Decimal(cents) / 100).quantize(CENT)


def distribute_amount(total: Number, parts: int) -> List[Decimal]:
    """
    Split ``total`` into ``parts`` amounts.

    Every part gets ``total / parts`` floored to the cent and whatever cents are
    left over go to the last part, so the parts always add up to the total
    rounded to the cent.
    """
    if parts <= 0:
        raise InvalidArgumentError(f"parts must be positive, got {parts}")

    total_cents = to_cents(total)
    base_cents = int((Decimal(total_cents) / parts).to_integral_value(rounding=ROUND_FLOOR))
    amounts = [from_cents(base_cents)] * parts
    remainder = total_cents - base_cents * parts
    if remainder:
        amounts[-1] = from_cents(base_cents + remainder)
    return amounts


def validate_percentages(values: Iterable[Number]) -> PercentageValidation:
    """Check that percentages add up to 100 within a 0.01 tolerance."""
    total = sum((to_decimal(value) for value in values), Decimal("0"))
    return PercentageValidation(
        valid=abs(total - HUNDRED) < PERCENT_TOLERANCE,
        total=round_money(total),
    )


def percent_of(amount: Number, percent: Number) -> Decimal:
    """Return ``percent`` % of ``amount``, rounded to the cent."""
    return round_money(to_decimal(amount) * to_decimal(percent) / HUNDRED)


def progress_percent(current: Number, target: Number) -> Decimal:
    """Progress towards a target, capped at 100 and floored to the cent so it never reads 100 early."""
    target = to_decimal(target)
    if target <= 0:
        return HUNDRED.quantize(CENT)
    progress = min(HUNDRED, to_decimal(current) / target * HUNDRED)
    return progress.quantize(CENT, rounding=ROUND_FLOOR)
