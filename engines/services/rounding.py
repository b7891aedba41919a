"""
Decimal rounding helpers shared by the engines.
"""

from decimal import ROUND_HALF_UP, Decimal, localcontext

CENT = Decimal("0.01")


def round_half_up(value: Decimal, exponent: Decimal = CENT) -> Decimal:
    """
    Quantize half away from zero.

    Precision is widened to fit the result, so large values round instead
    of raising InvalidOperation.

    Raises:
        ValueError: if value is NaN or infinite.
    """
    if not value.is_finite():
        raise ValueError(f"Cannot round non-finite value {value}")

    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, value.adjusted() - exponent.as_tuple().exponent + 2)
        return value.quantize(exponent, rounding=ROUND_HALF_UP)
