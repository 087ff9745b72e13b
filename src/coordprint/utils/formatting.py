"""Shortest round-trip formatting for coordinate values.

The starting point is always the shortest decimal that parses back to the
double (``repr`` of a Python float is such a primitive). ``precision`` caps the
number of digits after the decimal point; it only ever trims that shortest
form, so asking for more digits than a value needs never adds noise digits:

    >>> format_coordinate(22.200000000000003, 13)
    '22.2'
    >>> format_coordinate(22.200000000000003, 17)
    '22.200000000000003'

Values whose magnitude is below 1e-8 or above 1e15 are printed in scientific
notation, where ``precision`` caps the digits after the mantissa's point.
"""
import decimal
import math
import operator
from decimal import Decimal, ROUND_HALF_EVEN

from ..core.constants import (
    DECIMAL_PRECISION, DEFAULT_PRECISION,
    SCIENTIFIC_LOW, SCIENTIFIC_HIGH,
    NAN_TEXT, INF_TEXT, NEG_INF_TEXT,
)
from ..core.errors import PrecisionError
from ..core.models import Borrowed, Owned, Rendered


def _context(prec: int = DECIMAL_PRECISION) -> decimal.Context:
    # A fresh context per call: operations record flags on the context they use.
    return decimal.Context(prec=prec, rounding=ROUND_HALF_EVEN)


def check_precision(precision) -> int:
    """Return ``precision`` as an int, or raise PrecisionError."""
    if isinstance(precision, bool):
        raise PrecisionError(f"precision must be an integer, got {precision!r}")
    try:
        value = operator.index(precision)
    except TypeError:
        raise PrecisionError(f"precision must be an integer, got {precision!r}") from None
    if value < 0:
        raise PrecisionError(f"precision must be non-negative, got {value}")
    return value


def shortest_decimal(value: float) -> Decimal:
    """Shortest decimal that round-trips to ``value``, trailing zeros stripped."""
    return Decimal(repr(float(value))).normalize(_context())


def is_scientific(value: float) -> bool:
    magnitude = abs(value)
    return magnitude > SCIENTIFIC_HIGH or 0 < magnitude < SCIENTIFIC_LOW


def _fraction_digits(dec: Decimal) -> int:
    return max(0, -dec.as_tuple().exponent)


def minimal_precision(value: float) -> int:
    """Smallest precision at which ``value`` prints in its shortest form.

    For every precision at or above this one the output is identical and
    parses back to ``value`` exactly.
    """
    value = float(value)
    if not math.isfinite(value):
        return 0
    dec = shortest_decimal(value)
    if is_scientific(value):
        return len(dec.as_tuple().digits) - 1
    return _fraction_digits(dec)


def _fixed_text(dec: Decimal) -> str:
    return format(dec, 'f')


def _scientific_text(dec: Decimal) -> str:
    sign, digits, _ = dec.as_tuple()
    mantissa = ''.join(str(d) for d in digits)
    if len(mantissa) > 1:
        mantissa = mantissa[0] + '.' + mantissa[1:]
    return f"{'-' if sign else ''}{mantissa}e{dec.adjusted():+03d}"


def _round_fixed(value: float, precision: int) -> Decimal:
    # Round the exact binary value once, so the result is the nearest
    # decimal with `precision` fraction digits.
    ctx = _context()
    exact = Decimal(value)
    rounded = exact.quantize(Decimal(1).scaleb(-precision, context=ctx), context=ctx)
    if not rounded:
        return Decimal(0)
    return rounded.normalize(ctx)


def _round_scientific(value: float, precision: int) -> Decimal:
    ctx = _context(precision + 1)
    return ctx.create_decimal_from_float(value).normalize(_context())


def render_coordinate(value: float, precision: int = DEFAULT_PRECISION) -> Rendered:
    """Format ``value`` and report whether precision had to rewrite it.

    Returns ``Borrowed(text)`` when ``text`` is the shortest round-trip form
    of ``value`` as is, ``Owned(text)`` when rounding at ``precision``
    produced new digits.
    """
    precision = check_precision(precision)
    value = float(value)

    if math.isnan(value):
        return Borrowed(NAN_TEXT)
    if math.isinf(value):
        return Borrowed(INF_TEXT if value > 0 else NEG_INF_TEXT)

    dec = shortest_decimal(value)
    if is_scientific(value):
        if len(dec.as_tuple().digits) - 1 <= precision:
            return Borrowed(_scientific_text(dec))
        return Owned(_scientific_text(_round_scientific(value, precision)))

    if _fraction_digits(dec) <= precision:
        return Borrowed(_fixed_text(dec))
    return Owned(_fixed_text(_round_fixed(value, precision)))


def format_coordinate(value: float, precision: int = DEFAULT_PRECISION) -> str:
    """Format a float as the shortest decimal, capped at ``precision`` fraction digits.

    Args:
        value: The float value to format.
        precision: Maximum digits after the decimal point (default 15).

    Returns:
        A string like '22.2' or '1e+16'; 'nan', 'inf' or '-inf' for
        non-finite values.
    """
    return render_coordinate(value, precision).value


def format_ordinates(ordinates, precision: int = DEFAULT_PRECISION, sep: str = ' ') -> str:
    """Format a coordinate tuple, ordinates joined by ``sep``."""
    return sep.join(format_coordinate(v, precision) for v in ordinates)
