"""String encoding of document values for flag parsers."""

from __future__ import annotations

import math
import re
from datetime import date, datetime, time, timedelta
from decimal import ROUND_HALF_EVEN, Decimal
from typing import Any, List, Mapping, Sequence

from .errors import EncodingError

_MICROS_PER_UNIT = {
    "ns": Decimal("0.001"),
    "us": Decimal(1),
    "µs": Decimal(1),  # micro sign
    "μs": Decimal(1),  # greek mu
    "ms": Decimal(1000),
    "s": Decimal(1000000),
    "m": Decimal(60000000),
    "h": Decimal(3600000000),
}

_DURATION_RE = re.compile(
    r"[-+]?(?:(?:\d+(?:\.\d*)?|\.\d+)(?:ns|us|µs|μs|ms|s|m|h))+"
)
_DURATION_PART_RE = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|μs|ms|s|m|h)")


def format_float(value: float) -> str:
    """Format a float using its shortest round-trip digits.

    Scientific notation is used when the decimal exponent is below -4 or
    at least 6, positional notation otherwise. The exponent carries no
    ``+`` sign and no zero padding (``3.14e10``, ``1e-5``).

    Args:
        value: Float to format.

    Returns:
        String that parses back to exactly ``value``.
    """
    if math.isnan(value):
        return "nan"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"

    sign, digit_tuple, exponent = Decimal(repr(value)).normalize().as_tuple()
    digits = "".join(str(d) for d in digit_tuple)
    prefix = "-" if sign else ""
    sci_exponent = len(digits) - 1 + exponent

    if sci_exponent < -4 or sci_exponent >= 6:
        mantissa = digits[0]
        if len(digits) > 1:
            mantissa += "." + digits[1:]
        return f"{prefix}{mantissa}e{sci_exponent}"

    if exponent >= 0:
        return prefix + digits + "0" * exponent
    point = len(digits) + exponent
    if point > 0:
        return f"{prefix}{digits[:point]}.{digits[point:]}"
    return f"{prefix}0.{'0' * -point}{digits}"


def _with_fraction(value: int, unit: int) -> str:
    whole, frac = divmod(value, unit)
    if not frac:
        return str(whole)
    width = len(str(unit)) - 1
    return f"{whole}.{str(frac).zfill(width).rstrip('0')}"


def format_duration(value: timedelta) -> str:
    """Format a timedelta as a duration string such as ``1h2m3.5s``.

    Durations under one second use ``ms`` or ``µs``. The result is exact
    to the microsecond and is accepted by ``parse_duration``.
    """
    total = (value.days * 86400 + value.seconds) * 1000000 + value.microseconds
    if total == 0:
        return "0s"
    sign = "-" if total < 0 else ""
    total = abs(total)

    if total < 1000:
        return f"{sign}{total}µs"
    if total < 1000000:
        return f"{sign}{_with_fraction(total, 1000)}ms"

    seconds, micros = divmod(total, 1000000)
    hours, seconds = divmod(seconds, 3600)
    minutes, seconds = divmod(seconds, 60)
    text = _with_fraction(seconds * 1000000 + micros, 1000000) + "s"
    if hours:
        text = f"{hours}h{minutes}m{text}"
    elif minutes:
        text = f"{minutes}m{text}"
    return sign + text


def parse_duration(text: str) -> timedelta:
    """Parse a duration string such as ``5s``, ``1m30s`` or ``-1.5h``.

    Valid units are ``ns``, ``us`` (or ``µs``), ``ms``, ``s``, ``m`` and
    ``h``. A bare ``0`` is accepted. Sub-microsecond remainders are
    rounded to the nearest microsecond.

    Args:
        text: Duration string.

    Returns:
        Equivalent timedelta.

    Raises:
        ValueError: If ``text`` is not a valid duration.
    """
    raw = text.strip()
    if raw in {"0", "+0", "-0"}:
        return timedelta(0)
    if not _DURATION_RE.fullmatch(raw):
        raise ValueError(f"invalid duration {text!r}")

    negative = raw.startswith("-")
    total = Decimal(0)
    for match in _DURATION_PART_RE.finditer(raw):
        amount, unit = match.groups()
        total += Decimal(amount) * _MICROS_PER_UNIT[unit]
    micros = int(total.to_integral_value(rounding=ROUND_HALF_EVEN))
    return timedelta(microseconds=-micros if negative else micros)


def encode_scalar(value: Any, path: Sequence[str] = ()) -> str:
    """Encode a single scalar value.

    Args:
        value: Scalar leaf value.
        path: Location of the value, used for error reporting.

    Returns:
        String representation for a flag parser.

    Raises:
        EncodingError: If the value type has no flag representation.
    """
    # bool first: it is a subclass of int
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return str(value)
    if isinstance(value, int):
        return str(int(value))
    if isinstance(value, float):
        return format_float(float(value))
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, timedelta):
        return format_duration(value)
    raise EncodingError(
        f"unsupported value of type {type(value).__name__}", path
    )


def encode(value: Any, path: Sequence[str] = ()) -> List[str]:
    """Encode a leaf value into one or more flag value strings.

    Scalars encode to a single string. Arrays encode to one string per
    element, in array order; callers emit one pair per string under the
    same key, the way a repeated flag is passed on a command line.

    Args:
        value: Scalar or array of scalars.
        path: Location of the value, used for error reporting.

    Returns:
        List of encoded strings.

    Raises:
        EncodingError: If the value is a table, or an array holding a
            table or another array.
    """
    if isinstance(value, Mapping):
        raise EncodingError("table cannot be used as a flag value", path)
    if isinstance(value, (list, tuple)):
        encoded = []
        for index, element in enumerate(value):
            if isinstance(element, Mapping):
                raise EncodingError(
                    f"array element {index} is a table; only scalar arrays can be flattened",
                    path,
                )
            if isinstance(element, (list, tuple)):
                raise EncodingError(
                    f"array element {index} is an array; only scalar arrays can be flattened",
                    path,
                )
            encoded.append(encode_scalar(element, path))
        return encoded
    return [encode_scalar(value, path)]
