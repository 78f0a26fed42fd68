"""Step-function resampling of raw backend samples onto the caller's grid.

The backend reports points at its own cadence. Between two reported points
the value is assumed to hold at the earlier one, so each grid timestamp takes
the most recent sample at or before it. A sample older than one step is too
stale to stand in for a grid point and the point is left out of the result
rather than filled.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from decimal import Decimal

from wavefront_promql_proxy.core.models import Query


def grid_size(query: Query) -> int:
    return math.floor((query.end - query.start) / query.step) + 1


def format_sample_value(value: float) -> str:
    """Render ``value`` as the shortest decimal text that parses back to it.

    Uses ``%g`` layout: plain notation for decimal exponents in ``[-4, 6)``,
    exponent notation with at least two exponent digits otherwise.
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"

    # repr() is already the shortest round-tripping form
    dec = Decimal(repr(value)).normalize()
    sign, digits, exp = dec.as_tuple()
    exponent = int(exp)
    exp10 = len(digits) + exponent - 1
    if -4 <= exp10 < 6:
        return format(dec, "f")

    mantissa = str(digits[0])
    if len(digits) > 1:
        mantissa += "." + "".join(str(d) for d in digits[1:])
    exp_sign = "-" if exp10 < 0 else "+"
    return f"{'-' if sign else ''}{mantissa}e{exp_sign}{abs(exp10):02d}"


def resample(samples: Sequence[tuple[float, float]], query: Query) -> tuple[tuple[float, str], ...]:
    """Resample ascending ``(timestamp, value)`` pairs onto ``query``'s grid.

    Returns ``(grid_timestamp, value_text)`` pairs for the grid points that
    have a sample no more than one step old. Both the grid and the samples
    are non-decreasing, so a single cursor walks the samples once.
    """
    if not samples:
        return ()

    result: list[tuple[float, str]] = []
    last = len(samples) - 1
    cursor = 0
    for i in range(grid_size(query)):
        grid_ts = query.start + i * query.step
        while cursor < last and samples[cursor + 1][0] <= grid_ts:
            cursor += 1
        sample_ts, value = samples[cursor]
        gap = grid_ts - sample_ts
        if 0 <= gap < query.step:
            result.append((grid_ts, format_sample_value(value)))
    return tuple(result)
