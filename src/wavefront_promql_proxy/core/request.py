import math
import re
from collections.abc import Mapping

from wavefront_promql_proxy.core.errors import InputError
from wavefront_promql_proxy.core.models import Query

# Plain decimal or hex-mantissa floats; no surrounding whitespace, no digit separators.
_DECIMAL = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_HEX = re.compile(r"[+-]?0[xX](?:[0-9a-fA-F]+\.?[0-9a-fA-F]*|\.[0-9a-fA-F]+)(?:[pP][+-]?\d+)?")


def _to_float(raw: str) -> float:
    if _DECIMAL.fullmatch(raw):
        return float(raw)
    if _HEX.fullmatch(raw):
        try:
            return float.fromhex(raw)
        except OverflowError:
            return math.inf
    return math.nan


def _parse_float(params: Mapping[str, str], name: str, kind: str) -> float:
    raw = params.get(name) or ""
    value = _to_float(raw)
    if not math.isfinite(value):
        raise InputError(f"invalid parameter '{name}': cannot parse \"{raw}\" to a valid {kind}")
    return value


def parse_query(params: Mapping[str, str]) -> Query:
    """Validate raw ``query_range`` parameters and build a ``Query``.

    Raises ``InputError`` naming the first offending parameter.
    """
    start = _parse_float(params, "start", "timestamp")
    end = _parse_float(params, "end", "timestamp")
    step = _parse_float(params, "step", "duration")
    if step <= 0:
        raise InputError("zero or negative query resolution step widths are not accepted. Try a positive integer")
    if end < start:
        raise InputError("end timestamp must not be before start time")
    return Query(start=start, end=end, step=step, expression=params.get("query") or "")
