import logging
from collections.abc import Mapping
from dataclasses import replace

from wavefront_promql_proxy.core.assemble import assemble_matrix
from wavefront_promql_proxy.core.models import MatrixResponse
from wavefront_promql_proxy.core.ports.executor import QueryExecutor
from wavefront_promql_proxy.core.request import parse_query
from wavefront_promql_proxy.core.skew import skew_later
from wavefront_promql_proxy.core.translate import translate_query

logger = logging.getLogger(__name__)


async def run_query_range(
    params: Mapping[str, str],
    executor: QueryExecutor,
    skew: float = 0.0,
) -> MatrixResponse:
    """Answer a ``query_range`` request from raw parameters.

    Raises ``ProxyError`` subclasses on bad input, backend rejection and
    transport failure; no partial result is ever returned.
    """
    query = parse_query(params)
    translated = translate_query(query, skew)
    logger.debug(
        "Translated [%s, %s] step %s to backend window [%d, %d) ms",
        query.start,
        query.end,
        query.step,
        translated.start_ms,
        translated.end_ms,
    )

    result = await executor.execute(translated)
    if skew and not result.failed:
        result = replace(result, series=tuple(skew_later(s, skew) for s in result.series))

    matrix = assemble_matrix(result, query)
    logger.debug("Returning %d series for %r", len(matrix.series), query.expression)
    return matrix
