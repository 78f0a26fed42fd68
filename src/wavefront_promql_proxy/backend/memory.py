from wavefront_promql_proxy.core.errors import ProxyError
from wavefront_promql_proxy.core.models import QueryResult, RawSeries, TranslatedQuery


class InMemoryQueryExecutor:
    """Deterministic stand-in for the backend.

    Returns the configured series for every query, or raises ``error`` if one
    is set. Every query received is kept in ``queries`` for inspection.
    """

    def __init__(
        self,
        series: list[RawSeries] | None = None,
        *,
        error_type: str = "",
        error_message: str = "",
        error: ProxyError | None = None,
    ) -> None:
        self._result = QueryResult(
            series=tuple(series or ()),
            error_type=error_type,
            error_message=error_message,
        )
        self._error = error
        self.queries: list[TranslatedQuery] = []
        self.disposed = False

    async def execute(self, query: TranslatedQuery) -> QueryResult:
        self.queries.append(query)
        if self._error is not None:
            raise self._error
        return self._result

    async def dispose(self) -> None:
        self.disposed = True
