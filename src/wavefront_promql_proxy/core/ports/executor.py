from typing import Protocol

from wavefront_promql_proxy.core.models import QueryResult, TranslatedQuery


class QueryExecutor(Protocol):
    async def execute(self, query: TranslatedQuery) -> QueryResult: ...

    async def dispose(self) -> None: ...
