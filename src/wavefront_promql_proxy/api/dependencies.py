from __future__ import annotations

from collections.abc import AsyncIterator

from fastapi import Depends, FastAPI, Request

from wavefront_promql_proxy.backend.wavefront import WavefrontQueryExecutor
from wavefront_promql_proxy.config import ProxySettings, load_settings
from wavefront_promql_proxy.core.ports.executor import QueryExecutor


def get_settings(request: Request) -> ProxySettings:
    """Return the app's settings, loading them from the environment if none were given."""
    settings: ProxySettings | None = request.app.state.settings
    if settings is None:
        settings = load_settings()
        request.app.state.settings = settings
    return settings


async def get_executor(
    request: Request,
    settings: ProxySettings = Depends(get_settings),
) -> AsyncIterator[QueryExecutor]:
    """Yield the shared backend executor, creating it lazily on first call."""
    state = request.app.state
    if state.executor is None:
        state.executor = WavefrontQueryExecutor(
            settings.wavefront_address,
            settings.wavefront_token,
            timeout=settings.timeout,
        )
    yield state.executor


async def shutdown_executor(app: FastAPI) -> None:
    executor = app.state.executor
    if executor is not None:
        await executor.dispose()
        app.state.executor = None
