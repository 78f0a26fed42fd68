from __future__ import annotations

from fastapi import FastAPI

from wavefront_promql_proxy.api.lifespan import lifespan
from wavefront_promql_proxy.api.routes.health import router as health_router
from wavefront_promql_proxy.api.routes.query_range import router as query_range_router
from wavefront_promql_proxy.config import ProxySettings


def create_app(settings: ProxySettings | None = None) -> FastAPI:
    app = FastAPI(
        title="Wavefront PromQL Proxy",
        description="Answer Prometheus range queries from a Wavefront backend.",
        version="0.1.0",
        lifespan=lifespan,
    )
    # Without explicit settings they are read from the environment on first use.
    app.state.settings = settings
    app.state.executor = None

    app.include_router(health_router, include_in_schema=False)
    app.include_router(query_range_router)

    return app
