import logging
from enum import Enum
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape

from wavefront_promql_proxy.config import DEFAULT_LISTEN, SettingsError, load_settings

console = Console()


class LogLevel(str, Enum):
    debug = "debug"
    info = "info"
    warning = "warning"
    error = "error"


def serve(
    http: Annotated[str, typer.Option(help="Address to listen on, host:port.")] = DEFAULT_LISTEN,
    skew: Annotated[str, typer.Option(help="How far the Wavefront clock runs behind, e.g. 30s or 1m.")] = "0s",
    timeout: Annotated[float | None, typer.Option(help="Wavefront request timeout in seconds.")] = None,
    log_level: Annotated[LogLevel, typer.Option(help="Logging verbosity.")] = LogLevel.info,
) -> None:
    """Start the query_range proxy server."""
    import uvicorn

    from wavefront_promql_proxy.api.app import create_app

    try:
        settings = load_settings(http, skew, timeout)
    except SettingsError as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        raise typer.Exit(code=1) from exc

    logging.basicConfig(
        level=log_level.value.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = create_app(settings)
    console.print(f"[green]Starting proxy on {settings.host}:{settings.port} (skew {settings.skew:g}s)[/green]")
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=log_level.value)
