import asyncio
from collections.abc import Mapping
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from wavefront_promql_proxy.api.schemas import QueryRangeResponse
from wavefront_promql_proxy.config import ProxySettings, SettingsError, load_settings
from wavefront_promql_proxy.core.errors import ProxyError, to_error_payload
from wavefront_promql_proxy.core.models import MatrixResponse
from wavefront_promql_proxy.core.pipeline import run_query_range
from wavefront_promql_proxy.core.ports.executor import QueryExecutor

console = Console()


def format_metric(labels: Mapping[str, str]) -> str:
    """Render labels the way Prometheus prints a series: ``name{k="v", ...}``."""
    name = labels.get("__name__", "")
    inner = ", ".join(f'{k}="{v}"' for k, v in sorted(labels.items()) if k != "__name__")
    return f"{name}{{{inner}}}" if inner or not name else name


def _render_matrix(matrix: MatrixResponse) -> None:
    table = Table(show_lines=False)
    for h in ("metric", "timestamp", "value"):
        table.add_column(h)
    rows = 0
    for series in matrix.series:
        metric = format_metric(series.metric_labels)
        for ts, value in series.values:
            table.add_row(metric, f"{ts:g}", value)
            rows += 1
    console.print(table)
    console.print(f"({len(matrix.series)} series, {rows} points)")


def _get_executor(settings: ProxySettings) -> QueryExecutor:
    from wavefront_promql_proxy.backend.wavefront import WavefrontQueryExecutor

    return WavefrontQueryExecutor(settings.wavefront_address, settings.wavefront_token, timeout=settings.timeout)


def query(
    expression: Annotated[str, typer.Argument(help="Query text, forwarded to Wavefront unchanged.")],
    start: Annotated[str, typer.Option(help="Range start, Unix seconds.")],
    end: Annotated[str, typer.Option(help="Range end (inclusive), Unix seconds.")],
    step: Annotated[str, typer.Option(help="Grid step in seconds.")] = "60",
    skew: Annotated[str, typer.Option(help="How far the Wavefront clock runs behind, e.g. 30s.")] = "0s",
    timeout: Annotated[float | None, typer.Option(help="Wavefront request timeout in seconds.")] = None,
    json_output: Annotated[bool, typer.Option("--json", help="Print the query_range JSON body.")] = False,
) -> None:
    """Run one range query through the proxy pipeline and print the matrix."""
    try:
        settings = load_settings(skew=skew, timeout=timeout)
    except SettingsError as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        raise typer.Exit(code=1) from exc

    executor = _get_executor(settings)
    params = {"query": expression, "start": start, "end": end, "step": step}

    async def _run() -> MatrixResponse:
        try:
            return await run_query_range(params, executor, settings.skew)
        finally:
            await executor.dispose()

    try:
        matrix = asyncio.run(_run())
    except ProxyError as exc:
        console.print(f"[red]{escape(to_error_payload(exc).message)}[/red]")
        raise typer.Exit(code=1) from exc

    if json_output:
        console.print_json(QueryRangeResponse.from_matrix(matrix).model_dump_json(by_alias=True))
    else:
        _render_matrix(matrix)
