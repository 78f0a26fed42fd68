import typer

from wavefront_promql_proxy.cli.query import query
from wavefront_promql_proxy.cli.serve import serve

app = typer.Typer(
    name="wavefront-promql-proxy",
    help="Serve Prometheus range queries from a Wavefront backend.",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)

app.command("serve")(serve)
app.command("query")(query)


def main() -> None:
    app()
