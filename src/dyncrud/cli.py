"""
dyncrud command line interface.

    dyncrud serve --port 7777
    dyncrud version
"""

from __future__ import annotations

from pathlib import Path

import typer

from dyncrud._version import get_version

app = typer.Typer(
    name="dyncrud",
    help="Dynamic CRUD API driven by user-uploaded JSON schemas.",
    no_args_is_help=True,
)


@app.command("serve")
def serve(
    host: str | None = typer.Option(None, "--host", help="Host to bind to"),
    port: int | None = typer.Option(None, "--port", "-p", help="Port to bind to"),
    log_dir: Path | None = typer.Option(None, "--log-dir", help="Directory for JSONL logs"),
    log_level: str | None = typer.Option(None, "--log-level", help="DEBUG, INFO, WARNING..."),
    strict_schemas: bool | None = typer.Option(
        None,
        "--strict-schemas/--no-strict-schemas",
        help="Reject malformed schemas at upload time",
    ),
) -> None:
    """
    Run the API server.

    Options override DYNCRUD_* environment variables.
    """
    from dyncrud.runtime.app_factory import run_app
    from dyncrud.runtime.config import ServerConfig
    from dyncrud.runtime.logging import setup_logging

    try:
        config = ServerConfig.from_env()
    except ValueError as e:
        typer.echo(f"Configuration error: {e}", err=True)
        raise typer.Exit(code=1)

    if host is not None:
        config.host = host
    if port is not None:
        config.port = port
    if log_dir is not None:
        config.log_dir = log_dir
    if log_level is not None:
        config.log_level = log_level.upper()
    if strict_schemas is not None:
        config.strict_schemas = strict_schemas

    try:
        setup_logging(config.log_dir, config.log_level)
    except ValueError as e:
        typer.echo(f"Configuration error: {e}", err=True)
        raise typer.Exit(code=1)

    base = f"http://{config.host}:{config.port}"
    typer.echo(f"Service is running at {base}")
    typer.echo(f"Swagger UI available at {base}/swagger-ui/")
    typer.echo(f"OpenAPI spec available at {base}/api-docs/openapi.json")

    run_app(config)


@app.command("version")
def version() -> None:
    """Show the installed version."""
    typer.echo(f"dyncrud {get_version()}")


def main() -> None:
    """Console script entry point."""
    app()


if __name__ == "__main__":
    main()
