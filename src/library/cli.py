"""Command line entry point for running and preparing the service."""

import asyncio

import typer
from rich.console import Console
from rich.panel import Panel

from src.library.runtime.context import get_config

console = Console()

app = typer.Typer(
    help="Library API command line tool",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


@app.command(name="serve")
def serve(
    host: str | None = typer.Option(None, help="Host to bind the server to"),
    port: int | None = typer.Option(None, help="Port to bind the server to"),
    reload: bool = typer.Option(False, help="Enable auto-reload on code changes"),
    log_level: str = typer.Option(
        "info", help="Log level (debug, info, warning, error, critical)"
    ),
) -> None:
    """Start the API server."""
    import uvicorn

    config = get_config()
    host = host or config.app.host
    port = port or config.app.port

    console.print(
        Panel.fit(
            "[bold green]Starting Library API[/bold green]",
            border_style="green",
        )
    )
    console.print(f"[blue]Server will be available at:[/blue] http://{host}:{port}")
    console.print("[dim]Press Ctrl+C to stop the server[/dim]")

    uvicorn.run(
        "src.library.api.http.app:app",
        host=host,
        port=port,
        reload=reload,
        log_level=log_level,
        access_log=False,
    )


@app.command(name="init-db")
def init_db_command() -> None:
    """Create the readers and books tables if they do not exist."""
    from sqlalchemy.engine import make_url

    from src.library.runtime.init_db import init_db

    config = get_config()
    database_url = make_url(config.database.url).render_as_string(hide_password=True)
    console.print(f"[blue]Initializing database:[/blue] {database_url}")
    try:
        asyncio.run(init_db(config))
    except Exception as exc:
        console.print(f"[red]Database initialization failed:[/red] {exc}")
        raise typer.Exit(code=1) from exc
    console.print("[green]Database ready[/green]")


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
