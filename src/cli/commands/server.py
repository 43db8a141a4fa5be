"""Run the HTTP API with uvicorn."""

import click
import uvicorn
from rich.console import Console

from cli.utils import get_components

console = Console()


@click.command()
@click.option("--host", default=None, help="Bind address (defaults to config/HOST)")
@click.option("--port", type=int, default=None, help="Listen port (defaults to config/PORT)")
@click.option("--reload", is_flag=True, help="Auto-reload on code changes (development)")
def serve(host: str | None, port: int | None, reload: bool):
    """Start the chat API server."""
    c = get_components()
    config = c["config"]
    c["store"].close()

    host = host or config.server.host
    port = port or config.server.port
    console.print(f"[green]Server running on[/] http://{host}:{port}")

    if reload:
        uvicorn.run("web.app:create_app", factory=True, host=host, port=port, reload=True)
        return

    from web.app import create_app

    uvicorn.run(create_app(config), host=host, port=port, log_config=None)
