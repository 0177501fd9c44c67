"""Run the feedback API."""

from typing import Optional

import click
import uvicorn
from rich.console import Console

from cli.config import load_config_model

console = Console()


@click.command()
@click.option("--host", help="Bind address (default from config)")
@click.option("--port", type=int, help="Port (default from config)")
@click.option("--reload", is_flag=True, help="Auto-reload on code changes")
def serve(host: Optional[str], port: Optional[int], reload: bool):
    """Serve the feedback API with uvicorn."""
    server = load_config_model().server
    host = host or server.host
    port = port or server.port
    console.print(f"[green]Serving[/] feedback API on http://{host}:{port}")
    uvicorn.run("web.app:app", host=host, port=port, reload=reload, log_config=None)
