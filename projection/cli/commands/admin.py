"""Admin server command"""

import os
import sys

import click
import uvicorn
from rich.console import Console

from ..utils.output import print_error
from ...constants import (
    DEFAULT_ADMIN_HOST,
    DEFAULT_ADMIN_PORT,
    ENV_ADMIN_HOST,
    ENV_ADMIN_PORT,
)
from ...server import create_app

console = Console()


@click.command()
@click.option('--host', default=lambda: os.environ.get(ENV_ADMIN_HOST, DEFAULT_ADMIN_HOST),
              help=f'Interface to bind (default: {DEFAULT_ADMIN_HOST})')
@click.option('--port', type=int,
              default=lambda: int(os.environ.get(ENV_ADMIN_PORT, DEFAULT_ADMIN_PORT)),
              help=f'Port to listen on (default: {DEFAULT_ADMIN_PORT})')
@click.pass_context
def admin(ctx, host, port):
    """Serve the deployment API for the admin interface

    Exposes GET /api/deploy/status, GET /api/deploy/config and
    POST /api/deploy for the project in the current directory.
    """
    project_root = ctx.obj.project_root
    console.print(f"Serving [bold]{project_root}[/bold] on http://{host}:{port}")

    try:
        uvicorn.run(
            create_app(project_root),
            host=host,
            port=port,
            log_level="debug" if ctx.obj.debug else "info"
        )
    except OSError as e:
        print_error(f"Cannot start admin server on {host}:{port}", e)
        sys.exit(1)
