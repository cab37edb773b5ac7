"""Main CLI entry point for projection"""

import logging
import os
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler

from ..__version__ import __version__
from ..constants import APP_NAME, ENV_LOG_LEVEL, LOG_FORMAT

from .commands import deploy, status, admin

console = Console()


def setup_logging(verbose: bool = False, debug: bool = False, quiet: bool = False) -> None:
    """Setup logging configuration

    Args:
        verbose: Enable verbose output (INFO level)
        debug: Enable debug output (DEBUG level)
        quiet: Only log errors (ERROR level)
    """
    if quiet:
        level = logging.ERROR
    elif debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = os.environ.get(ENV_LOG_LEVEL, "WARNING").upper()
        if not isinstance(logging.getLevelName(level), int):
            level = logging.WARNING

    # Configure rich handler
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[
            RichHandler(
                console=console,
                show_time=debug,
                show_path=debug,
                rich_tracebacks=True,
                tracebacks_suppress=[click]
            )
        ],
        force=True
    )

    # Adjust third-party loggers
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


class Context:
    """CLI context object"""

    def __init__(self, project_root: Path):
        self.project_root = project_root
        self.verbose: bool = False
        self.debug: bool = False


@click.group(name=APP_NAME)
@click.version_option(__version__, prog_name=APP_NAME)
@click.option('-v', '--verbose', is_flag=True, help='Enable verbose output')
@click.option('--debug', is_flag=True, help='Enable debug output')
@click.option('-q', '--quiet', is_flag=True, help='Only log errors')
@click.pass_context
def cli(ctx, verbose, debug, quiet):
    """Projection - publish your portfolio site

    Builds the static site for the portfolio in the current directory and
    publishes it to a GitHub Pages branch of the repository's remote.
    """
    setup_logging(verbose=verbose, debug=debug, quiet=quiet)

    ctx.obj = Context(Path.cwd())
    ctx.obj.verbose = verbose
    ctx.obj.debug = debug


# Register commands
cli.add_command(deploy.deploy)
cli.add_command(status.status)
cli.add_command(admin.admin)


def main():
    """Main entry point for the CLI application

    This function handles:
    - Keyboard interrupts
    - Unexpected exceptions with proper error display
    """
    try:
        exit_code = cli.main(prog_name=APP_NAME, standalone_mode=False)

    except click.ClickException as e:
        e.show()
        sys.exit(e.exit_code)

    except (KeyboardInterrupt, click.Abort):
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        sys.exit(130)

    except Exception as e:
        console.print(f"[red]Unexpected error: {e}[/red]")
        if '--debug' in sys.argv:
            console.print_exception()
        sys.exit(1)

    sys.exit(exit_code or 0)


if __name__ == "__main__":
    main()
