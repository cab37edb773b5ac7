"""Deploy command implementation"""

import sys

import click
from rich.console import Console

from ..utils.output import ConsoleReporter, format_deploy_result, print_error, print_warning
from ...api.deployer import Deployer
from ...api.exceptions import ProjectionError
from ...constants import EMOJI_ROCKET
from ...models import DeployOptions

console = Console()


@click.command()
@click.option('-b', '--branch', help='Target branch (default: gh-pages)')
@click.option('-m', '--message', help='Commit message for the deployment')
@click.option('-r', '--remote', help='Git remote to push to (default: origin)')
@click.option('-d', '--dir', 'build_dir', help='Build output directory (default: dist)')
@click.option('--no-build', is_flag=True, help='Deploy existing files without building')
@click.option('--dry-run', is_flag=True, help='Show what would be deployed without deploying')
@click.option('--force', is_flag=True, help='Force push, overwriting the remote branch history')
@click.option('-c', '--config', 'config_path', type=click.Path(dir_okay=False),
              help='Path to the projection configuration file')
@click.option('--build-command', help='Command that builds the site')
@click.pass_context
def deploy(ctx, branch, message, remote, build_dir, no_build, dry_run, force,
           config_path, build_command):
    """Deploy the portfolio site to GitHub Pages

    Validates the Git setup, builds the site and pushes the build output
    to the pages branch of the remote.

    Examples:

        # Build and deploy
        projection deploy

        # Preview the resolved settings
        projection deploy --dry-run

        # Deploy an existing build to a custom branch
        projection deploy --no-build --dir public --branch pages
    """
    options = DeployOptions(
        branch=branch,
        message=message,
        remote=remote,
        build_dir=build_dir,
        no_build=no_build,
        dry_run=dry_run,
        force=force,
        config_path=config_path,
        build_command=build_command,
    )

    console.print(f"[bold]{EMOJI_ROCKET} Deploying to GitHub Pages[/bold]\n")
    if force and not dry_run:
        print_warning("--force will overwrite the history of the remote branch")

    try:
        deployer = Deployer(ctx.obj.project_root)
        result = deployer.deploy(options, reporter=ConsoleReporter(console))
    except ProjectionError as e:
        print_error("Deployment failed", e)
        sys.exit(1)

    console.print()
    format_deploy_result(result, dry_run=dry_run)

    if not result.success:
        sys.exit(1)
