"""Deployment readiness command"""

import sys

import click
from rich.console import Console

from ..utils.output import format_status
from ...api.deployer import Deployer
from ...constants import DEFAULT_REMOTE

console = Console()


@click.command()
@click.option('-r', '--remote', default=DEFAULT_REMOTE, show_default=True,
              help='Git remote to check')
@click.pass_context
def status(ctx, remote):
    """Check whether the project is ready to deploy

    Runs every pre-flight check (Git installation, repository, remote,
    project data and configuration) and lists the ones that fail.
    """
    deployer = Deployer(ctx.obj.project_root)
    report = deployer.status(remote)

    format_status(report)

    if not report.ready:
        sys.exit(1)
