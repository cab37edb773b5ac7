"""Output formatting utilities"""

from typing import Optional

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from ...constants import (
    EMOJI_CLIPBOARD,
    EMOJI_ERROR,
    EMOJI_HAMMER,
    EMOJI_PACKAGE,
    EMOJI_PARTY,
    EMOJI_ROCKET,
    EMOJI_SUCCESS,
    EMOJI_WARNING,
    STAGE_BUILD,
    STAGE_DONE,
    STAGE_DRY_RUN,
    STAGE_PUBLISH,
)
from ...models import DeploymentPlan, DeploymentResult, DeploymentStatus

console = Console()

# Stages opening a new section in the progress output
STAGE_HEADERS = {
    STAGE_BUILD: f"{EMOJI_HAMMER} Building site",
    STAGE_PUBLISH: f"{EMOJI_PACKAGE} Deploying to GitHub Pages",
}


class ConsoleReporter:
    """Renders pipeline progress events"""

    def __init__(self, out: Optional[Console] = None):
        self.console = out or console

    def __call__(self, stage: str, message: str) -> None:
        if stage in (STAGE_DONE, STAGE_DRY_RUN):
            return

        header = STAGE_HEADERS.get(stage)
        if header:
            self.console.print(f"\n[bold]{header}[/bold]")
        self.console.print(f"  [cyan]→[/cyan] {escape(message)}")


def format_plan(plan: DeploymentPlan, dry_run: bool = False) -> None:
    """Display the deployment summary"""
    table = Table(title=f"{EMOJI_CLIPBOARD} Deployment Summary", box=box.SIMPLE, show_header=False)
    table.add_column("Key", style="bold")
    table.add_column("Value", style="cyan")

    table.add_row("Repository", escape(plan.repository_url))
    table.add_row("Branch", plan.branch)
    table.add_row("Build Directory", plan.build_dir)
    table.add_row("Base URL", plan.base_url)
    if plan.homepage:
        table.add_row("Custom Domain", plan.homepage)
    if dry_run:
        table.add_row("Mode", "[yellow]DRY RUN (no changes will be made)[/yellow]")

    console.print(table)


def format_deploy_result(result: DeploymentResult, dry_run: bool = False) -> None:
    """Format and display deploy operation result"""
    if result.plan:
        format_plan(result.plan, dry_run=dry_run)

    if result.success and dry_run:
        print_info(result.message)
        return

    if result.success:
        lines = [
            f"[green]{EMOJI_PARTY} Deployment successful![/green]",
            "",
            f"[bold]Site URL:[/bold] {result.url}",
            f"[bold]Branch:[/bold] {result.branch}",
            f"[bold]Duration:[/bold] {result.duration:.1f}s",
        ]
        console.print(Panel("\n".join(lines), title="Deploy Result", border_style="green"))

        console.print("\nIt may take a few minutes for GitHub Pages to update.")
        console.print("[bold]If this is your first deployment:[/bold]")
        console.print("  1. Go to your repository settings on GitHub")
        console.print("  2. Navigate to the Pages section")
        console.print(f"  3. Ensure the source is set to the '{result.branch}' branch")
        return

    error = result.error
    lines = [f"[red]{EMOJI_ERROR} {escape(error.message)}[/red]"]
    if error.solution:
        lines.extend(["", f"[bold]Solution:[/bold] {escape(error.solution)}"])
    if error.details:
        lines.extend(["", "[bold]Original error:[/bold]", f"[dim]{escape(error.details)}[/dim]"])

    console.print(Panel(
        "\n".join(lines),
        title=f"Deploy Error ({error.code})",
        border_style="red"
    ))


def format_status(status: DeploymentStatus) -> None:
    """Format and display deployment readiness"""
    table = Table(title="Deployment Status", box=box.ROUNDED)
    table.add_column("Check", style="cyan")
    table.add_column("Status", justify="center")
    table.add_column("Details")

    def mark(ok: bool) -> str:
        return f"[green]{EMOJI_SUCCESS}[/green]" if ok else f"[red]{EMOJI_ERROR}[/red]"

    git = status.git
    table.add_row("Git installed", mark(status.git_installed), "")
    if status.git_installed:
        table.add_row("Git repository", mark(git.is_git_repo), git.current_branch)
        table.add_row(f"Remote '{git.remote_name}'", mark(git.has_remote), git.remote_url)

    if status.plan:
        table.add_row("Deploy branch", "", status.plan.branch)
        table.add_row("Base URL", "", status.plan.base_url)
        table.add_row("Build directory", "", status.plan.build_dir)
        if status.plan.homepage:
            table.add_row("Custom domain", "", status.plan.homepage)

    console.print(table)

    if status.ready:
        console.print(f"\n[green]{EMOJI_ROCKET} Ready to deploy[/green]")
    else:
        console.print(f"\n[yellow]{EMOJI_WARNING} Not ready to deploy:[/yellow]")
        for issue in status.issues:
            console.print(f"  • {escape(issue)}")


def print_error(message: str, error: Optional[Exception] = None) -> None:
    """Print error message"""
    if error:
        console.print(f"[red]Error:[/red] {escape(message)}: {escape(str(error))}")
    else:
        console.print(f"[red]Error:[/red] {escape(message)}")


def print_warning(message: str) -> None:
    """Print warning message"""
    console.print(f"[yellow]Warning:[/yellow] {message}")


def print_info(message: str) -> None:
    """Print info message"""
    console.print(f"[blue]Info:[/blue] {message}")

