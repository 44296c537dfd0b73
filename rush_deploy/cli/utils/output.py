# rush_deploy/cli/utils/output.py
"""Output formatting utilities"""

from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich import box
from rich.markup import escape

from ...constants import EMOJI_SUCCESS, EMOJI_ERROR, EMOJI_FOLDER
from ...models import DeployResult

console = Console()


def format_deploy_result(result: DeployResult) -> None:
    """Format and display deploy operation result"""
    lines = [
        f"[green]{EMOJI_SUCCESS}[/green] Deployment completed successfully!",
        "",
        f"[bold]Scenario:[/bold] {result.scenario_name}",
        f"[bold]Target:[/bold] {result.target_root}",
        f"[bold]Folders copied:[/bold] {result.copied_folders}",
        f"[bold]Links created:[/bold] {result.created_links}",
    ]

    if result.duration is not None:
        lines.append(f"[bold]Duration:[/bold] {result.duration:.1f}s")

    console.print(Panel(
        "\n".join(lines),
        title="Deploy Result",
        border_style="green"
    ))

    if len(result.subdeployments) > 1 or result.subdeployments and result.subdeployments[0].folder_name:
        table = Table(title="Subdeployments", box=box.ROUNDED)
        table.add_column("Folder", style="cyan")
        table.add_column("Projects")
        table.add_column("Folders", justify="right")
        table.add_column("Links", justify="right")

        for item in result.subdeployments:
            table.add_row(
                f"{EMOJI_FOLDER} {item.folder_name}",
                ", ".join(item.included_projects),
                str(item.copied_folders),
                f"{item.created_links}/{item.recorded_links}",
            )
        console.print(table)


def print_error(message: str, error: Optional[Exception] = None) -> None:
    """Print error message"""
    if error:
        console.print(f"[red]{EMOJI_ERROR} Error:[/red] {escape(message)}: {escape(str(error))}", highlight=False, soft_wrap=True)
    else:
        console.print(f"[red]{EMOJI_ERROR} Error:[/red] {escape(message)}", highlight=False, soft_wrap=True)


def print_success(message: str) -> None:
    """Print success message"""
    console.print(f"[green]Success:[/green] {escape(message)}", highlight=False, soft_wrap=True)
