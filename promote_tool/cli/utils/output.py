# promote_tool/cli/utils/output.py
"""Output formatting utilities"""

from typing import List

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ...constants import EMOJI_SUCCESS, EMOJI_ERROR, EMOJI_WARNING
from ...models import PhaseResult, PrepareResult, DeployResult, DispatchResult
from ...models.result import OperationStatus
from ...utils.formatting import format_size, format_duration, pluralize

console = Console()


def _header_lines(result: PhaseResult) -> List[str]:
    lines = [
        f"[bold]Environment:[/bold] {result.environment}",
        f"[bold]Tag:[/bold] {result.tag}",
    ]
    if result.project_id:
        lines.append(f"[bold]Project:[/bold] {result.project_id}")
    return lines


def _warning_lines(result: PhaseResult) -> List[str]:
    if not result.warnings:
        return []
    lines = [""]
    for warning in result.warnings:
        lines.append(f"[yellow]{EMOJI_WARNING} {warning}[/yellow]")
    return lines


def format_error(result: PhaseResult) -> None:
    """Display a failed phase: where it stopped and why"""
    error = result.error
    lines = [f"[red]{EMOJI_ERROR} {result.phase} failed:[/red] {result.message}", ""]
    lines.extend(_header_lines(result))

    if error:
        service = error.context.get("service")
        if service:
            lines.append(f"[bold]Service:[/bold] {service}")
        lines.append(f"[bold]Error code:[/bold] {error.code}")
        missing = error.context.get("missing")
        if missing:
            lines.append(f"[bold]Missing:[/bold] {', '.join(missing)}")

    lines.extend(_warning_lines(result))

    console.print(Panel(
        "\n".join(lines),
        title=f"{result.phase} error",
        border_style="red"
    ))


def format_prepare_result(result: PrepareResult) -> None:
    """Format and display prepare-release result"""
    if result.is_failed:
        format_error(result)
        if result.fetch and result.fetch.extracted_dirs:
            console.print("[yellow]Extracted before the failure (left in place):[/yellow]")
            for path in result.fetch.extracted_dirs:
                console.print(f"  • {path}")
        return

    lines = [f"[green]{EMOJI_SUCCESS}[/green] {result.message}", ""]
    lines.extend(_header_lines(result))
    lines.append(f"[bold]Services:[/bold] {' '.join(result.services)}")

    if result.fetch:
        lines.append(
            f"[bold]Downloaded:[/bold] {pluralize(result.fetch.total_assets, 'asset')}, "
            f"{format_size(result.fetch.total_bytes)}"
        )
        lines.append(f"[bold]Staging:[/bold] {result.fetch.staging_dir}")

    if result.maintenance_manifest:
        lines.append(f"[bold]Maintenance manifest:[/bold] {result.maintenance_manifest}")

    if result.duration is not None:
        lines.append(f"[dim]Duration: {format_duration(result.duration)}[/dim]")

    console.print(Panel(
        "\n".join(lines),
        title="Prepare Result",
        border_style="green"
    ))


def format_deploy_result(result: DeployResult) -> None:
    """Format and display deploy-service result"""
    if result.rollouts:
        table = Table(title=f"Version {result.version_id}", box=box.ROUNDED)
        table.add_column("Service", style="cyan")
        table.add_column("Status", justify="center")
        table.add_column("Retired versions")

        for rollout in result.rollouts:
            if rollout.status == OperationStatus.SUCCESS:
                status = f"[green]{EMOJI_SUCCESS} Deployed[/green]"
            else:
                status = f"[red]{EMOJI_ERROR} Failed[/red]"

            if rollout.retention is None:
                retired = "-"
            elif rollout.retention.is_failed:
                retired = f"[yellow]{EMOJI_WARNING} cleanup failed[/yellow]"
            else:
                retired = ", ".join(rollout.retention.deleted) or "none"

            table.add_row(rollout.service, status, retired)

        for service in result.pending_services:
            table.add_row(service, "[dim]Not attempted[/dim]", "-")

        console.print(table)

    if result.is_failed:
        format_error(result)
        return

    lines = [f"[green]{EMOJI_SUCCESS}[/green] {result.message}", ""]
    lines.extend(_header_lines(result))
    lines.extend(_warning_lines(result))
    if result.duration is not None:
        lines.append(f"[dim]Duration: {format_duration(result.duration)}[/dim]")

    console.print(Panel(
        "\n".join(lines),
        title="Deploy Result",
        border_style="green"
    ))


def format_dispatch_result(result: DispatchResult) -> None:
    """Format and display dispatch-service result"""
    if result.is_failed:
        format_error(result)
        return

    lines = [f"[green]{EMOJI_SUCCESS}[/green] {result.message}", ""]
    lines.extend(_header_lines(result))
    if result.manifest_path:
        lines.append(f"[bold]Dispatch manifest:[/bold] {result.manifest_path}")

    console.print(Panel(
        "\n".join(lines),
        title="Dispatch Result",
        border_style="green"
    ))
