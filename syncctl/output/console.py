# Syncctl Console Output
# Rich-based console output for status, badges, prompts and commands

from typing import Optional

from rich.console import Console as RichConsole
from rich.panel import Panel
from rich.table import Table

from syncctl.sync.commands import COMMAND_PRECONDITIONS, COMMAND_TITLES
from syncctl.sync.status import SyncStatus
from syncctl.workbench.activity import ActivityChangeEvent, Badge, NumberBadge, ProgressBadge
from syncctl.workbench.notification import NotificationHandle, Severity

_STATUS_STYLES: dict[SyncStatus, str] = {
    SyncStatus.UNINITIALIZED: "dim",
    SyncStatus.IDLE: "green",
    SyncStatus.SYNCING: "cyan",
    SyncStatus.HAS_CONFLICTS: "yellow",
}

_SEVERITY_STYLES: dict[Severity, tuple[str, str]] = {
    Severity.INFO: ("blue", "ℹ"),
    Severity.WARNING: ("yellow", "⚠"),
    Severity.ERROR: ("red", "✗"),
}


class Console:
    """
    Console output manager using Rich.

    Renders what the workbench shows: the global badge, notifications
    and which sync commands are available.
    """

    def __init__(self, *, verbose: bool = False, colored: bool = True, console: Optional[RichConsole] = None):
        """
        Initialize console.

        Args:
            verbose: Enable verbose output.
            colored: Enable colored output.
            console: Rich console to write to (created if not given).
        """
        self.verbose = verbose
        self._console = console or RichConsole(no_color=not colored)

    def print(self, *args, **kwargs) -> None:
        """Print to console."""
        self._console.print(*args, **kwargs)

    def input(self, prompt: str = "") -> str:
        return self._console.input(prompt)

    def print_error(self, message: str) -> None:
        self._console.print(f"[red]Error:[/red] {message}")

    def print_warning(self, message: str) -> None:
        self._console.print(f"[yellow]Warning:[/yellow] {message}")

    def print_success(self, message: str) -> None:
        self._console.print(f"[green]{message}[/green]")

    def print_info(self, message: str) -> None:
        self._console.print(f"[blue]{message}[/blue]")

    def format_status(self, status: SyncStatus) -> str:
        style = _STATUS_STYLES.get(status, "white")
        return f"[{style}]{status.value}[/{style}]"

    def format_badge(self, badge: Optional[Badge]) -> str:
        if badge is None:
            return "[dim]none[/dim]"
        if isinstance(badge, NumberBadge):
            return f"[yellow]({badge.number})[/yellow] {badge.get_description()}"
        if isinstance(badge, ProgressBadge):
            return f"[cyan]⟳[/cyan] {badge.get_description()}"
        return str(badge)

    def print_activity_change(self, event: ActivityChangeEvent) -> None:
        """Print a badge appearing or going away."""
        if event.shown:
            self._console.print(f"[bold]Badge:[/bold] {self.format_badge(event.activity.badge)}")
        elif self.verbose:
            self._console.print(f"[dim]Badge cleared: {event.activity.badge.get_description()}[/dim]")

    def print_notification(self, handle: NotificationHandle) -> None:
        """Print a notification with its choices."""
        color, icon = _SEVERITY_STYLES.get(handle.severity, ("white", "•"))
        self._console.print(f"[{color}]{icon}[/{color}] {handle.message}")
        for choice in handle.choices:
            self._console.print(f"    [cyan]→[/cyan] {choice.label}")

    def print_status(
        self,
        status: SyncStatus,
        *,
        auto_sync: bool,
        badge: Optional[Badge] = None,
        notifications: Optional[list[NotificationHandle]] = None,
    ) -> None:
        """Print a summary panel of the current sync state."""
        auto_sync_text = "[green]on[/green]" if auto_sync else "[dim]off[/dim]"
        lines = [
            f"Status:    {self.format_status(status)}",
            f"Auto sync: {auto_sync_text}",
            f"Badge:     {self.format_badge(badge)}",
        ]
        if notifications:
            lines.append("Notifications:")
            for handle in notifications:
                lines.append(f"  • {handle.message}")

        self._console.print(Panel("\n".join(lines), title="User Configuration Sync", border_style="blue"))

    def print_commands(self, availability: dict[str, bool]) -> None:
        """
        Print a table of sync commands and whether each is available.

        Args:
            availability: Dict of command id to availability.
        """
        table = Table(show_header=True, header_style="bold")
        table.add_column("Command")
        table.add_column("Id", style="dim")
        table.add_column("Available", justify="center")
        if self.verbose:
            table.add_column("When", style="dim")

        for command_id, available in availability.items():
            mark = "[green]✓[/green]" if available else "[red]✗[/red]"
            row = [COMMAND_TITLES.get(command_id, command_id), command_id, mark]
            if self.verbose:
                precondition = COMMAND_PRECONDITIONS.get(command_id)
                row.append(precondition.serialize() if precondition else "")
            table.add_row(*row)

        self._console.print(table)

    def print_config_summary(self, config_path: str, auto_sync: bool, service: Optional[str]) -> None:
        """Print configuration summary."""
        self._console.print(
            Panel(
                f"Config: {config_path}\n"
                f"Auto sync: {'on' if auto_sync else 'off'}\n"
                f"Service: {service or '(not set)'}",
                title="syncctl Configuration",
                border_style="blue",
            )
        )


def create_console(*, verbose: bool = False, colored: bool = True) -> Console:
    """
    Create a console instance.

    Args:
        verbose: Enable verbose output.
        colored: Enable colored output.

    Returns:
        Console instance.
    """
    return Console(verbose=verbose, colored=colored)
