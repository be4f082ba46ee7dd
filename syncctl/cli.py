"""Click-based CLI for syncctl - User Configuration Sync Control."""

from __future__ import annotations

import asyncio
import sys
import threading
from pathlib import Path
from typing import Optional

import click
import yaml
from pydantic import ValidationError

from syncctl import __version__
from syncctl.app import SyncWorkbench
from syncctl.config import (
    AUTO_SYNC_SETTING,
    ConfigurationService,
    ensure_config_exists,
    generate_default_config,
    get_config_path,
    load_or_default_config,
    validate_config_file,
)
from syncctl.logger import configure_logging
from syncctl.output import Console
from syncctl.sync import (
    CONTINUE_SYNC_COMMAND_ID,
    RESOLVE_CONFLICTS_COMMAND_ID,
    START_SYNC_COMMAND_ID,
    STOP_SYNC_COMMAND_ID,
    ContinuationResult,
    SyncServiceLoadError,
    SyncStatus,
    evaluate_command_availability,
    load_sync_service,
)
from syncctl.sync.service import UserDataSyncService
from syncctl.utils.lifecycle import DisposableStore
from syncctl.workbench.activity import GLOBAL_ACTIVITY_ID
from syncctl.workbench.commands import CommandUnavailableError

console = Console()

# Raised for unreadable YAML, a non-mapping root or values the schema rejects
CONFIG_ERRORS = (yaml.YAMLError, ValidationError, ValueError)

INTERACTIVE_COMMANDS: dict[str, str] = {
    "start": START_SYNC_COMMAND_ID,
    "stop": STOP_SYNC_COMMAND_ID,
    "resolve": RESOLVE_CONFLICTS_COMMAND_ID,
    "continue": CONTINUE_SYNC_COMMAND_ID,
}

INTERACTIVE_HELP = """[bold]Commands:[/bold]
  [cyan]start[/cyan]     Turn auto sync on
  [cyan]stop[/cyan]      Turn auto sync off and stop the running sync
  [cyan]resolve[/cyan]   Resolve conflicts
  [cyan]continue[/cyan]  Save the conflict preview and continue syncing
  [cyan]status[/cyan]    Show status, badge and available commands
  [cyan]reload[/cyan]    Re-read the configuration file
  [cyan]quit[/cyan]      Exit"""


def _load_configuration_service() -> ConfigurationService:
    """Configuration service bound to the config file, exiting on invalid config."""
    config_path = get_config_path()
    try:
        return ConfigurationService.from_file(config_path)
    except CONFIG_ERRORS as e:
        console.print_error(f"Invalid configuration in {config_path}:\n{e}")
        sys.exit(1)


@click.group()
@click.version_option(version=__version__, prog_name="syncctl")
def cli() -> None:
    """syncctl - User Configuration Sync Control.

    Shows the status of the user configuration sync service, offers the
    sync commands and runs auto sync every five minutes when enabled.

    \b
    Config: ~/.config/syncctl/config.yaml (override with SYNCCTL_CONFIG)
    """
    pass


# ============================================================================
# Config
# ============================================================================


@cli.group()
def config() -> None:
    """Manage syncctl configuration."""
    pass


@config.command("init")
@click.option("--force", "-f", is_flag=True, help="Overwrite an existing configuration file")
def config_init(force: bool) -> None:
    """Create the default configuration file."""
    config_path = get_config_path()

    if config_path.exists() and not force:
        console.print_warning(f"Configuration already exists: {config_path}")
        console.print("[dim]Use --force to overwrite[/dim]")
        return

    if force and config_path.exists():
        config_path.write_text(generate_default_config(), encoding="utf-8")
    else:
        ensure_config_exists(config_path)

    console.print_success(f"Created configuration: {config_path}")


@config.command("show")
def config_show() -> None:
    """Show the current configuration."""
    config_path = get_config_path()
    try:
        loaded = load_or_default_config(config_path)
    except CONFIG_ERRORS as e:
        console.print_error(f"Invalid configuration in {config_path}:\n{e}")
        sys.exit(1)

    location = str(config_path) if config_path.exists() else f"{config_path} (not created, showing defaults)"
    console.print_config_summary(location, loaded.user_configuration.auto_sync, loaded.service)


@config.command("validate")
def config_validate() -> None:
    """Validate the configuration file."""
    config_path = get_config_path()
    is_valid, errors = validate_config_file(config_path)

    if is_valid:
        console.print_success(f"Configuration is valid: {config_path}")
        return

    console.print_error(f"Configuration is invalid: {config_path}")
    for error in errors:
        console.print(f"  [red]•[/red] {error}")
    sys.exit(1)


@config.command("path")
def config_path_cmd() -> None:
    """Print the configuration file path."""
    click.echo(str(get_config_path()))


# ============================================================================
# Auto sync setting
# ============================================================================


@cli.command()
def start() -> None:
    """Turn auto sync on.

    A running 'syncctl run' picks the change up on 'reload'.
    """
    configuration_service = _load_configuration_service()
    configuration_service.update_value(AUTO_SYNC_SETTING, True)
    console.print_success("Auto sync turned on")


@cli.command()
def stop() -> None:
    """Turn auto sync off."""
    configuration_service = _load_configuration_service()
    configuration_service.update_value(AUTO_SYNC_SETTING, False)
    console.print_success("Auto sync turned off")


@cli.command("commands")
@click.option(
    "--status",
    "-s",
    "status_value",
    type=click.Choice([status.value for status in SyncStatus]),
    default=SyncStatus.IDLE.value,
    show_default=True,
    help="Sync status to evaluate against",
)
@click.option(
    "--auto-sync/--no-auto-sync",
    default=None,
    help="Auto sync setting to evaluate against (default: current configuration)",
)
@click.option("--verbose", "-v", is_flag=True, help="Show the availability expressions")
def commands_cmd(status_value: str, auto_sync: Optional[bool], verbose: bool) -> None:
    """Show which sync commands are available for a status."""
    if auto_sync is None:
        auto_sync = bool(_load_configuration_service().get_value(AUTO_SYNC_SETTING))

    availability = evaluate_command_availability(SyncStatus(status_value), auto_sync)
    out = Console(verbose=verbose)
    out.print(f"Status: {out.format_status(SyncStatus(status_value))}, auto sync: {'on' if auto_sync else 'off'}")
    out.print_commands(availability)


# ============================================================================
# Run
# ============================================================================


@cli.command()
@click.option("--service", "service_ref", help="Sync service factory as 'package.module:callable'")
@click.option("--verbose", "-v", is_flag=True, help="Show detailed output")
def run(service_ref: Optional[str], verbose: bool) -> None:
    """Run the sync control loop interactively.

    Shows badge and notification changes as they happen and accepts
    commands on standard input. Type 'help' for the list.
    """
    configuration_service = _load_configuration_service()
    output = configuration_service.config.output
    configure_logging(output, verbose=verbose or None)
    out = Console(verbose=verbose or output.verbose, colored=output.colored)

    reference = service_ref or configuration_service.config.service
    if not reference:
        out.print_error("No sync service configured. Use --service or set 'service' in the configuration.")
        sys.exit(1)

    try:
        sync_service = load_sync_service(reference, configuration_service)
    except SyncServiceLoadError as e:
        out.print_error(e.message)
        sys.exit(1)

    try:
        asyncio.run(_run_workbench(sync_service, configuration_service, out))
    except KeyboardInterrupt:
        out.print("\n[dim]Interrupted[/dim]")
    finally:
        dispose = getattr(sync_service, "dispose", None)
        if callable(dispose):
            dispose()


async def _run_workbench(
    sync_service: UserDataSyncService,
    configuration_service: ConfigurationService,
    out: Console,
) -> None:
    async with SyncWorkbench(sync_service, configuration_service) as workbench:
        services = workbench.services
        subscriptions = DisposableStore()
        subscriptions.add(services.activity_service.on_did_change_activity(out.print_activity_change))
        subscriptions.add(services.notification_service.on_did_add_notification(out.print_notification))

        _print_workbench_status(workbench, out)
        lines = _start_input_reader(out)
        try:
            while True:
                line = await lines.get()
                if line is None or not await _dispatch(line.strip().lower(), workbench, out):
                    break
        finally:
            subscriptions.dispose()


def _start_input_reader(out: Console) -> asyncio.Queue[Optional[str]]:
    """Read stdin lines on a daemon thread. None marks end of input."""
    loop = asyncio.get_running_loop()
    queue: asyncio.Queue[Optional[str]] = asyncio.Queue()

    def put(line: Optional[str]) -> bool:
        try:
            loop.call_soon_threadsafe(queue.put_nowait, line)
        except RuntimeError:
            # Loop already closed
            return False
        return True

    def read() -> None:
        while True:
            try:
                line = out.input("syncctl> ")
            except (EOFError, KeyboardInterrupt):
                put(None)
                return
            if not put(line):
                return

    threading.Thread(target=read, name="syncctl-input", daemon=True).start()
    return queue


async def _dispatch(line: str, workbench: SyncWorkbench, out: Console) -> bool:
    """Handle one interactive command. Returns False to stop."""
    if not line:
        return True
    if line in ("quit", "exit", "q"):
        return False
    if line == "help":
        out.print(INTERACTIVE_HELP)
        return True
    if line == "status":
        _print_workbench_status(workbench, out)
        return True
    if line == "reload":
        try:
            changed = workbench.services.configuration_service.reload()
        except (FileNotFoundError, *CONFIG_ERRORS) as e:
            out.print_error(str(e))
            return True
        out.print_info("Configuration changed" if changed else "Configuration unchanged")
        return True

    command_id = INTERACTIVE_COMMANDS.get(line)
    if command_id is None:
        out.print_warning(f"Unknown command '{line}'. Type 'help' for the list.")
        return True

    if workbench.commands is None:
        out.print_error("Sync commands are not available until the workbench has started")
        return True
    try:
        result = await workbench.commands.run_command(command_id)
    except CommandUnavailableError as e:
        out.print_warning(str(e))
    except Exception as e:
        out.print_error(str(e) or type(e).__name__)
    else:
        if isinstance(result, ContinuationResult):
            if result.success:
                out.print_success("Sync continued")
        else:
            out.print_success("Done")
    return True


def _print_workbench_status(workbench: SyncWorkbench, out: Console) -> None:
    services = workbench.services
    auto_sync = bool(services.configuration_service.get_value(AUTO_SYNC_SETTING))
    out.print_status(
        services.sync_service.status,
        auto_sync=auto_sync,
        badge=services.activity_service.get_badge(GLOBAL_ACTIVITY_ID),
        notifications=services.notification_service.active,
    )
    if workbench.commands is not None:
        out.print_commands({command_id: workbench.commands.is_available(command_id) for command_id in INTERACTIVE_COMMANDS.values()})


def main(argv: Optional[list[str]] = None) -> None:
    cli.main(args=argv, prog_name="syncctl")


if __name__ == "__main__":
    main()
