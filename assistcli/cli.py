"""Command-line interface entry point for AssistCLI."""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from assistcli import __version__
from assistcli.commands import (
    CommandContext,
    CommandService,
    CustomCommandLoader,
    DispatchOutcome,
    DispatchStatus,
    get_builtin_commands,
)
from assistcli.commands.types import (
    DialogAction,
    HistoryItemAction,
    MessageAction,
    NoAction,
    SubmitPromptAction,
)
from assistcli.core.runtime import ConfigManager
from assistcli.ui_textual.controllers import ApprovalModeController
from assistcli.ui_textual.style_tokens import APPROVAL_MODE_COLORS, ERROR, GREY, SUCCESS, WARNING

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool) -> None:
    """Route library logging through rich; verbose enables debug output."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=verbose)],
    )


def build_service(config_manager: ConfigManager) -> CommandService:
    config = config_manager.get_config()
    return CommandService(
        get_builtin_commands(),
        loader=CustomCommandLoader(
            working_dir=config_manager.working_dir,
            command_dir=config.command_dir,
        ),
    )


def render_outcome(console: Console, outcome: DispatchOutcome) -> int:
    """Print a dispatch outcome and return the process exit code.

    Names, descriptions and messages may come from user command files, so
    they are escaped before being printed as markup.
    """
    if outcome.status != DispatchStatus.OK:
        color = WARNING if outcome.status == DispatchStatus.NOT_FOUND else ERROR
        console.print(f"  ⎿  [{color}]{escape(outcome.message)}[/{color}]")
        return 1

    result = outcome.result
    if isinstance(result, DialogAction):
        console.print(f"  ⎿  Opens the [bold]{result.dialog.value}[/bold] dialog")
    elif isinstance(result, HistoryItemAction):
        console.print(f"  ⎿  [{GREY}]{result.item.type.value}[/{GREY}] {escape(result.item.text)}")
        for key, value in result.item.data.items():
            if key == "commands":
                for command in value:
                    alias = f" ({command['alt_name']})" if command["alt_name"] else ""
                    line = f"/{command['name']}{alias} - {command['description']}"
                    console.print(f"     {escape(line)}")
            else:
                console.print(f"     {key}: {escape(str(value))}")
    elif isinstance(result, MessageAction):
        color = ERROR if result.message_type == "error" else SUCCESS
        console.print(f"  ⎿  [{color}]{escape(result.content)}[/{color}]")
        return 1 if result.message_type == "error" else 0
    elif isinstance(result, SubmitPromptAction):
        console.print("  ⎿  Prompt:")
        console.print(result.content, markup=False)
    elif isinstance(result, NoAction):
        pass
    return 0


async def _refreshed_service(config_manager: ConfigManager) -> CommandService:
    service = build_service(config_manager)
    await service.refresh()
    return service


def _cmd_commands(console: Console, config_manager: ConfigManager) -> int:
    service = asyncio.run(_refreshed_service(config_manager))

    table = Table(title="Slash commands", show_lines=False)
    table.add_column("Command", style="cyan", no_wrap=True)
    table.add_column("Alias")
    table.add_column("Kind")
    table.add_column("Description")
    for command in service.snapshot:
        table.add_row(
            Text(f"/{command.name}"),
            Text(f"/{command.alt_name}") if command.alt_name else "",
            command.kind.value,
            Text(command.description),
        )
    console.print(table)

    for skipped in service.last_report.rejected:
        console.print(
            f"[{WARNING}]Ignored /{escape(skipped.name)} from {escape(str(skipped.source_path))}: "
            f"shadows a built-in command[/{WARNING}]"
        )
    return 0


def _cmd_run(console: Console, config_manager: ConfigManager, line: str) -> int:
    async def run() -> DispatchOutcome:
        service = await _refreshed_service(config_manager)
        context = CommandContext(config=config_manager, working_dir=config_manager.working_dir)
        return await service.dispatch(line, context)

    console.print(f"[cyan]⏺[/cyan] {escape(line.strip())}")
    return render_outcome(console, asyncio.run(run()))


def _cmd_mode(console: Console, config_manager: ConfigManager, action: str, save: bool) -> int:
    controller = ApprovalModeController(config_manager)
    if action == "cycle":
        controller.cycle()
    elif action == "toggle":
        controller.toggle_yolo()

    mode = controller.display_mode
    color = APPROVAL_MODE_COLORS.get(mode.value, GREY)
    console.print(f"Approval mode: [bold {color}]{mode.label}[/bold {color}] ({mode.value})")

    if save and action != "show":
        config_manager.persist_approval_mode()
        console.print(f"  ⎿  [{SUCCESS}]Saved to project settings[/{SUCCESS}]")
    return 0


def main() -> None:
    """Main entry point for AssistCLI."""
    parser = argparse.ArgumentParser(
        prog="assistcli",
        description="AssistCLI - slash commands and approval modes for a terminal assistant",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  assistcli commands              # List built-in and custom commands
  assistcli run "/help"           # Dispatch one command line
  assistcli mode cycle --save     # Cycle the approval mode and save it
        """,
    )
    parser.add_argument("--version", "-V", action="version", version=f"AssistCLI {__version__}")
    parser.add_argument(
        "--working-dir",
        "-d",
        metavar="PATH",
        help="Set working directory (defaults to current directory)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose output with detailed logging",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.add_parser("commands", help="List available slash commands")

    run_parser = subparsers.add_parser("run", help="Dispatch a slash command line")
    run_parser.add_argument("line", help='Command line, e.g. "/mode plan"')

    mode_parser = subparsers.add_parser("mode", help="Show or change the approval mode")
    mode_parser.add_argument("action", nargs="?", default="show", choices=["show", "cycle", "toggle"])
    mode_parser.add_argument("--save", action="store_true", help="Persist to project settings")

    args = parser.parse_args()
    console = Console()

    working_dir = Path(args.working_dir).expanduser().resolve() if args.working_dir else Path.cwd()
    if not working_dir.is_dir():
        console.print(f"[{ERROR}]Working directory does not exist: {escape(str(working_dir))}[/{ERROR}]")
        sys.exit(1)

    # Before loading settings, so warnings about them go through rich
    setup_logging(args.verbose)
    config_manager = ConfigManager(working_dir)
    config = config_manager.load_config()
    if config.verbose or config.debug_logging:
        logging.getLogger().setLevel(logging.DEBUG)

    if args.command == "run":
        sys.exit(_cmd_run(console, config_manager, args.line))
    if args.command == "mode":
        sys.exit(_cmd_mode(console, config_manager, args.action, args.save))
    if args.command == "commands":
        sys.exit(_cmd_commands(console, config_manager))

    parser.print_help()


if __name__ == "__main__":
    main()
