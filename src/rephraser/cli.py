import argparse
import asyncio
import logging
import sys

from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from rephraser import __version__
from rephraser.actions import ActionResolver
from rephraser.clients import create_llm_client
from rephraser.constants import PROVIDER_MOCK
from rephraser.core import Rephraser
from rephraser.errors import ActionNotFoundError, RephraserError
from rephraser.output import OutputHandler
from rephraser.utils.config import SETTABLE_KEYS, ConfigManager, Settings, dump_config, load_settings, resolve_api_key
from rephraser.utils.logging import setup_logging

console = Console()
logger = logging.getLogger(__name__)


def parse_arguments(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="rephraser",
        description="Text transformation tool with LLM integration",
    )
    parser.add_argument("--config", help="Path to the config file (default: ~/.config/rephraser/config.yaml)")
    parser.add_argument("--verbose", action="store_true", help="Show provider, model and timing information")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="command", required=True)

    rephrase_parser = subparsers.add_parser("rephrase", help="Transform text using an action")
    rephrase_parser.add_argument("action", metavar="ACTION", help='Action name (e.g. "polite", "organize", "summarize")')
    rephrase_parser.add_argument("text", metavar="TEXT", help="Text to transform")

    subparsers.add_parser("list-actions", help="List available actions")

    config_parser = subparsers.add_parser("config", help="Configuration management")
    config_subparsers = config_parser.add_subparsers(dest="config_command", required=True)
    config_subparsers.add_parser("init", help="Initialize the config file with defaults")
    config_subparsers.add_parser("show", help="Show the current configuration")
    set_parser = config_subparsers.add_parser("set", help="Set a configuration value")
    set_parser.add_argument("key", metavar="KEY", help=f"One of: {', '.join(SETTABLE_KEYS)}")
    set_parser.add_argument("value", metavar="VALUE", help="New value")
    config_subparsers.add_parser("path", help="Show the config file path")

    return parser.parse_args(argv)


def rephrase(action: str, text: str, manager: ConfigManager, settings: Settings) -> str:
    """Run an action with the configured provider and deliver the result."""
    config = manager.load()
    resolver = ActionResolver.from_config(config)
    # Report an unknown action before complaining about credentials
    if resolver.find_action(action) is None:
        raise ActionNotFoundError(action)

    api_key = None if config.llm.provider == PROVIDER_MOCK else resolve_api_key(config.llm)
    client = create_llm_client(config.llm, api_key=api_key, settings=settings)
    rephraser = Rephraser(resolver, client, OutputHandler(config.output.method))
    return asyncio.run(rephraser.rephrase(action, text))


def list_actions(manager: ConfigManager) -> None:
    config = manager.load()
    resolver = ActionResolver.from_config(config)
    actions = resolver.list_actions()
    if not actions:
        console.print(f"[yellow]No actions defined in {escape(str(manager.config_path))}.[/yellow]")
        return

    table = Table(title="Available actions", show_header=True, header_style="bold magenta")
    table.add_column("Name", style="bold bright_blue")
    table.add_column("Display name")
    for action in actions:
        table.add_row(escape(action.name), escape(action.display_name))
    console.print(table)


def config_init(manager: ConfigManager) -> None:
    manager.init()
    console.print(f"[green]Configuration initialized at: {escape(str(manager.config_path))}[/green]")
    console.print()
    console.print("Edit the file to customize your settings.")
    console.print("Don't forget to set your API key environment variable!")


def config_show(manager: ConfigManager) -> None:
    config = manager.load()
    console.print("[bold magenta]Current configuration[/bold magenta]")
    console.print(f"[dim]Config file: {escape(str(manager.config_path))}[/dim]\n")
    console.print(escape(dump_config(config)))


def config_set(key: str, value: str, manager: ConfigManager) -> None:
    manager.set_value(key, value)
    console.print(f"[green]Configuration '{escape(key)}' set to '{escape(value)}' in {escape(str(manager.config_path))}.[/green]")


def main(argv: list[str] | None = None) -> None:
    args = parse_arguments(argv)

    try:
        settings = load_settings(args.config)
    except ValidationError as e:
        console.print(f"[bold red]Error initializing configuration:[/bold red] {escape(str(e))}")
        sys.exit(1)

    setup_logging(verbose=args.verbose or settings.VERBOSE, debug=args.debug or settings.DEBUG)
    manager = ConfigManager(args.config or settings.CONFIG_PATH)

    try:
        if args.command == "rephrase":
            rephrase(args.action, args.text, manager, settings)
        elif args.command == "list-actions":
            list_actions(manager)
        elif args.command == "config":
            if args.config_command == "init":
                config_init(manager)
            elif args.config_command == "show":
                config_show(manager)
            elif args.config_command == "set":
                config_set(args.key, args.value, manager)
            elif args.config_command == "path":
                print(manager.config_path)
    except RephraserError as e:
        logger.debug("Command failed", exc_info=True)
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        sys.exit(1)
    except KeyboardInterrupt:
        console.print("\n[bold yellow]Cancelled.[/bold yellow]")
        sys.exit(1)
