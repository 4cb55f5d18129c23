"""
Rich-formatted logging for the rephraser CLI.

Three verbosity levels:
- Normal: warnings and errors only
- Verbose (--verbose): INFO messages such as which provider/model is called and latency
- Debug (--debug): low-level DEBUG messages, unformatted

Usage:
    from rephraser.utils.logging import setup_logging

    setup_logging(verbose=args.verbose, debug=args.debug)
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

_console: Console | None = None

NOISY_LOGGERS = ["httpx", "httpcore", "asyncio"]


def get_console() -> Console:
    """Get the shared stderr console used for log output."""
    global _console
    if _console is None:
        _console = Console(stderr=True)
    return _console


def setup_logging(verbose: bool = False, debug: bool = False) -> None:
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    if debug:
        # Debug mode: simple format, no rich
        logging.basicConfig(
            level=level,
            format="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
            datefmt="%H:%M:%S",
            force=True,
        )
    else:
        logging.basicConfig(
            level=level,
            format="%(message)s",
            datefmt="[%X]",
            handlers=[RichHandler(
                console=get_console(),
                show_path=False,
                rich_tracebacks=True,
                tracebacks_show_locals=verbose,
            )],
            force=True,
        )

    for logger_name in NOISY_LOGGERS:
        logging.getLogger(logger_name).setLevel(logging.WARNING if not debug else logging.INFO)
