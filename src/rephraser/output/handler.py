"""Delivery of completion text to the clipboard, a notification or a dialog.

All methods shell out to macOS tools (``pbcopy``, ``osascript``).
"""

import logging
import subprocess
import sys

from ..errors import OutputError
from ..utils.config import OutputMethod

logger = logging.getLogger(__name__)

MAX_NOTIFICATION_LENGTH = 200
APP_TITLE = "Rephraser"


def escape_applescript_string(text: str) -> str:
    """Escape backslashes and double quotes for an AppleScript string literal."""
    return text.replace("\\", "\\\\").replace('"', '\\"')


def truncate_notification_text(text: str, max_length: int = MAX_NOTIFICATION_LENGTH) -> str:
    if len(text) <= max_length:
        return text
    return text[:max(max_length - 3, 0)] + "..."


def check_macos_platform() -> None:
    if sys.platform != "darwin":
        raise OutputError("Output methods are only supported on macOS")


class OutputHandler:
    """Sends text to the configured output method."""

    def __init__(self, method: OutputMethod):
        self.method = method

    def handle(self, text: str) -> None:
        logger.debug(f"Delivering {len(text)} characters via {self.method.value}")
        if self.method == OutputMethod.CLIPBOARD:
            self.copy_to_clipboard(text)
        elif self.method == OutputMethod.NOTIFICATION:
            self.show_notification(text)
        elif self.method == OutputMethod.DIALOG:
            self.show_dialog(text)
        else:
            raise OutputError(f"Unsupported output method: {self.method}")

    def copy_to_clipboard(self, text: str) -> None:
        check_macos_platform()
        self._run(["pbcopy"], input_text=text)

    def show_notification(self, text: str) -> None:
        """Show a notification; long text is truncated and newlines flattened."""
        check_macos_platform()
        single_line = truncate_notification_text(text).replace("\n", " ").replace("\r", " ")
        script = f'display notification "{escape_applescript_string(single_line)}" with title "{APP_TITLE}"'
        self._run(["osascript", "-e", script])

    def show_dialog(self, text: str) -> None:
        """Show a blocking dialog with an OK button."""
        check_macos_platform()
        script = (
            f'display dialog "{escape_applescript_string(text)}" with title "{APP_TITLE}" '
            'buttons {"OK"} default button "OK"'
        )
        self._run(["osascript", "-e", script])

    @staticmethod
    def _run(command: list[str], input_text: str | None = None) -> None:
        try:
            result = subprocess.run(
                command,
                input=input_text,
                capture_output=True,
                text=True,
                check=False,
            )
        except OSError as e:
            raise OutputError(f"Failed to execute {command[0]}: {e}") from e

        if result.returncode != 0:
            raise OutputError(f"{command[0]} failed with exit code {result.returncode}: {result.stderr.strip()}")
