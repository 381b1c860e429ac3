"""Document rendering and diagnostics with strict stdout/stderr discipline.

Follows `clig.dev <https://clig.dev/>`_ conventions:

* **stdout** -- the rendered document only, so it can be piped into other
  tools or redirected to a file.
* **stderr** -- all diagnostics (status, warnings, errors, debug logging).
* **TTY detection** -- syntax-highlighted output when stdout is an
  interactive terminal, raw text when piped.
* **Colour control** -- respects ``NO_COLOR``, ``TERM=dumb``, and the
  ``--no-color`` CLI flag.

The module exposes three layers:

1. :func:`dump_document` -- pure rendering of a document to JSON or YAML.
2. :class:`OutputManager` -- a stateful object holding Rich consoles and
   quiet/verbose flags. Created once in :func:`~specweave.app.main_callback`
   and installed via :func:`set_output`.
3. Module-level convenience functions (:func:`success`, :func:`error`...)
   that delegate to the global ``OutputManager``.
"""

from __future__ import annotations

import json
import logging
import os
import sys
from enum import Enum
from typing import Any, Optional

import yaml
from rich.console import Console
from rich.logging import RichHandler
from rich.syntax import Syntax


class OutputFormat(str, Enum):
    """Text formats a document can be rendered in."""

    JSON = "json"
    YAML = "yaml"


def dump_document(document: dict[str, Any], fmt: OutputFormat = OutputFormat.JSON) -> str:
    """Render *document* as JSON (2-space indent) or YAML.

    Key order is preserved in both formats, so the lexicographic operation
    keys produced by the partitioner survive serialisation. YAML output goes
    through a safe dumper that never emits anchors or aliases.
    """
    if fmt == OutputFormat.YAML:
        return yaml.dump(
            document,
            Dumper=_NoAliasDumper,
            sort_keys=False,
            allow_unicode=True,
            default_flow_style=False,
        )
    return json.dumps(document, indent=2, ensure_ascii=False)


class _NoAliasDumper(yaml.SafeDumper):
    """Safe dumper that writes repeated objects out in full instead of as aliases."""

    def ignore_aliases(self, data: Any) -> bool:
        return True


class OutputManager:
    """Central manager for CLI output with stdout/stderr discipline.

    Args:
        no_color: Disable all colour and Rich markup.
        quiet: Suppress non-essential informational messages on stderr.
        verbose: Enable debug-level messages on stderr.
    """

    def __init__(
        self,
        no_color: bool = False,
        quiet: bool = False,
        verbose: bool = False,
    ) -> None:
        self._no_color = no_color or _should_disable_color()
        self._quiet = quiet
        self._verbose = verbose

        self._stdout = Console(file=sys.stdout, no_color=self._no_color)
        self._stderr = Console(file=sys.stderr, no_color=self._no_color, stderr=True)

    # ------------------------------------------------------------------ #
    # Data output (stdout or file)
    # ------------------------------------------------------------------ #

    def write_document(
        self,
        document: dict[str, Any],
        fmt: OutputFormat = OutputFormat.JSON,
        output_file: Optional[str] = None,
    ) -> None:
        """Render *document* and write it to *output_file* or stdout.

        On an interactive terminal with colour enabled the text is
        syntax-highlighted; otherwise it is written verbatim.
        """
        text = dump_document(document, fmt)
        if not text.endswith("\n"):
            text += "\n"

        if output_file:
            with open(output_file, "w", encoding="utf-8") as f:
                f.write(text)
            return

        if _is_tty() and not self._no_color:
            self._stdout.print(Syntax(text, fmt.value, theme="monokai", word_wrap=True))
        else:
            sys.stdout.write(text)
            sys.stdout.flush()

    # ------------------------------------------------------------------ #
    # Diagnostics (stderr)
    # ------------------------------------------------------------------ #

    def info(self, message: str) -> None:
        """Print an informational message to stderr. Suppressed by ``--quiet``."""
        if not self._quiet:
            if self._no_color:
                print(message, file=sys.stderr, flush=True)
            else:
                self._stderr.print(message)

    def success(self, message: str) -> None:
        """Print a green success message to stderr. Suppressed by ``--quiet``."""
        if not self._quiet:
            if self._no_color:
                print(message, file=sys.stderr, flush=True)
            else:
                self._stderr.print(f"[green]{message}[/green]")

    def warning(self, message: str) -> None:
        """Print a yellow warning to stderr. NOT suppressed by ``--quiet``."""
        if self._no_color:
            print(f"Warning: {message}", file=sys.stderr, flush=True)
        else:
            self._stderr.print(f"[yellow]Warning:[/yellow] {message}")

    def error(self, message: str) -> None:
        """Print a bold-red error to stderr. Never suppressed."""
        if self._no_color:
            print(f"Error: {message}", file=sys.stderr, flush=True)
        else:
            self._stderr.print(f"[bold red]Error:[/bold red] {message}")

    def debug(self, message: str) -> None:
        """Print a debug message to stderr. Only shown when ``--verbose`` is active."""
        if self._verbose:
            if self._no_color:
                print(f"[debug] {message}", file=sys.stderr, flush=True)
            else:
                self._stderr.print(f"[dim][debug] {message}[/dim]")

    # ------------------------------------------------------------------ #
    # Logging
    # ------------------------------------------------------------------ #

    def configure_logging(self) -> None:
        """Route the ``specweave`` logger to stderr.

        DEBUG records from the assembly engine are shown with ``--verbose``;
        otherwise only warnings and above.
        """
        logger = logging.getLogger("specweave")
        for handler in list(logger.handlers):
            if getattr(handler, "_specweave_handler", False):
                logger.removeHandler(handler)
        handler = RichHandler(console=self._stderr, show_path=False, show_time=False)
        handler._specweave_handler = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
        logger.setLevel(logging.DEBUG if self._verbose else logging.WARNING)


# ------------------------------------------------------------------ #
# Module-level helpers
# ------------------------------------------------------------------ #


def _is_tty() -> bool:
    """Check if stdout is a TTY."""
    return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()


def _should_disable_color() -> bool:
    """Check if color should be disabled per clig.dev.

    Returns True when NO_COLOR env var is set (any value) or TERM=dumb.
    """
    if os.environ.get("NO_COLOR") is not None:
        return True
    if os.environ.get("TERM") == "dumb":
        return True
    return False


# ------------------------------------------------------------------ #
# Global output instance (set during app startup)
# ------------------------------------------------------------------ #

_output: Optional[OutputManager] = None


def get_output() -> OutputManager:
    """Return the global :class:`OutputManager`, creating a default one lazily."""
    global _output
    if _output is None:
        _output = OutputManager()
    return _output


def set_output(output: OutputManager) -> None:
    """Install *output* as the global :class:`OutputManager` instance."""
    global _output
    _output = output


def reset_output() -> None:
    """Reset the global :class:`OutputManager` to ``None``.

    Primarily useful in test suites to ensure a clean state between tests.
    """
    global _output
    _output = None


# ------------------------------------------------------------------ #
# Convenience functions that use the global instance
# ------------------------------------------------------------------ #


def write_document(
    document: dict[str, Any],
    fmt: OutputFormat = OutputFormat.JSON,
    output_file: Optional[str] = None,
) -> None:
    """Render and write a document via the global OutputManager."""
    get_output().write_document(document, fmt, output_file)


def success(message: str) -> None:
    """Print success message to stderr via the global OutputManager."""
    get_output().success(message)


def warning(message: str) -> None:
    """Print warning to stderr via the global OutputManager."""
    get_output().warning(message)


def error(message: str) -> None:
    """Print error to stderr via the global OutputManager."""
    get_output().error(message)


def debug(message: str) -> None:
    """Print debug message to stderr via the global OutputManager."""
    get_output().debug(message)
