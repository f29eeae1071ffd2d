"""Standardized error handling for CLI commands."""

import functools
import os
import sys
from enum import Enum
from typing import Any, Callable, Optional

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from ..core.exceptions import (
    ConfigurationError,
    EvtailError,
    FetchError,
    RenderError,
    SourceConnectionError,
)
from ..io.logger import get_logger

logger = get_logger("cli.errors")


class ErrorType(Enum):
    """Categories of errors for appropriate handling."""

    CONFIG = "Configuration Error"
    SOURCE = "Event Source Error"
    FETCH = "Fetch Error"
    RENDER = "Render Error"
    RUNTIME = "Runtime Error"


class CLIError(Exception):
    """Base exception for CLI-specific errors."""

    def __init__(
        self,
        message: str,
        error_type: ErrorType = ErrorType.RUNTIME,
        suggestion: Optional[str] = None,
        exit_code: int = 1,
    ):
        super().__init__(message)
        self.error_type = error_type
        self.suggestion = suggestion
        self.exit_code = exit_code


class ConfigError(CLIError):
    """Configuration-related errors."""

    def __init__(self, message: str, suggestion: Optional[str] = None):
        super().__init__(message, ErrorType.CONFIG, suggestion, exit_code=2)


class RenderFailedError(CLIError):
    def __init__(self, message: str, suggestion: Optional[str] = None):
        super().__init__(message, ErrorType.RENDER, suggestion, exit_code=3)


class SourceUnavailableError(CLIError):
    """Connection or authentication failures against the Event Source."""

    def __init__(self, message: str, suggestion: Optional[str] = None):
        super().__init__(message, ErrorType.SOURCE, suggestion, exit_code=5)


class FetchFailedError(CLIError):
    """A page read failed mid-stream."""

    def __init__(self, message: str, suggestion: Optional[str] = None):
        super().__init__(message, ErrorType.FETCH, suggestion, exit_code=6)


def translate_error(error: EvtailError) -> CLIError:
    """Map a core error onto the CLI error carrying its exit code."""
    if isinstance(error, ConfigurationError):
        return ConfigError(str(error))
    if isinstance(error, SourceConnectionError):
        return SourceUnavailableError(
            str(error), suggestion="Check the --source location and credentials"
        )
    if isinstance(error, FetchError):
        return FetchFailedError(
            str(error), suggestion="Use --retries to retry transient failures"
        )
    if isinstance(error, RenderError):
        return RenderFailedError(str(error))
    return CLIError(str(error))


class CLIErrorHandler:
    """Centralized error handling for CLI commands."""

    def __init__(self, console: Optional[Console] = None, debug: bool = False):
        self.console = console or Console(stderr=True)
        self.debug = debug

    def handle_error(self, error: BaseException) -> None:
        """Handle an error with appropriate formatting and exit code."""
        if isinstance(error, KeyboardInterrupt):
            self._handle_interrupt()
        elif isinstance(error, BrokenPipeError):
            self._handle_broken_pipe()
        elif isinstance(error, CLIError):
            self._handle_cli_error(error)
        elif isinstance(error, EvtailError):
            self._handle_cli_error(translate_error(error))
        else:
            self._handle_unexpected_error(error)

    def _handle_interrupt(self) -> None:
        """Operator cancellation is a normal way to stop tailing."""
        self.console.print("\n[yellow]✗ Stopped by user[/yellow]")
        sys.exit(0)

    def _handle_broken_pipe(self) -> None:
        """The reader went away (e.g. `| head`); stop without a traceback."""
        try:
            # Keep the interpreter from failing again when it flushes stdout
            stdout_fd = sys.stdout.fileno()
            devnull = os.open(os.devnull, os.O_WRONLY)
            os.dup2(devnull, stdout_fd)
            os.close(devnull)
        except (OSError, ValueError) as e:
            logger.debug(f"Could not redirect stdout after broken pipe: {e}")
        sys.exit(0)

    def _handle_cli_error(self, error: CLIError) -> None:
        """Handle known CLI errors with formatting."""
        error_text = Text()
        error_text.append(f"✗ {error.error_type.value}: ", style="bold red")
        error_text.append(str(error))

        if error.suggestion:
            error_text.append("\n\n", style="")
            error_text.append("Suggestion: ", style="bold yellow")
            error_text.append(error.suggestion, style="yellow")

        panel = Panel(
            error_text,
            title="[bold red]Error[/bold red]",
            border_style="red",
            expand=False,
        )
        self.console.print(panel)

        # Show traceback in debug mode
        if self.debug:
            self.console.print("\n[dim]Debug traceback:[/dim]")
            self.console.print_exception(show_locals=True)

        sys.exit(error.exit_code)

    def _handle_unexpected_error(self, error: BaseException) -> None:
        """Handle unexpected errors with full traceback."""
        error_text = Text()
        error_text.append("✗ Unexpected error: ", style="bold red")
        error_text.append(str(error))

        panel = Panel(
            error_text,
            title="[bold red]Unexpected Error[/bold red]",
            border_style="red",
            expand=False,
        )
        self.console.print(panel)

        self.console.print("\n[dim]Full traceback:[/dim]")
        self.console.print_exception(show_locals=self.debug)

        sys.exit(1)

    def wrap_command(self, func: Callable) -> Callable:
        """Decorator to wrap CLI commands with error handling.

        Usage:
            @error_handler.wrap_command
            def my_command():
                ...
        """

        @functools.wraps(func)
        def wrapper(*args, **kwargs) -> Any:
            try:
                return func(*args, **kwargs)
            except (Exception, KeyboardInterrupt) as e:
                self.handle_error(e)

        return wrapper


# Global instance for convenience
default_handler = CLIErrorHandler()


def handle_cli_error(func: Callable) -> Callable:
    """Decorator for standardized CLI error handling."""
    return default_handler.wrap_command(func)
