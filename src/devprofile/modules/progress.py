"""
Progress Display Module

Show the stages of a provisioning run to the user.

Each stage prints a start line and a completion line with elapsed time,
colored through a rich console.
"""

import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Optional

from rich.console import Console

logger = logging.getLogger(__name__)


class ProgressStage(Enum):
    """Progress stage indicators."""

    STARTED = "started"
    COMPLETED = "completed"
    SKIPPED = "skipped"
    FAILED = "failed"
    WARNING = "warning"


@dataclass
class ProgressUpdate:
    """Progress update information."""

    stage: ProgressStage
    message: str
    timestamp: float
    operation: str


class ProgressDisplay:
    """
    Stage-based progress display for a provisioning run.

    Example:
        >>> progress = ProgressDisplay()
        >>> progress.start_operation("Generating zsh configuration")
        >>> progress.complete(success=True)
    """

    SYMBOLS: ClassVar[dict[ProgressStage, tuple[str, str]]] = {
        ProgressStage.STARTED: ("►", "blue"),
        ProgressStage.COMPLETED: ("✓", "green"),
        ProgressStage.SKIPPED: ("-", "dim"),
        ProgressStage.FAILED: ("✗", "red"),
        ProgressStage.WARNING: ("⚠", "yellow"),
    }

    def __init__(self, console: Console | None = None):
        """
        Initialize progress display.

        Args:
            console: Rich console to print to (default: stdout console)
        """
        self.console = console or Console(highlight=False)
        self.current_operation: Optional[str] = None
        self.start_time: Optional[float] = None
        self.updates: list[ProgressUpdate] = []

    def start_operation(self, name: str) -> None:
        """Begin showing progress for an operation."""
        self.current_operation = name
        self.start_time = time.time()
        self.update(f"Starting: {name}", ProgressStage.STARTED)

    def update(self, message: str, stage: ProgressStage = ProgressStage.STARTED) -> None:
        """
        Record and print a progress line.

        Args:
            message: Progress message
            stage: Current stage
        """
        update = ProgressUpdate(
            stage=stage,
            message=message,
            timestamp=time.time(),
            operation=self.current_operation or "unknown",
        )
        self.updates.append(update)

        symbol, style = self.SYMBOLS[stage]
        self.console.print(f"{symbol} {message}", style=style, markup=False)

    def complete(self, success: bool = True, message: Optional[str] = None) -> None:
        """
        Mark the current operation complete.

        Args:
            success: Whether operation succeeded
            message: Optional completion message
        """
        if success:
            stage = ProgressStage.COMPLETED
            default_message = f"{self.current_operation} completed"
        else:
            stage = ProgressStage.FAILED
            default_message = f"{self.current_operation} failed"

        final_message = message or default_message
        if self.start_time:
            final_message += f" ({self._format_duration(time.time() - self.start_time)})"

        self.update(final_message, stage)
        self.current_operation = None
        self.start_time = None

    def skip(self, name: str, reason: str) -> None:
        """Report an operation that did not run."""
        self.update(f"Skipped: {name} ({reason})", ProgressStage.SKIPPED)

    def warn(self, message: str) -> None:
        self.update(message, ProgressStage.WARNING)

    def _format_duration(self, seconds: float) -> str:
        """
        Format duration in human-readable format.

        Returns:
            str: Formatted duration (e.g., "2m 30s")
        """
        if seconds < 60:
            return f"{seconds:.1f}s"
        minutes = int(seconds // 60)
        secs = int(seconds % 60)
        return f"{minutes}m {secs}s"

    def get_updates(self) -> list[ProgressUpdate]:
        """Get all progress updates recorded so far."""
        return self.updates.copy()


__all__ = ["ProgressDisplay", "ProgressStage", "ProgressUpdate"]
