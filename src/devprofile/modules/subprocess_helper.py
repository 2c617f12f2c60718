"""Subprocess execution for external tools (brew, git, curl, sh).

Philosophy:
- Single responsibility: run one external command and report its outcome
- Standard library only
- Never raise for a failing command; callers decide what a failure means

Public API (the "studs"):
    CommandResult: Result dataclass
    run_command: Run a command capturing its output
    run_interactive: Run a command attached to the user's terminal
"""

import logging
import subprocess
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass
class CommandResult:
    """Result of an external command."""

    returncode: int
    stdout: str
    stderr: str
    timed_out: bool = False

    @property
    def success(self) -> bool:
        return self.returncode == 0 and not self.timed_out

    def error_detail(self) -> str:
        """Best single-line description of why the command failed."""
        if self.timed_out:
            return "timed out"
        text = (self.stderr or self.stdout).strip()
        if not text:
            return f"exit code {self.returncode}"
        return text.splitlines()[-1]


def run_command(
    cmd: list[str],
    cwd: Path | None = None,
    timeout: int | None = None,
    env: Mapping[str, str] | None = None,
    input_text: str | None = None,
) -> CommandResult:
    """Run a command and capture its output.

    Args:
        cmd: Command and arguments (never passed through a shell)
        cwd: Working directory
        timeout: Timeout in seconds (None = wait until it finishes)
        env: Full environment for the child process
        input_text: Text fed to the command's stdin

    Returns:
        CommandResult; a missing executable maps to exit code 127

    Example:
        >>> result = run_command(["git", "--version"])
        >>> assert result.success
    """
    logger.debug(f"Running: {' '.join(cmd)}")
    try:
        completed = subprocess.run(
            cmd,
            cwd=cwd,
            env=dict(env) if env is not None else None,
            input=input_text,
            capture_output=True,
            text=True,
            timeout=timeout,
            check=False,
        )
    except FileNotFoundError:
        return CommandResult(
            returncode=127,
            stdout="",
            stderr=f"Command not found: {cmd[0] if cmd else 'unknown'}",
        )
    except subprocess.TimeoutExpired as e:
        return CommandResult(
            returncode=-1,
            stdout=e.stdout if isinstance(e.stdout, str) else "",
            stderr=e.stderr if isinstance(e.stderr, str) else "",
            timed_out=True,
        )
    except OSError as e:
        return CommandResult(returncode=1, stdout="", stderr=f"Error executing command: {e!s}")

    return CommandResult(
        returncode=completed.returncode,
        stdout=completed.stdout or "",
        stderr=completed.stderr or "",
    )


def run_interactive(cmd: list[str], env: Mapping[str, str] | None = None) -> int:
    """Run a command with the user's terminal attached (installers may prompt).

    Returns:
        Exit code; 127 when the executable does not exist
    """
    logger.debug(f"Running interactively: {' '.join(cmd)}")
    try:
        completed = subprocess.run(
            cmd, env=dict(env) if env is not None else None, check=False
        )
    except FileNotFoundError:
        logger.error(f"Command not found: {cmd[0] if cmd else 'unknown'}")
        return 127
    except OSError as e:
        logger.error(f"Error executing command: {e!s}")
        return 1
    return completed.returncode


__all__ = ["CommandResult", "run_command", "run_interactive"]
