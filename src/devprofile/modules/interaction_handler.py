"""Operator input abstraction for git identity prompts.

Asking the operator for a git name and email is the only interactive step
of a run. It sits behind a protocol so the CLI can prompt with click while
tests (or unattended runs) supply a fixed identity.

Example:
    >>> handler = CLIIdentityProvider()
    >>> identity = handler.request_identity()

    Testing example:
    >>> provider = StaticIdentityProvider(GitIdentity("Ada", "ada@example.com"))
    >>> provider.request_identity().email
    'ada@example.com'
"""

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

import click


@dataclass(frozen=True)
class GitIdentity:
    """Global git author identity."""

    name: str
    email: str


@runtime_checkable
class IdentityProvider(Protocol):
    """Protocol for obtaining a git identity when none is configured."""

    def request_identity(self) -> GitIdentity:
        """Return the identity to store globally.

        Raises:
            click.Abort: If the operator cancels (CLI implementation)
        """
        ...


class CLIIdentityProvider:
    """Click-based prompt for the git identity."""

    def request_identity(self) -> GitIdentity:
        click.secho("Git user name and email not set", fg="yellow")
        name = click.prompt("Enter your git user name", type=str).strip()
        email = click.prompt("Enter your git email", type=str).strip()
        return GitIdentity(name=name, email=email)


class StaticIdentityProvider:
    """Provider returning a preset identity and counting requests."""

    def __init__(self, identity: GitIdentity):
        self.identity = identity
        self.requests = 0

    def request_identity(self) -> GitIdentity:
        self.requests += 1
        return self.identity


__all__ = [
    "CLIIdentityProvider",
    "GitIdentity",
    "IdentityProvider",
    "StaticIdentityProvider",
]
