"""Git identity and global configuration.

Makes sure a global user.name/user.email exist (asking the operator when
either is missing) and then applies every git.config entry of the profile
with `git config --global`. Keys and values are passed through untouched;
git itself decides whether they are meaningful.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol

from devprofile.errors import DevprofileError
from devprofile.modules.interaction_handler import IdentityProvider
from devprofile.modules.subprocess_helper import run_command
from devprofile.profile import render_scalar

logger = logging.getLogger(__name__)


class GitConfigError(DevprofileError):
    """Raised when the global git configuration cannot be read or written."""

    pass


class ConfigStore(Protocol):
    """Key/value access to the global version-control configuration."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...


class GitConfigStore:
    """ConfigStore backed by `git config --global`."""

    def __init__(self, git_executable: str = "git"):
        self.git_executable = git_executable

    def get(self, key: str) -> str | None:
        """Read a global value.

        Returns:
            The value, or None when the key is unset

        Raises:
            GitConfigError: If git cannot be run
        """
        result = run_command([self.git_executable, "config", "--global", "--get", key])
        if result.returncode == 127:
            raise GitConfigError("git is not installed or not on PATH")
        if result.returncode == 1:
            # Exit code 1 means the key is not set
            return None
        if not result.success:
            raise GitConfigError(f"Failed to read git config {key}: {result.error_detail()}")
        return result.stdout.rstrip("\n")

    def set(self, key: str, value: str) -> None:
        """Write a global value.

        Raises:
            GitConfigError: If git rejects the key or value
        """
        result = run_command([self.git_executable, "config", "--global", key, value])
        if not result.success:
            raise GitConfigError(f"Failed to set git config {key}: {result.error_detail()}")


@dataclass
class GitConfigResult:
    """Result from applying git configuration."""

    identity_prompted: bool = False
    applied: list[tuple[str, str]] = field(default_factory=list)


class GitConfigurator:
    """Apply a profile's git configuration to the global store.

    Example:
        >>> configurator = GitConfigurator(GitConfigStore(), CLIIdentityProvider())
        >>> result = configurator.apply({"pull.rebase": "true"})
    """

    def __init__(self, store: ConfigStore, identity_provider: IdentityProvider):
        self.store = store
        self.identity_provider = identity_provider

    def ensure_identity(self) -> bool:
        """Request and store an identity unless name and email are both set.

        Returns:
            True if the operator was asked for an identity
        """
        if self.store.get("user.name") and self.store.get("user.email"):
            logger.debug("Git identity already configured")
            return False

        identity = self.identity_provider.request_identity()
        self.store.set("user.name", identity.name)
        self.store.set("user.email", identity.email)
        logger.info("Git user name and email set")
        return True

    def apply(self, config: Mapping[str, Any]) -> GitConfigResult:
        """Ensure an identity exists, then set every entry in declared order.

        Args:
            config: git.config section of the profile

        Returns:
            GitConfigResult listing applied entries

        Raises:
            GitConfigError: If git cannot be run or rejects an entry
        """
        logger.info("Configuring Git...")
        result = GitConfigResult(identity_prompted=self.ensure_identity())

        for key, value in config.items():
            rendered = render_scalar(value)
            self.store.set(key, rendered)
            logger.info(f"Set git config: {key} = {rendered}")
            result.applied.append((key, rendered))

        return result


__all__ = [
    "ConfigStore",
    "GitConfigError",
    "GitConfigResult",
    "GitConfigStore",
    "GitConfigurator",
]
