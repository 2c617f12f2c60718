"""1Password SSH agent configuration.

Generates ~/.config/1Password/ssh/agent.toml so the agent serves keys from
the profile's vault, and links ~/.1password/agent.sock to the agent's real
socket (the shorter path exported as SSH_AUTH_SOCK by the zsh generator).

Vault name precedence: a vault name given on the command line wins over the
profile's onepassword.vault_name. A command-line vault name also enables
1Password configuration for profiles without an onepassword section.
"""

import logging
import os
from dataclasses import dataclass, replace
from pathlib import Path

import tomlkit

from devprofile.errors import DevprofileError, MissingVaultNameError
from devprofile.modules.atomic_write import write_atomic
from devprofile.profile import OnePasswordSpec, Profile

logger = logging.getLogger(__name__)


class AgentConfigError(DevprofileError):
    """Raised when the agent configuration or socket link cannot be written."""

    pass


@dataclass
class AgentConfigResult:
    """Result from 1Password agent configuration."""

    configured: bool
    vault_name: str | None = None
    config_path: Path | None = None
    socket_link: Path | None = None
    link_updated: bool = False


def apply_vault_override(profile: Profile, vault_override: str | None) -> Profile:
    """Return the profile with the effective 1Password vault name.

    Args:
        profile: Validated profile
        vault_override: Vault name from the command line (optional)

    Returns:
        Profile whose onepassword section carries the vault to use

    Raises:
        MissingVaultNameError: If 1Password is configured without any vault name
    """
    vault_override = vault_override.strip() if vault_override else None
    if vault_override:
        if profile.onepassword and profile.onepassword.vault_name not in (None, vault_override):
            logger.info(
                f"Vault name '{vault_override}' from the command line overrides "
                f"'{profile.onepassword.vault_name}' from the profile"
            )
        return replace(profile, onepassword=OnePasswordSpec(vault_name=vault_override))

    if profile.onepassword is not None and not profile.onepassword.vault_name:
        raise MissingVaultNameError(
            "No vault name found in profile. Specify 'vault_name' in the onepassword "
            'section (e.g. "onepassword": {"vault_name": "Personal"}) or pass it '
            "as the second argument."
        )
    return profile


def render_agent_config(vault_name: str) -> str:
    """Render agent.toml binding the SSH keys to a vault.

    Example output:
        [[ssh-keys]]
        vault = "Personal"
    """
    doc = tomlkit.document()
    ssh_keys = tomlkit.aot()
    entry = tomlkit.table()
    entry.add("vault", vault_name)
    ssh_keys.append(entry)
    doc.append("ssh-keys", ssh_keys)
    return tomlkit.dumps(doc)


class OnePasswordAgentConfigurator:
    """Write the agent configuration and maintain the socket symlink."""

    def __init__(self, config_path: Path, socket_link: Path, socket_target: Path):
        """Initialize configurator.

        Args:
            config_path: Location of agent.toml
            socket_link: Conventional short socket path (symlink)
            socket_target: The platform agent's real socket
        """
        self.config_path = config_path
        self.socket_link = socket_link
        self.socket_target = socket_target

    def ensure_socket_link(self) -> bool:
        """Point socket_link at socket_target, replacing a stale link.

        Returns:
            True if the link was created or changed, False if already correct

        Raises:
            AgentConfigError: If the link path is occupied by a directory
                or cannot be created
        """
        link = self.socket_link
        target = str(self.socket_target)

        if link.is_symlink() and os.readlink(link) == target:
            logger.debug(f"Socket link already points at {target}")
            return False
        if link.is_dir() and not link.is_symlink():
            raise AgentConfigError(f"Cannot create socket link, {link} is a directory")

        try:
            link.parent.mkdir(parents=True, exist_ok=True)
            temp_link = link.with_name(f".{link.name}.tmp")
            if temp_link.is_symlink() or temp_link.exists():
                temp_link.unlink()
            temp_link.symlink_to(target)
            temp_link.replace(link)
        except OSError as e:
            raise AgentConfigError(f"Failed to link {link} to {target}: {e}") from e

        logger.info(f"SSH agent socket symlinked to {link}")
        return True

    def configure(self, profile: Profile) -> AgentConfigResult:
        """Configure the agent for the profile's vault.

        Profiles without an onepassword section are left alone: no document
        and no symlink is touched.

        Args:
            profile: Profile with the effective vault name applied

        Returns:
            AgentConfigResult describing what was written
        """
        if profile.onepassword is None:
            logger.warning("No 1Password configuration found in profile, skipping...")
            return AgentConfigResult(configured=False)

        vault_name = profile.onepassword.vault_name
        if not vault_name:
            raise MissingVaultNameError("No vault name available for 1Password configuration")

        logger.info("Configuring 1Password SSH agent...")
        try:
            write_atomic(self.config_path, render_agent_config(vault_name))
        except OSError as e:
            raise AgentConfigError(f"Failed to write {self.config_path}: {e}") from e

        link_updated = self.ensure_socket_link()
        logger.info(f"1Password SSH agent configured for vault: {vault_name}")

        return AgentConfigResult(
            configured=True,
            vault_name=vault_name,
            config_path=self.config_path,
            socket_link=self.socket_link,
            link_updated=link_updated,
        )


__all__ = [
    "AgentConfigError",
    "AgentConfigResult",
    "OnePasswordAgentConfigurator",
    "apply_vault_override",
    "render_agent_config",
]
