"""Configuration management module.

This module loads optional user preferences stored in TOML format at
~/.config/devprofile/config.toml and derives every conventional output path
from the home directory.

Supported keys:
- profiles_dir: Directory holding profiles selectable by bare name
- zsh_theme: Oh My Zsh theme written into the generated .zshrc
- brew_executable: Homebrew binary used by the shell environment setup
- brew_cleanup: Run `brew cleanup` after installing packages
- onepassword_agent_socket: Real socket path of the 1Password SSH agent
"""

import logging
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

import tomli

from devprofile.errors import DevprofileError

logger = logging.getLogger(__name__)

DEFAULT_AGENT_SOCKET = "~/Library/Group Containers/2BUA8C4S2C.com.1password/t/agent.sock"


class ConfigError(DevprofileError):
    """Raised when configuration operations fail."""

    pass


@dataclass
class DevprofileConfig:
    """devprofile configuration data."""

    profiles_dir: str | None = None
    zsh_theme: str = "robbyrussell"
    brew_executable: str = "/opt/homebrew/bin/brew"
    brew_cleanup: bool = True
    onepassword_agent_socket: str = DEFAULT_AGENT_SOCKET

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DevprofileConfig":
        """Create config from dictionary, rejecting values of the wrong type.

        Raises:
            ConfigError: If a known key holds a value of the wrong type
        """
        known = {f.name for f in fields(cls)}
        values: dict[str, Any] = {}
        for key, value in data.items():
            if key not in known:
                logger.warning(f"Ignoring unknown config key: {key}")
                continue
            expected = bool if key == "brew_cleanup" else str
            if not isinstance(value, expected):
                raise ConfigError(
                    f"Config key '{key}' must be a {expected.__name__}, got {type(value).__name__}"
                )
            values[key] = value
        return cls(**values)


@dataclass(frozen=True)
class ProvisionPaths:
    """Conventional locations of every artifact devprofile manages."""

    home: Path
    zshrc: Path = field(init=False)
    zsh_plugins: Path = field(init=False)
    oh_my_zsh_dir: Path = field(init=False)
    agent_config: Path = field(init=False)
    agent_socket_link: Path = field(init=False)
    starship_config: Path = field(init=False)

    def __post_init__(self) -> None:
        home = self.home
        object.__setattr__(self, "zshrc", home / ".zshrc")
        object.__setattr__(self, "zsh_plugins", home / ".zsh_plugins.txt")
        object.__setattr__(self, "oh_my_zsh_dir", home / ".oh-my-zsh")
        object.__setattr__(
            self, "agent_config", home / ".config" / "1Password" / "ssh" / "agent.toml"
        )
        object.__setattr__(self, "agent_socket_link", home / ".1password" / "agent.sock")
        object.__setattr__(self, "starship_config", home / ".config" / "starship.toml")

    def expand_home(self, value: str) -> Path:
        """Expand a leading ~ against this home directory."""
        if value == "~":
            return self.home
        if value.startswith("~/"):
            return self.home / value[2:]
        return Path(value)


class ConfigManager:
    """Manage devprofile configuration file."""

    @classmethod
    def get_config_path(cls, custom_path: str | None = None, home: Path | None = None) -> Path:
        """Get configuration file path.

        Args:
            custom_path: Custom config file path (optional)
            home: Home directory for the default location (default: Path.home())

        Returns:
            Path to config file
        """
        if custom_path:
            return Path(custom_path).expanduser()
        return (home or Path.home()) / ".config" / "devprofile" / "config.toml"

    @classmethod
    def load_config(
        cls, custom_path: str | None = None, home: Path | None = None
    ) -> DevprofileConfig:
        """Load configuration from file.

        A missing default config file yields defaults; a missing custom
        config file is an error.

        Args:
            custom_path: Custom config file path (optional)
            home: Home directory for the default location (default: Path.home())

        Returns:
            DevprofileConfig object

        Raises:
            ConfigError: If the file cannot be read or holds invalid values
        """
        config_path = cls.get_config_path(custom_path, home)

        if not config_path.exists():
            if custom_path:
                raise ConfigError(f"Config file not found: {config_path}")
            logger.debug(f"No config file at {config_path}, using defaults")
            return DevprofileConfig()

        try:
            with open(config_path, "rb") as f:
                data = tomli.load(f)
        except tomli.TOMLDecodeError as e:
            raise ConfigError(f"Invalid TOML in config file {config_path}: {e}") from e
        except OSError as e:
            raise ConfigError(f"Failed to read config file {config_path}: {e}") from e

        logger.debug(f"Loaded config from: {config_path}")
        return DevprofileConfig.from_dict(data)


__all__ = [
    "DEFAULT_AGENT_SOCKET",
    "ConfigError",
    "ConfigManager",
    "DevprofileConfig",
    "ProvisionPaths",
]
