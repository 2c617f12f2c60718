"""
Shared test fixtures and configuration for devprofile tests.

This module provides common fixtures used across all test types:
- Temporary home directory (HOME redirected, nothing touches the real one)
- Sample profile documents and profile directories
- Fake package manager and git config store
"""

import copy
import json
from pathlib import Path
from typing import Any

import pytest

from devprofile.config_manager import DevprofileConfig, ProvisionPaths
from devprofile.modules.interaction_handler import GitIdentity, StaticIdentityProvider
from devprofile.modules.package_installer import PackageInstallError

SAMPLE_PROFILE: dict[str, Any] = {
    "name": "test",
    "description": "Test workstation",
    "homebrew": {
        "taps": ["hashicorp/tap"],
        "packages": ["git", "jq"],
        "casks": ["iterm2"],
    },
    "zsh": {
        "plugins": ["git", "docker"],
        "antidote_plugins": ["zsh-users/zsh-autosuggestions", "zsh-users/zsh-completions"],
        "config": {"HISTSIZE": 10000},
        "aliases": {"ll": "ls -lah"},
        "exports": {"GOPATH": "$HOME/go"},
        "oh_my_zsh_settings": {"zstyle ':omz:update' mode": "auto"},
        "init_commands": ['eval "$(starship init zsh)"'],
    },
    "git": {"config": {"init.defaultBranch": "main", "pull.rebase": "true"}},
    "editor": {"default": "nvim"},
    "onepassword": {"vault_name": "Personal"},
}


# ============================================================================
# PROFILE FIXTURES
# ============================================================================


@pytest.fixture
def profile_data():
    """Fresh deep copy of a valid profile document."""
    return copy.deepcopy(SAMPLE_PROFILE)


@pytest.fixture
def write_profile(tmp_path):
    """Write a profile document into its own directory.

    Returns a function (data, filename="config.json", extra_files=None) -> Path
    of the profile directory.
    """

    def _write(
        data: dict[str, Any],
        filename: str = "config.json",
        extra_files: dict[str, str] | None = None,
    ) -> Path:
        profile_dir = tmp_path / "profiles" / data.get("name", "custom")
        profile_dir.mkdir(parents=True, exist_ok=True)
        (profile_dir / filename).write_text(json.dumps(data, indent=2))
        for relative, content in (extra_files or {}).items():
            source = profile_dir / relative
            source.parent.mkdir(parents=True, exist_ok=True)
            source.write_text(content)
        return profile_dir

    return _write


# ============================================================================
# DIRECTORY FIXTURES
# ============================================================================


@pytest.fixture
def temp_home_dir(tmp_path, monkeypatch):
    """Temporary home directory for testing.

    Sets HOME to a temporary directory so Path.home() and ~ expansion never
    reach the real user home. Oh My Zsh is marked as installed so no test
    ever tries to bootstrap it.
    """
    home_dir = tmp_path / "home"
    home_dir.mkdir()
    (home_dir / ".oh-my-zsh").mkdir()
    monkeypatch.setenv("HOME", str(home_dir))
    return home_dir


@pytest.fixture
def paths(temp_home_dir):
    """Provisioning paths rooted at the temporary home directory."""
    return ProvisionPaths(home=temp_home_dir)


@pytest.fixture
def config():
    """Default configuration."""
    return DevprofileConfig()


# ============================================================================
# EXTERNAL COLLABORATOR FAKES
# ============================================================================


class FakePackageManager:
    """Records every ensure_* call; names in `failing` raise PackageInstallError.

    bootstrap()/cleanup() are counted separately so `calls` only lists entries.
    """

    def __init__(self, failing: set[str] | None = None, available: bool = True):
        self.failing = failing or set()
        self.available = available
        self.calls: list[tuple[str, str]] = []
        self.bootstraps = 0
        self.cleanups = 0

    def bootstrap(self) -> bool:
        self.bootstraps += 1
        return self.available

    def cleanup(self) -> bool:
        self.cleanups += 1
        return True

    def _ensure(self, kind: str, name: str) -> None:
        self.calls.append((kind, name))
        if name in self.failing:
            raise PackageInstallError(kind, name, "No available formula")

    def ensure_tap_added(self, name: str) -> None:
        self._ensure("tap", name)

    def ensure_package_installed(self, name: str) -> None:
        self._ensure("package", name)

    def ensure_cask_installed(self, name: str) -> None:
        self._ensure("cask", name)


class FakeGitStore:
    """In-memory global git configuration."""

    def __init__(self, values: dict[str, str] | None = None):
        self.values = dict(values or {})
        self.set_calls: list[tuple[str, str]] = []

    def get(self, key: str) -> str | None:
        return self.values.get(key)

    def set(self, key: str, value: str) -> None:
        self.set_calls.append((key, value))
        self.values[key] = value


@pytest.fixture
def package_manager():
    return FakePackageManager()


@pytest.fixture
def git_store():
    """Git store that already has an identity configured."""
    return FakeGitStore({"user.name": "Ada Lovelace", "user.email": "ada@example.com"})


@pytest.fixture
def identity_provider():
    return StaticIdentityProvider(GitIdentity(name="Grace Hopper", email="grace@example.com"))


@pytest.fixture
def make_package_manager():
    """Factory for fake package managers with failing entries."""

    def _make(failing: set[str] | None = None, available: bool = True) -> FakePackageManager:
        return FakePackageManager(failing, available)

    return _make


@pytest.fixture
def make_git_store():
    """Factory for fake git stores with preset values."""

    def _make(values: dict[str, str] | None = None) -> FakeGitStore:
        return FakeGitStore(values)

    return _make
