"""Homebrew package installation.

Walks a profile's taps, packages and casks and asks the package manager to
ensure each one is present. Entries are independent best-effort installs:
a failing entry is logged and skipped, the rest still install.

Also bootstraps the tools the generated shell configuration relies on
(Oh My Zsh and Homebrew itself) when they are missing.

Public API:
    PackageManager: Protocol for the "ensure installed" interface
    HomebrewClient: PackageManager backed by the brew CLI
    OhMyZshInstaller: Unattended Oh My Zsh installation
    InstallerDriver: Install every entry of a HomebrewSpec
    InstallReport: Outcome of a driver run
"""

import logging
import os
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import ClassVar, Protocol, runtime_checkable

from devprofile.modules.subprocess_helper import run_command, run_interactive
from devprofile.profile import HomebrewSpec

logger = logging.getLogger(__name__)


class PackageInstallError(Exception):
    """Raised when a single tap/package/cask cannot be installed."""

    def __init__(self, kind: str, name: str, detail: str):
        self.kind = kind
        self.name = name
        self.detail = detail
        super().__init__(f"Failed to install {kind} '{name}': {detail}")


@runtime_checkable
class PackageManager(Protocol):
    """Interface to an external package manager.

    Each ensure_* call blocks until the entry is present, is idempotent for
    entries that are already installed and raises PackageInstallError on
    failure. bootstrap() makes the manager itself available and cleanup()
    runs after all entries; both report success as a bool.
    """

    def bootstrap(self) -> bool: ...

    def ensure_tap_added(self, name: str) -> None: ...

    def ensure_package_installed(self, name: str) -> None: ...

    def ensure_cask_installed(self, name: str) -> None: ...

    def cleanup(self) -> bool: ...


@dataclass
class InstallFailure:
    """A single entry that could not be installed."""

    kind: str  # "tap", "package", "cask"
    name: str
    reason: str


@dataclass
class InstallReport:
    """Result of installing a profile's Homebrew entries."""

    installed: list[tuple[str, str]] = field(default_factory=list)
    failures: list[InstallFailure] = field(default_factory=list)
    skipped: bool = False

    @property
    def success(self) -> bool:
        return not self.failures


class HomebrewClient:
    """PackageManager implementation that shells out to `brew`.

    Example:
        >>> brew = HomebrewClient()
        >>> if brew.is_available():
        ...     brew.ensure_package_installed("jq")
    """

    INSTALL_SCRIPT_URL = "https://raw.githubusercontent.com/Homebrew/install/HEAD/install.sh"

    def __init__(self, brew_executable: str = "/opt/homebrew/bin/brew"):
        """Initialize client.

        Args:
            brew_executable: Preferred brew binary; `brew` on PATH is used
                when it does not exist
        """
        self.brew_executable = brew_executable

    def _brew(self) -> str | None:
        if Path(self.brew_executable).is_file():
            return self.brew_executable
        return shutil.which("brew")

    def is_available(self) -> bool:
        """Check whether a brew executable can be found."""
        return self._brew() is not None

    def _run(self, kind: str, name: str, args: list[str]) -> None:
        brew = self._brew()
        if brew is None:
            raise PackageInstallError(kind, name, "brew executable not found")

        result = run_command([brew, *args])
        if not result.success:
            raise PackageInstallError(kind, name, result.error_detail())

    def ensure_tap_added(self, name: str) -> None:
        self._run("tap", name, ["tap", name])

    def ensure_package_installed(self, name: str) -> None:
        self._run("package", name, ["install", name])

    def ensure_cask_installed(self, name: str) -> None:
        self._run("cask", name, ["install", "--cask", name])

    def cleanup(self) -> bool:
        """Remove outdated versions from the cellar.

        Returns:
            True if cleanup succeeded (failure is only worth a warning)
        """
        brew = self._brew()
        if brew is None:
            return False
        result = run_command([brew, "cleanup"])
        if not result.success:
            logger.warning(f"brew cleanup failed: {result.error_detail()}")
            return False
        logger.info("Cleaned up Homebrew")
        return True

    def bootstrap(self) -> bool:
        """Install Homebrew with its official script if it is missing.

        Returns:
            True if brew is available afterwards
        """
        if self.is_available():
            logger.info("Homebrew is already installed")
            return True

        logger.info("Homebrew is not installed. Installing Homebrew")
        download = run_command(["curl", "-fsSL", self.INSTALL_SCRIPT_URL], timeout=300)
        if not download.success:
            logger.error(f"Failed to download Homebrew installer: {download.error_detail()}")
            return False

        returncode = run_interactive(["/bin/bash", "-c", download.stdout])
        if returncode != 0:
            logger.error(f"Homebrew installer exited with code {returncode}")
            return False
        return self.is_available()


class OhMyZshInstaller:
    """Install Oh My Zsh unattended, keeping any existing .zshrc."""

    INSTALL_SCRIPT_URL = "https://raw.githubusercontent.com/ohmyzsh/ohmyzsh/master/tools/install.sh"

    def __init__(self, install_dir: Path):
        self.install_dir = install_dir

    def is_installed(self) -> bool:
        return self.install_dir.is_dir()

    def install(self) -> bool:
        """Install Oh My Zsh if it is not already present.

        Returns:
            True if Oh My Zsh is installed afterwards
        """
        if self.is_installed():
            logger.info("oh-my-zsh is already installed")
            return True

        if shutil.which("zsh") is None:
            logger.error("zsh is not installed. Please install zsh before running devprofile")
            return False

        logger.info("Installing oh-my-zsh...")
        download = run_command(["curl", "-fsSL", self.INSTALL_SCRIPT_URL], timeout=300)
        if not download.success:
            logger.error(f"Failed to download oh-my-zsh installer: {download.error_detail()}")
            return False

        env = {**os.environ, "ZSH": str(self.install_dir), "RUNZSH": "no", "CHSH": "no"}
        returncode = run_interactive(
            ["sh", "-c", download.stdout, "sh", "--unattended", "--keep-zshrc"], env=env
        )
        if returncode != 0:
            logger.error(f"oh-my-zsh installer exited with code {returncode}")
            return False
        return self.is_installed()


class InstallerDriver:
    """Install taps, then packages, then casks.

    Taps come first because packages and casks may live in them.
    """

    STEPS: ClassVar[tuple[tuple[str, str, str], ...]] = (
        ("tap", "taps", "ensure_tap_added"),
        ("package", "packages", "ensure_package_installed"),
        ("cask", "casks", "ensure_cask_installed"),
    )

    def __init__(self, package_manager: PackageManager):
        self.package_manager = package_manager

    def install(self, homebrew: HomebrewSpec) -> InstallReport:
        """Install every entry, continuing past individual failures.

        Args:
            homebrew: Entries to install

        Returns:
            InstallReport listing installed entries and failures
        """
        report = InstallReport()

        for kind, attribute, method_name in self.STEPS:
            entries = getattr(homebrew, attribute)
            if not entries:
                continue

            logger.info(f"Installing Homebrew {attribute}...")
            ensure = getattr(self.package_manager, method_name)
            for name in entries:
                if not name:
                    continue
                logger.info(f"Installing {kind}: {name}")
                try:
                    ensure(name)
                except PackageInstallError as e:
                    logger.error(str(e))
                    report.failures.append(InstallFailure(kind=kind, name=name, reason=e.detail))
                    continue
                report.installed.append((kind, name))

        if report.failures:
            logger.warning(
                f"{len(report.failures)} Homebrew entr{'y' if len(report.failures) == 1 else 'ies'} "
                "failed to install; continuing with configuration"
            )
        return report


__all__ = [
    "HomebrewClient",
    "InstallFailure",
    "InstallReport",
    "InstallerDriver",
    "OhMyZshInstaller",
    "PackageInstallError",
    "PackageManager",
]
