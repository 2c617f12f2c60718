"""Profile reconciliation pipeline.

Runs the provisioning stages for a loaded profile in a fixed order:

    1. Homebrew bootstrap and installs (skippable)
    2. Zsh configuration (.zshrc + antidote plugin manifest)
    3. 1Password SSH agent configuration
    4. Profile file placement
    5. Starship configuration
    6. Git identity and global configuration

Every stage consumes only the validated profile (file placement also uses
the profile directory). Generated documents are fully rewritten each run,
so repeated runs converge to the same state.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path

from devprofile.config_manager import DevprofileConfig, ProvisionPaths
from devprofile.modules.file_placement import FilePlacer, PlacementResult
from devprofile.modules.git_config import ConfigStore, GitConfigResult, GitConfigurator
from devprofile.modules.interaction_handler import IdentityProvider
from devprofile.modules.onepassword_config import (
    AgentConfigResult,
    OnePasswordAgentConfigurator,
    apply_vault_override,
)
from devprofile.modules.package_installer import (
    InstallerDriver,
    InstallReport,
    OhMyZshInstaller,
    PackageManager,
)
from devprofile.modules.progress import ProgressDisplay
from devprofile.modules.shell_config import ShellConfigResult, ZshConfigGenerator
from devprofile.modules.starship_config import StarshipConfigResult, StarshipConfigurator
from devprofile.profile_loader import LoadedProfile

logger = logging.getLogger(__name__)


@dataclass
class ReconcileResult:
    """Outcome of every stage of a run."""

    profile_name: str
    install: InstallReport | None = None
    shell: ShellConfigResult | None = None
    agent: AgentConfigResult | None = None
    files: PlacementResult | None = None
    starship: StarshipConfigResult | None = None
    git: GitConfigResult | None = None
    warnings: list[str] = field(default_factory=list)


class EnvironmentReconciler:
    """Bring the machine in line with a loaded profile.

    Example:
        >>> loaded = ProfileLoader().load("personal")
        >>> reconciler = EnvironmentReconciler(
        ...     loaded, ProvisionPaths(Path.home()), DevprofileConfig(),
        ...     package_manager=HomebrewClient(), git_store=GitConfigStore(),
        ...     identity_provider=CLIIdentityProvider(),
        ... )
        >>> result = reconciler.run(skip_install=False)
    """

    def __init__(
        self,
        loaded: LoadedProfile,
        paths: ProvisionPaths,
        config: DevprofileConfig,
        package_manager: PackageManager,
        git_store: ConfigStore,
        identity_provider: IdentityProvider,
        progress: ProgressDisplay | None = None,
        vault_override: str | None = None,
    ):
        """Initialize reconciler.

        Raises:
            MissingVaultNameError: If 1Password is configured without a vault name
        """
        self.profile = apply_vault_override(loaded.profile, vault_override)
        self.base_dir = loaded.base_dir
        self.paths = paths
        self.config = config
        self.package_manager = package_manager
        self.git_store = git_store
        self.identity_provider = identity_provider
        self.progress = progress or ProgressDisplay()

    def install_packages(self) -> InstallReport:
        """Bootstrap Oh My Zsh and Homebrew, then install every entry."""
        OhMyZshInstaller(self.paths.oh_my_zsh_dir).install()

        if not self.package_manager.bootstrap():
            logger.error("Homebrew is unavailable, skipping package installation")
            return InstallReport(skipped=True)

        report = InstallerDriver(self.package_manager).install(self.profile.homebrew)

        if self.config.brew_cleanup:
            logger.info("Cleaning up Homebrew")
            self.package_manager.cleanup()
        return report

    def generate_shell_config(self) -> ShellConfigResult:
        generator = ZshConfigGenerator(
            self.profile,
            theme=self.config.zsh_theme,
            brew_executable=self.config.brew_executable,
        )
        return generator.write(self.paths.zshrc, self.paths.zsh_plugins)

    def configure_agent(self) -> AgentConfigResult:
        configurator = OnePasswordAgentConfigurator(
            config_path=self.paths.agent_config,
            socket_link=self.paths.agent_socket_link,
            socket_target=self.paths.expand_home(self.config.onepassword_agent_socket),
        )
        return configurator.configure(self.profile)

    def place_files(self) -> PlacementResult:
        return FilePlacer(self.base_dir, self.paths).place(self.profile.files)

    def configure_starship(self) -> StarshipConfigResult:
        return StarshipConfigurator(self.paths.starship_config).configure(self.profile.starship)

    def configure_git(self) -> GitConfigResult:
        configurator = GitConfigurator(self.git_store, self.identity_provider)
        return configurator.apply(self.profile.git.config)

    def run(self, skip_install: bool = False) -> ReconcileResult:
        """Run every stage in order.

        Args:
            skip_install: Skip Homebrew/Oh My Zsh entirely (no package
                manager calls at all)

        Returns:
            ReconcileResult with each stage's outcome

        Raises:
            DevprofileError: If a stage fails fatally
        """
        result = ReconcileResult(profile_name=self.profile.name)
        logger.info(f"Setting up environment: {self.profile.description}")

        if skip_install:
            logger.warning(
                "Skipping installation of Oh-My-Zsh and Homebrew + packages/casks "
                "- only updating dotfiles"
            )
            self.progress.skip("Homebrew packages", "--skip-install")
        else:
            self.progress.start_operation("Installing Homebrew packages")
            result.install = self.install_packages()
            for failure in result.install.failures:
                result.warnings.append(f"{failure.kind} {failure.name}: {failure.reason}")
            self.progress.complete(
                success=result.install.success,
                message=(
                    f"Installed {len(result.install.installed)} Homebrew entries, "
                    f"{len(result.install.failures)} failed"
                ),
            )

        self.progress.start_operation("Generating zsh configuration")
        result.shell = self.generate_shell_config()
        self.progress.complete()

        if self.profile.onepassword is None:
            self.progress.skip("1Password SSH agent", "no onepassword section")
        else:
            self.progress.start_operation("Configuring 1Password SSH agent")
            result.agent = self.configure_agent()
            self.progress.complete()

        self.progress.start_operation("Copying profile files")
        result.files = self.place_files()
        for skipped in result.files.skipped:
            result.warnings.append(f"file {skipped} not copied")
        self.progress.complete()

        self.progress.start_operation("Configuring starship")
        result.starship = self.configure_starship()
        self.progress.complete()

        self.progress.start_operation("Configuring git")
        result.git = self.configure_git()
        self.progress.complete()

        return result


def default_paths(home: Path | None = None) -> ProvisionPaths:
    """Provisioning paths rooted at the user's home directory."""
    return ProvisionPaths(home=home or Path.home())


__all__ = ["EnvironmentReconciler", "ReconcileResult", "default_paths"]
