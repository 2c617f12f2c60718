"""CLI entry point for devprofile.

Usage:
    devprofile PROFILE [VAULT_NAME] [--skip-install] [--config PATH] [--verbose]
"""

import logging
import sys
from pathlib import Path

import click

from devprofile import __version__
from devprofile.click_command import DevprofileCommand
from devprofile.config_manager import ConfigManager
from devprofile.errors import DevprofileError, ProfileValidationError
from devprofile.modules.git_config import GitConfigStore
from devprofile.modules.interaction_handler import CLIIdentityProvider
from devprofile.modules.package_installer import HomebrewClient
from devprofile.profile_loader import ProfileLoader
from devprofile.reconciler import EnvironmentReconciler, ReconcileResult, default_paths

logger = logging.getLogger(__name__)


def _print_summary(result: ReconcileResult) -> None:
    if result.warnings:
        click.secho(f"Completed with {len(result.warnings)} warning(s):", fg="yellow")
        for warning in result.warnings:
            click.secho(f"  - {warning}", fg="yellow")

    click.secho("Setup completed successfully!", fg="green")
    click.echo("Please reload your shell with: exec zsh")


@click.command(
    cls=DevprofileCommand,
    context_settings={"help_option_names": ["--help", "-h"]},
)
@click.argument("profile", type=str)
@click.argument("vault_name", type=str, required=False)
@click.option(
    "--skip-install",
    is_flag=True,
    help="Skip Oh My Zsh, Homebrew and package installation; only regenerate configuration",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    help="Config file path (default: ~/.config/devprofile/config.toml)",
)
@click.option("--verbose", "-v", is_flag=True, help="Show detailed execution information")
@click.version_option(version=__version__, prog_name="devprofile")
def main(
    profile: str,
    vault_name: str | None,
    skip_install: bool,
    config_path: str | None,
    verbose: bool,
) -> None:
    """Provision this machine from a profile.

    PROFILE is a built-in profile name (personal, work), a directory
    containing config.json/config.toml/config.yaml, or a path to a profile
    document. VAULT_NAME overrides the profile's 1Password vault.

    \b
    Examples:
        devprofile personal
        devprofile work --skip-install
        devprofile ~/dotfiles/laptop Private
        devprofile /path/to/custom-profile.json
    """
    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO, format="%(message)s")

    home = Path.home()
    try:
        config = ConfigManager.load_config(config_path, home=home)
        profiles_dir = Path(config.profiles_dir).expanduser() if config.profiles_dir else None

        loaded = ProfileLoader(profiles_dir).load(profile)
        click.echo(f"Using profile: {loaded.profile.name} - {loaded.profile.description}")

        reconciler = EnvironmentReconciler(
            loaded,
            default_paths(home),
            config,
            package_manager=HomebrewClient(config.brew_executable),
            git_store=GitConfigStore(),
            identity_provider=CLIIdentityProvider(),
            vault_override=vault_name,
        )
        result = reconciler.run(skip_install=skip_install)

    except ProfileValidationError as e:
        click.echo(f"Error: {e}", err=True)
        for violation in e.violations:
            click.echo(f"  - {violation}", err=True)
        sys.exit(1)
    except DevprofileError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    except OSError as e:
        logger.debug("Filesystem error", exc_info=True)
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    _print_summary(result)


if __name__ == "__main__":
    main()
