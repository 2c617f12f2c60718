"""Tests for the devprofile command line."""

from unittest.mock import patch

import pytest
from click.testing import CliRunner

from devprofile.cli import main


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def collaborators(temp_home_dir, package_manager, git_store, identity_provider):
    """Replace brew, git and the identity prompt with in-memory fakes."""
    with (
        patch("devprofile.cli.HomebrewClient", return_value=package_manager),
        patch("devprofile.cli.GitConfigStore", return_value=git_store),
        patch("devprofile.cli.CLIIdentityProvider", return_value=identity_provider),
    ):
        yield package_manager


class TestMain:
    def test_success(self, runner, collaborators, write_profile, profile_data, temp_home_dir):
        profile_dir = write_profile(profile_data)

        result = runner.invoke(main, [str(profile_dir)])

        assert result.exit_code == 0, result.output
        assert "Using profile: test - Test workstation" in result.output
        assert "Setup completed successfully!" in result.output
        assert "exec zsh" in result.output
        assert (temp_home_dir / ".zshrc").exists()
        assert ("cask", "iterm2") in collaborators.calls

    def test_skip_install(self, runner, collaborators, write_profile, profile_data, temp_home_dir):
        profile_dir = write_profile(profile_data)

        result = runner.invoke(main, [str(profile_dir), "--skip-install"])

        assert result.exit_code == 0, result.output
        assert collaborators.calls == []
        assert (temp_home_dir / ".zshrc").exists()

    def test_vault_name_argument(
        self, runner, collaborators, write_profile, profile_data, temp_home_dir
    ):
        profile_dir = write_profile(profile_data)

        result = runner.invoke(main, [str(profile_dir), "Work", "--skip-install"])

        assert result.exit_code == 0, result.output
        agent_config = temp_home_dir / ".config" / "1Password" / "ssh" / "agent.toml"
        assert 'vault = "Work"' in agent_config.read_text()

    def test_validation_errors_are_all_listed(
        self, runner, collaborators, write_profile, profile_data, temp_home_dir
    ):
        del profile_data["editor"]
        del profile_data["git"]
        profile_dir = write_profile(profile_data)

        result = runner.invoke(main, [str(profile_dir)])

        assert result.exit_code == 1
        assert "2 problem(s)" in result.output
        assert "  - Missing required field: editor" in result.output
        assert "  - Missing required field: git" in result.output
        assert collaborators.calls == []
        assert not (temp_home_dir / ".zshrc").exists()

    def test_unknown_profile(self, runner, collaborators):
        result = runner.invoke(main, ["does-not-exist"])

        assert result.exit_code == 1
        assert "Profile not found: does-not-exist" in result.output

    def test_missing_vault_name_is_fatal(
        self, runner, collaborators, write_profile, profile_data, temp_home_dir
    ):
        profile_data["onepassword"] = {}
        profile_dir = write_profile(profile_data)

        result = runner.invoke(main, [str(profile_dir)])

        assert result.exit_code == 1
        assert "No vault name found" in result.output
        assert not (temp_home_dir / ".zshrc").exists()

    def test_missing_profile_argument_shows_help(self, runner):
        result = runner.invoke(main, [])

        assert result.exit_code == 2
        assert "Missing argument" in result.output
        assert "Usage:" in result.output
        assert "--skip-install" in result.output

    def test_unknown_option_shows_help(self, runner):
        result = runner.invoke(main, ["personal", "--bogus"])

        assert result.exit_code == 2
        assert "No such option" in result.output

    def test_custom_config_file(
        self, runner, collaborators, write_profile, profile_data, temp_home_dir, tmp_path
    ):
        config_file = tmp_path / "devprofile.toml"
        config_file.write_text('zsh_theme = "agnoster"\n')
        profile_dir = write_profile(profile_data)

        result = runner.invoke(
            main, [str(profile_dir), "--skip-install", "--config", str(config_file)]
        )

        assert result.exit_code == 0, result.output
        assert 'ZSH_THEME="agnoster"' in (temp_home_dir / ".zshrc").read_text()

    def test_version(self, runner):
        result = runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert "devprofile" in result.output
