"""Tests for Homebrew installation."""

from unittest.mock import patch

import pytest

from devprofile.modules.package_installer import (
    HomebrewClient,
    InstallerDriver,
    OhMyZshInstaller,
    PackageInstallError,
    PackageManager,
)
from devprofile.modules.subprocess_helper import CommandResult
from devprofile.profile import HomebrewSpec

OK = CommandResult(returncode=0, stdout="", stderr="")


class TestInstallerDriver:
    def test_installs_taps_then_packages_then_casks(self, package_manager):
        spec = HomebrewSpec(taps=("hashicorp/tap",), packages=("git", "jq"), casks=("iterm2",))

        report = InstallerDriver(package_manager).install(spec)

        assert package_manager.calls == [
            ("tap", "hashicorp/tap"),
            ("package", "git"),
            ("package", "jq"),
            ("cask", "iterm2"),
        ]
        assert report.success
        assert report.installed == package_manager.calls

    def test_failure_is_recorded_and_run_continues(self, make_package_manager):
        manager = make_package_manager(failing={"missing-formula"})
        spec = HomebrewSpec(packages=("git", "missing-formula", "jq"), casks=("iterm2",))

        report = InstallerDriver(manager).install(spec)

        assert [name for _, name in manager.calls] == ["git", "missing-formula", "jq", "iterm2"]
        assert not report.success
        assert len(report.failures) == 1
        failure = report.failures[0]
        assert (failure.kind, failure.name, failure.reason) == (
            "package",
            "missing-formula",
            "No available formula",
        )
        assert ("package", "jq") in report.installed

    def test_empty_entries_are_ignored(self, package_manager):
        InstallerDriver(package_manager).install(HomebrewSpec(packages=("", "git")))
        assert package_manager.calls == [("package", "git")]

    def test_fake_satisfies_protocol(self, package_manager):
        assert isinstance(package_manager, PackageManager)


class TestHomebrewClient:
    @pytest.fixture
    def client(self, tmp_path):
        brew = tmp_path / "brew"
        brew.write_text("#!/bin/sh\n")
        return HomebrewClient(brew_executable=str(brew))

    @patch("devprofile.modules.package_installer.run_command")
    def test_commands(self, mock_run, client):
        mock_run.return_value = OK

        client.ensure_tap_added("hashicorp/tap")
        client.ensure_package_installed("jq")
        client.ensure_cask_installed("iterm2")

        brew = client.brew_executable
        assert [c.args[0] for c in mock_run.call_args_list] == [
            [brew, "tap", "hashicorp/tap"],
            [brew, "install", "jq"],
            [brew, "install", "--cask", "iterm2"],
        ]

    @patch("devprofile.modules.package_installer.run_command")
    def test_failure_raises_install_error(self, mock_run, client):
        mock_run.return_value = CommandResult(
            returncode=1,
            stdout="",
            stderr="Warning: x\nError: No available formula with the name \"nope\".",
        )

        with pytest.raises(PackageInstallError) as exc_info:
            client.ensure_package_installed("nope")

        assert exc_info.value.kind == "package"
        assert exc_info.value.name == "nope"
        assert exc_info.value.detail.startswith("Error: No available formula")

    @patch("devprofile.modules.package_installer.shutil.which", return_value=None)
    def test_missing_brew_raises_install_error(self, _mock_which, tmp_path):
        client = HomebrewClient(brew_executable=str(tmp_path / "no-brew"))

        assert not client.is_available()
        with pytest.raises(PackageInstallError, match="brew executable not found"):
            client.ensure_cask_installed("iterm2")

    @patch("devprofile.modules.package_installer.run_interactive")
    @patch("devprofile.modules.package_installer.run_command")
    def test_bootstrap_skips_when_installed(self, mock_run, mock_interactive, client):
        assert client.bootstrap() is True
        mock_run.assert_not_called()
        mock_interactive.assert_not_called()

    @patch("devprofile.modules.package_installer.run_command")
    def test_cleanup_failure_is_not_fatal(self, mock_run, client):
        mock_run.return_value = CommandResult(returncode=1, stdout="", stderr="locked")
        assert client.cleanup() is False


class TestOhMyZshInstaller:
    @patch("devprofile.modules.package_installer.run_command")
    def test_existing_install_is_kept(self, mock_run, tmp_path):
        install_dir = tmp_path / ".oh-my-zsh"
        install_dir.mkdir()

        assert OhMyZshInstaller(install_dir).install() is True
        mock_run.assert_not_called()

    @patch("devprofile.modules.package_installer.shutil.which", return_value=None)
    @patch("devprofile.modules.package_installer.run_command")
    def test_missing_zsh_fails(self, mock_run, _mock_which, tmp_path):
        assert OhMyZshInstaller(tmp_path / ".oh-my-zsh").install() is False
        mock_run.assert_not_called()
