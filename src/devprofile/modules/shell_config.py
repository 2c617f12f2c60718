"""Zsh configuration generator.

Renders the complete ~/.zshrc and the antidote plugin manifest from a
profile. Both documents are regenerated wholesale on every run and replaced
atomically; nothing is ever patched in place, so running twice from the same
profile produces byte-identical files.

Generated .zshrc layout (fixed order):
    Oh My Zsh preamble (ZSH, ZSH_THEME)
    plugins=(...)
    source $ZSH/oh-my-zsh.sh
    ### START Profile-based configurations ###
    export EDITOR, Homebrew shellenv
    exports (+ SSH_AUTH_SOCK when 1Password is configured)
    config variables, aliases, Oh My Zsh settings, init commands
    ### END Profile-based configurations ###

Optional sections are emitted only when they have content.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

from devprofile.modules.atomic_write import write_atomic
from devprofile.profile import Profile, render_scalar

logger = logging.getLogger(__name__)

START_MARKER = "### START Profile-based configurations ###"
END_MARKER = "### END Profile-based configurations ###"
SSH_AUTH_SOCK_EXPORT = "export SSH_AUTH_SOCK=~/.1password/agent.sock"


@dataclass
class ShellConfigResult:
    """Paths of the documents written by the generator."""

    zshrc_path: Path
    plugins_path: Path


class ZshConfigGenerator:
    """Generate .zshrc and the antidote plugin manifest from a profile.

    Example:
        >>> generator = ZshConfigGenerator(profile)
        >>> text = generator.render_zshrc()
        >>> generator.write(Path.home() / ".zshrc", Path.home() / ".zsh_plugins.txt")
    """

    def __init__(
        self,
        profile: Profile,
        theme: str = "robbyrussell",
        brew_executable: str = "/opt/homebrew/bin/brew",
    ):
        self.profile = profile
        self.theme = theme
        self.brew_executable = brew_executable

    def _preamble(self) -> list[str]:
        plugins = " ".join(self.profile.zsh.plugins)
        return [
            "# Path to your oh-my-zsh installation.",
            'export ZSH="$HOME/.oh-my-zsh"',
            "",
            "# Set name of the theme to load",
            f'ZSH_THEME="{self.theme}"',
            "",
            f"plugins=({plugins})",
            "",
            "source $ZSH/oh-my-zsh.sh",
            "",
            START_MARKER,
        ]

    def export_lines(self) -> list[str]:
        """Render environment exports.

        The SSH agent socket export is appended after the profile's own
        exports whenever a 1Password section is present.
        """
        lines = [
            f'export {key}="{render_scalar(value)}"'
            for key, value in self.profile.zsh.exports.items()
        ]
        if self.profile.onepassword is not None:
            lines.append(SSH_AUTH_SOCK_EXPORT)
        return lines

    def _sections(self) -> list[tuple[str, list[str]]]:
        zsh = self.profile.zsh
        return [
            ("Environment exports", self.export_lines()),
            (
                "Zsh configuration variables",
                [f"{key}={render_scalar(value)}" for key, value in zsh.config.items()],
            ),
            (
                "Aliases",
                [f'alias {key}="{render_scalar(value)}"' for key, value in zsh.aliases.items()],
            ),
            (
                "Oh My Zsh settings",
                [f"{key} {render_scalar(value)}" for key, value in zsh.oh_my_zsh_settings.items()],
            ),
            ("Initialization commands", list(zsh.init_commands)),
        ]

    def render_zshrc(self) -> str:
        """Render the complete .zshrc document.

        Returns:
            Document text (pure function of the profile and settings)
        """
        lines = self._preamble()
        lines.append(f'export EDITOR="{self.profile.editor.default}"')
        lines.extend(
            [
                "",
                "# Homebrew environment setup",
                f'eval "$({self.brew_executable} shellenv)"',
            ]
        )

        for title, body in self._sections():
            if not body:
                continue
            lines.extend(["", f"# {title}", *body])

        lines.extend(["", END_MARKER])
        return "\n".join(lines) + "\n"

    def render_plugin_manifest(self) -> str:
        """Render the antidote plugin manifest (one plugin per line)."""
        return "".join(f"{plugin}\n" for plugin in self.profile.zsh.antidote_plugins)

    def write(self, zshrc_path: Path, plugins_path: Path) -> ShellConfigResult:
        """Regenerate both documents, replacing any previous versions.

        Both documents are rendered before either is written.

        Args:
            zshrc_path: Destination of the generated .zshrc
            plugins_path: Destination of the antidote plugin manifest

        Returns:
            ShellConfigResult with the written paths
        """
        logger.info("Generating declarative Zsh configuration...")
        manifest = self.render_plugin_manifest()
        zshrc = self.render_zshrc()

        write_atomic(plugins_path, manifest)
        logger.info(
            f"Wrote {len(self.profile.zsh.antidote_plugins)} antidote plugin(s) to {plugins_path}"
        )
        write_atomic(zshrc_path, zshrc)
        logger.info(f"Generated complete zsh configuration at {zshrc_path}")

        return ShellConfigResult(zshrc_path=zshrc_path, plugins_path=plugins_path)


__all__ = [
    "END_MARKER",
    "SSH_AUTH_SOCK_EXPORT",
    "START_MARKER",
    "ShellConfigResult",
    "ZshConfigGenerator",
]
