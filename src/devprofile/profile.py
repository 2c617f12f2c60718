"""Profile data model.

A Profile is built fresh from one validated document on every run and is
never written back. Generators consume it read-only; everything they
produce lives on disk or in external configuration stores.

Profile document shape:
    name, description        (required strings)
    homebrew.taps/packages/casks
    zsh.plugins/antidote_plugins (+ optional config, aliases, exports,
                                  oh_my_zsh_settings, init_commands)
    git.config               (dotted key -> value)
    editor.default
    onepassword.vault_name   (optional section)
    files                    (optional: relative source -> destination)
    starship                 (optional: format, add_newline, modules)
"""

from dataclasses import dataclass, field
from typing import Any


def render_scalar(value: Any) -> str:
    """Render a document scalar the way it should appear in generated text.

    Booleans use the lowercase spelling shared by JSON, TOML and shell
    conventions; everything else goes through str().
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return ""
    return str(value)


@dataclass(frozen=True)
class HomebrewSpec:
    """Homebrew entries in installation order."""

    taps: tuple[str, ...] = ()
    packages: tuple[str, ...] = ()
    casks: tuple[str, ...] = ()


@dataclass(frozen=True)
class ZshSpec:
    """Zsh / Oh My Zsh settings rendered into the generated .zshrc."""

    plugins: tuple[str, ...] = ()
    antidote_plugins: tuple[str, ...] = ()
    config: dict[str, Any] = field(default_factory=dict)
    aliases: dict[str, Any] = field(default_factory=dict)
    exports: dict[str, Any] = field(default_factory=dict)
    oh_my_zsh_settings: dict[str, Any] = field(default_factory=dict)
    init_commands: tuple[str, ...] = ()


@dataclass(frozen=True)
class GitSpec:
    """Global git configuration entries (dotted key -> value)."""

    config: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class EditorSpec:
    """Default editor invocation, exported as $EDITOR."""

    default: str


@dataclass(frozen=True)
class OnePasswordSpec:
    """1Password SSH agent settings.

    vault_name may be None when the document leaves it to the command line.
    """

    vault_name: str | None = None


@dataclass(frozen=True)
class StarshipSpec:
    """Starship prompt customisations layered over starship's defaults."""

    format: str | None = None
    add_newline: bool | None = None
    modules: dict[str, dict[str, Any]] = field(default_factory=dict)


@dataclass(frozen=True)
class Profile:
    """A complete, validated environment description."""

    name: str
    description: str
    homebrew: HomebrewSpec
    zsh: ZshSpec
    git: GitSpec
    editor: EditorSpec
    onepassword: OnePasswordSpec | None = None
    files: dict[str, str] = field(default_factory=dict)
    starship: StarshipSpec | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Profile":
        """Build a Profile from an already validated document.

        Args:
            data: Parsed document that passed validate_profile_data()

        Returns:
            Immutable Profile
        """
        homebrew = data["homebrew"]
        zsh = data["zsh"]

        onepassword = None
        if data.get("onepassword") is not None:
            onepassword = OnePasswordSpec(
                vault_name=data["onepassword"].get("vault_name")
            )

        starship = None
        if data.get("starship") is not None:
            section = data["starship"]
            starship = StarshipSpec(
                format=section.get("format"),
                add_newline=section.get("add_newline"),
                modules={name: dict(opts) for name, opts in (section.get("modules") or {}).items()},
            )

        return cls(
            name=str(data["name"]),
            description=str(data["description"]),
            homebrew=HomebrewSpec(
                taps=tuple(homebrew["taps"]),
                packages=tuple(homebrew["packages"]),
                casks=tuple(homebrew["casks"]),
            ),
            zsh=ZshSpec(
                plugins=tuple(zsh["plugins"]),
                antidote_plugins=tuple(zsh["antidote_plugins"]),
                config=dict(zsh.get("config") or {}),
                aliases=dict(zsh.get("aliases") or {}),
                exports=dict(zsh.get("exports") or {}),
                oh_my_zsh_settings=dict(zsh.get("oh_my_zsh_settings") or {}),
                init_commands=tuple(zsh.get("init_commands") or ()),
            ),
            git=GitSpec(config=dict(data["git"]["config"])),
            editor=EditorSpec(default=data["editor"]["default"]),
            onepassword=onepassword,
            files={str(src): str(dest) for src, dest in (data.get("files") or {}).items()},
            starship=starship,
        )


__all__ = [
    "EditorSpec",
    "GitSpec",
    "HomebrewSpec",
    "OnePasswordSpec",
    "Profile",
    "StarshipSpec",
    "ZshSpec",
    "render_scalar",
]
