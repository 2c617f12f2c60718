"""Profile loading and validation.

Resolves a profile selector to a document, parses it and validates it
against the profile schema before anything is generated.

Selector forms:
- Bare name of a built-in profile: <profiles_dir>/<name>/config.json
- Directory containing a conventional config file
- Direct path to a profile document (JSON, TOML or YAML)

Validation collects every violation before failing so a broken profile can
be fixed in one pass.

Public API:
    LoadedProfile: Validated profile plus where it came from
    ProfileLoader: Resolve, parse and validate profiles
    validate_profile_data: Schema check returning all violations
"""

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any, ClassVar

import tomli
import yaml

from devprofile.errors import (
    MalformedProfileError,
    ProfileNotFoundError,
    ProfileValidationError,
)
from devprofile.profile import Profile

logger = logging.getLogger(__name__)

BUILTIN_PROFILES_DIR = Path(__file__).parent / "profiles"

REQUIRED_FIELDS = ("name", "description", "homebrew", "zsh", "git", "editor")
HOMEBREW_LIST_FIELDS = ("taps", "packages", "casks")
ZSH_REQUIRED_LIST_FIELDS = ("plugins", "antidote_plugins")
ZSH_OPTIONAL_MAPPING_FIELDS = ("config", "aliases", "exports", "oh_my_zsh_settings")


@dataclass(frozen=True)
class LoadedProfile:
    """A validated profile and the location it was loaded from.

    Attributes:
        profile: Validated, immutable profile
        base_dir: Directory that relative `files` sources resolve against
        source_path: Document that was actually read
    """

    profile: Profile
    base_dir: Path
    source_path: Path


def _is_present(section: Mapping[str, Any], key: str) -> bool:
    return section.get(key) is not None


def _check_string_items(values: list[Any], field_name: str, errors: list[str]) -> None:
    for index, item in enumerate(values):
        if not isinstance(item, str):
            errors.append(f"Field {field_name}[{index}] must be a string")


def _check_scalar_values(values: Mapping[str, Any], field_name: str, errors: list[str]) -> None:
    for key, value in values.items():
        if isinstance(value, (list, Mapping)):
            errors.append(f"Field {field_name}.{key} must be a scalar value")


def _check_no_nulls(value: Any, field_name: str, errors: list[str]) -> None:
    if value is None:
        errors.append(f"Field {field_name} must not be null")
    elif isinstance(value, Mapping):
        for key, item in value.items():
            _check_no_nulls(item, f"{field_name}.{key}", errors)
    elif isinstance(value, list):
        for index, item in enumerate(value):
            _check_no_nulls(item, f"{field_name}[{index}]", errors)


def validate_profile_data(data: Any) -> list[str]:
    """Validate a parsed profile document.

    A required section that is missing (or not a mapping) yields a single
    violation; its nested fields are not inspected.

    Args:
        data: Parsed profile document

    Returns:
        List of violation messages (empty when the profile is valid)
    """
    if not isinstance(data, Mapping):
        return ["Profile root must be a mapping"]

    errors: list[str] = []

    for field_name in REQUIRED_FIELDS:
        if not _is_present(data, field_name):
            errors.append(f"Missing required field: {field_name}")

    for field_name in ("name", "description"):
        if _is_present(data, field_name) and not isinstance(data[field_name], str):
            errors.append(f"Field {field_name} must be a string")

    homebrew = data.get("homebrew")
    if homebrew is not None:
        if not isinstance(homebrew, Mapping):
            errors.append("Field homebrew must be a mapping")
        else:
            for field_name in HOMEBREW_LIST_FIELDS:
                if not _is_present(homebrew, field_name):
                    errors.append(f"Missing required field: homebrew.{field_name}")
                elif not isinstance(homebrew[field_name], list):
                    errors.append(f"Field homebrew.{field_name} must be a list")
                else:
                    _check_string_items(homebrew[field_name], f"homebrew.{field_name}", errors)

    zsh = data.get("zsh")
    if zsh is not None:
        if not isinstance(zsh, Mapping):
            errors.append("Field zsh must be a mapping")
        else:
            for field_name in ZSH_REQUIRED_LIST_FIELDS:
                if not _is_present(zsh, field_name):
                    errors.append(f"Missing required field: zsh.{field_name}")
                elif not isinstance(zsh[field_name], list):
                    errors.append(f"Field zsh.{field_name} must be a list")
                else:
                    _check_string_items(zsh[field_name], f"zsh.{field_name}", errors)

            for field_name in ZSH_OPTIONAL_MAPPING_FIELDS:
                if not _is_present(zsh, field_name):
                    continue
                if not isinstance(zsh[field_name], Mapping):
                    errors.append(f"Field zsh.{field_name} must be a mapping")
                else:
                    _check_scalar_values(zsh[field_name], f"zsh.{field_name}", errors)

            if _is_present(zsh, "init_commands"):
                if not isinstance(zsh["init_commands"], list):
                    errors.append("Field zsh.init_commands must be a list")
                else:
                    _check_string_items(zsh["init_commands"], "zsh.init_commands", errors)

    git = data.get("git")
    if git is not None:
        if not isinstance(git, Mapping):
            errors.append("Field git must be a mapping")
        elif not _is_present(git, "config"):
            errors.append("Missing required field: git.config")
        elif not isinstance(git["config"], Mapping):
            errors.append("Field git.config must be a mapping")
        else:
            _check_scalar_values(git["config"], "git.config", errors)

    editor = data.get("editor")
    if editor is not None:
        if not isinstance(editor, Mapping):
            errors.append("Field editor must be a mapping")
        elif not _is_present(editor, "default"):
            errors.append("Missing required field: editor.default")
        elif not isinstance(editor["default"], str):
            errors.append("Field editor.default must be a string")

    onepassword = data.get("onepassword")
    if onepassword is not None:
        if not isinstance(onepassword, Mapping):
            errors.append("Field onepassword must be a mapping")
        elif _is_present(onepassword, "vault_name") and not isinstance(
            onepassword["vault_name"], str
        ):
            errors.append("Field onepassword.vault_name must be a string")

    files = data.get("files")
    if files is not None:
        if not isinstance(files, Mapping):
            errors.append("Field files must be a mapping")
        else:
            for source, destination in files.items():
                if not isinstance(source, str):
                    errors.append(f"Field files key {source!r} must be a string source path")
                elif not isinstance(destination, str):
                    errors.append(f"Field files.{source} must be a string destination path")

    starship = data.get("starship")
    if starship is not None:
        if not isinstance(starship, Mapping):
            errors.append("Field starship must be a mapping")
        else:
            if _is_present(starship, "format") and not isinstance(starship["format"], str):
                errors.append("Field starship.format must be a string")
            if _is_present(starship, "add_newline") and not isinstance(
                starship["add_newline"], bool
            ):
                errors.append("Field starship.add_newline must be a boolean")
            modules = starship.get("modules")
            if modules is not None:
                if not isinstance(modules, Mapping):
                    errors.append("Field starship.modules must be a mapping")
                else:
                    for module_name, options in modules.items():
                        if not isinstance(options, Mapping):
                            errors.append(f"Field starship.modules.{module_name} must be a mapping")
                        else:
                            _check_no_nulls(options, f"starship.modules.{module_name}", errors)

    return errors


class ProfileLoader:
    """Resolve, parse and validate profile documents.

    Example:
        >>> loader = ProfileLoader()
        >>> loaded = loader.load("personal")
        >>> print(loaded.profile.description)
    """

    CONFIG_FILENAMES: ClassVar[tuple[str, ...]] = (
        "config.json",
        "config.toml",
        "config.yaml",
        "config.yml",
    )

    def __init__(self, profiles_dir: Path | None = None):
        """Initialize loader.

        Args:
            profiles_dir: Directory holding built-in profiles
                (default: the profiles shipped with devprofile)
        """
        self.profiles_dir = profiles_dir or BUILTIN_PROFILES_DIR

    def builtin_names(self) -> list[str]:
        """List the names of the available built-in profiles."""
        if not self.profiles_dir.is_dir():
            return []
        return sorted(
            entry.name
            for entry in self.profiles_dir.iterdir()
            if entry.is_dir() and self._find_config_file(entry) is not None
        )

    def _find_config_file(self, directory: Path) -> Path | None:
        for filename in self.CONFIG_FILENAMES:
            candidate = directory / filename
            if candidate.is_file():
                return candidate
        return None

    def resolve(self, selector: str) -> tuple[Path, Path]:
        """Resolve a selector to (document path, base directory).

        Args:
            selector: Built-in profile name, profile directory or document path

        Returns:
            Tuple of the profile document path and its base directory

        Raises:
            ProfileNotFoundError: If nothing resolvable exists
        """
        selector = selector.strip()
        if not selector:
            raise ProfileNotFoundError("No profile given. Provide a profile name or path.")

        # Bare names are looked up among built-in profiles first
        if "/" not in selector and selector not in (".", ".."):
            builtin_dir = self.profiles_dir / selector
            if builtin_dir.is_dir():
                config_file = self._find_config_file(builtin_dir)
                if config_file is None:
                    raise ProfileNotFoundError(
                        f"Built-in profile '{selector}' has no config file in {builtin_dir}"
                    )
                logger.info(f"Using built-in profile: {selector}")
                return config_file, builtin_dir

        path = Path(selector).expanduser()
        if path.is_dir():
            config_file = self._find_config_file(path)
            if config_file is None:
                raise ProfileNotFoundError(
                    f"Profile directory {path} contains none of: {', '.join(self.CONFIG_FILENAMES)}"
                )
            logger.info(f"Using profile folder: {path}")
            return config_file, path

        if path.is_file():
            logger.info(f"Using profile file: {path}")
            return path, path.parent

        available = ", ".join(self.builtin_names()) or "none"
        raise ProfileNotFoundError(
            f"Profile not found: {selector} (built-in profiles: {available})"
        )

    @staticmethod
    def parse(path: Path) -> Any:
        """Parse a profile document according to its suffix.

        Raises:
            ProfileNotFoundError: If the file cannot be read
            MalformedProfileError: If the content cannot be parsed
        """
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError as e:
            raise ProfileNotFoundError(f"Profile config file not found: {path}") from e
        except (OSError, UnicodeDecodeError) as e:
            raise MalformedProfileError(f"Cannot read profile {path}: {e}") from e

        suffix = path.suffix.lower()
        try:
            if suffix == ".toml":
                return tomli.loads(text)
            if suffix in (".yaml", ".yml"):
                return yaml.safe_load(text)
            return json.loads(text)
        except (json.JSONDecodeError, tomli.TOMLDecodeError, yaml.YAMLError) as e:
            kind = suffix.lstrip(".").upper() if suffix in (".toml", ".yaml", ".yml") else "JSON"
            raise MalformedProfileError(f"Invalid {kind} format in profile {path}: {e}") from e

    def load(self, selector: str) -> LoadedProfile:
        """Resolve, parse and validate a profile.

        Args:
            selector: Built-in profile name, profile directory or document path

        Returns:
            LoadedProfile with the validated Profile

        Raises:
            ProfileNotFoundError: If no document can be resolved
            MalformedProfileError: If the document cannot be parsed
            ProfileValidationError: With every schema violation found
        """
        source_path, base_dir = self.resolve(selector)
        data = self.parse(source_path)

        violations = validate_profile_data(data)
        if violations:
            raise ProfileValidationError(str(source_path), violations)

        profile = Profile.from_dict(data)
        logger.info(f"Profile loaded successfully: {profile.name} ({profile.description})")
        return LoadedProfile(profile=profile, base_dir=base_dir, source_path=source_path)


__all__ = [
    "BUILTIN_PROFILES_DIR",
    "LoadedProfile",
    "ProfileLoader",
    "validate_profile_data",
]
