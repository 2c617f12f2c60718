"""Starship prompt configuration.

Customisations from the profile's `starship` section are layered over
starship's built-in defaults: global settings first, then one table per
module, with value types preserved. A section without any content removes
a previously generated file so starship falls back to its defaults.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

import tomlkit

from devprofile.modules.atomic_write import write_atomic
from devprofile.profile import StarshipSpec

logger = logging.getLogger(__name__)


@dataclass
class StarshipConfigResult:
    """Result from starship configuration."""

    action: str  # "skipped", "written", "removed"
    config_path: Path | None = None


def render_starship_config(spec: StarshipSpec) -> str:
    """Render starship.toml for the given customisations.

    Returns:
        TOML text, empty when the section has no customisations
    """
    doc = tomlkit.document()
    if spec.format is not None:
        doc.add("format", spec.format)
    if spec.add_newline is not None:
        doc.add("add_newline", spec.add_newline)

    for module_name, options in spec.modules.items():
        table = tomlkit.table()
        for key, value in options.items():
            table.add(key, value)
        if len(doc) > 0:
            doc.add(tomlkit.nl())
        doc.add(module_name, table)

    return tomlkit.dumps(doc) if len(doc) > 0 else ""


class StarshipConfigurator:
    """Regenerate or remove ~/.config/starship.toml."""

    def __init__(self, config_path: Path):
        self.config_path = config_path

    def configure(self, spec: StarshipSpec | None) -> StarshipConfigResult:
        """Apply the profile's starship section.

        Args:
            spec: Starship section, or None when the profile has none

        Returns:
            StarshipConfigResult describing the action taken
        """
        if spec is None:
            logger.info("No starship configuration found in profile, using starship defaults")
            return StarshipConfigResult(action="skipped")

        content = render_starship_config(spec)
        if not content:
            if self.config_path.exists():
                self.config_path.unlink()
            logger.info("Using starship default configuration")
            return StarshipConfigResult(action="removed", config_path=self.config_path)

        logger.info("Configuring starship with profile customizations...")
        write_atomic(self.config_path, content)
        logger.info(f"Starship configuration customized at {self.config_path}")
        return StarshipConfigResult(action="written", config_path=self.config_path)


__all__ = ["StarshipConfigResult", "StarshipConfigurator", "render_starship_config"]
