"""Profile file placement.

Copies files shipped next to a profile document to their destinations in
the home directory, e.g. {"gitignore_global": "~/.gitignore_global"}.

Missing sources are warned about and skipped; one absent optional file
never blocks the others. Sources must stay inside the profile directory.
"""

import logging
import os
import shutil
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from devprofile.config_manager import ProvisionPaths

logger = logging.getLogger(__name__)


@dataclass
class PlacementResult:
    """Outcome of placing a profile's files."""

    copied: list[tuple[Path, Path]] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)


class FilePlacer:
    """Copy profile-relative sources to home-relative destinations.

    Example:
        >>> placer = FilePlacer(Path("profiles/personal"), ProvisionPaths(Path.home()))
        >>> result = placer.place({"gitignore_global": "~/.gitignore_global"})
        >>> print(f"Copied {len(result.copied)} files")
    """

    def __init__(self, base_dir: Path, paths: ProvisionPaths):
        """Initialize placer.

        Args:
            base_dir: Profile directory that sources are relative to
            paths: Provisioning paths (home directory for ~ expansion)
        """
        self.base_dir = base_dir
        self.paths = paths

    def _resolve_source(self, relative: str) -> Path | None:
        # Lexical containment check, symlinked sources inside the profile are allowed
        base = Path(os.path.normpath(self.base_dir))
        source = Path(os.path.normpath(base / relative))
        if not source.is_relative_to(base):
            return None
        return source

    def place(self, files: Mapping[str, str]) -> PlacementResult:
        """Copy every declared file, overwriting existing destinations.

        Args:
            files: Mapping of profile-relative source -> destination path

        Returns:
            PlacementResult listing copied and skipped entries
        """
        result = PlacementResult()
        if not files:
            logger.info("No files section in profile, skipping file copying")
            return result

        logger.info("Copying profile files...")
        for relative, destination in files.items():
            source = self._resolve_source(relative)
            if source is None:
                logger.warning(f"Source file escapes the profile directory, skipping: {relative}")
                result.skipped.append(relative)
                continue
            if not source.is_file():
                logger.warning(f"Source file not found: {self.base_dir / relative}")
                result.skipped.append(relative)
                continue

            target = self.paths.expand_home(destination)
            target.parent.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(source, target)
            logger.info(f"Copied {relative} → {target}")
            result.copied.append((source, target))

        return result


__all__ = ["FilePlacer", "PlacementResult"]
