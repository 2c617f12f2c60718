"""Atomic replacement of generated documents.

Generated files are written to a temporary file in the destination
directory and renamed over the target, so a failure mid-generation never
leaves a half-written document behind.

Public API:
    write_atomic: Replace a file's content atomically
"""

import logging
import os
import stat
import tempfile
from pathlib import Path

logger = logging.getLogger(__name__)


def write_atomic(path: Path, content: str, mode: int | None = None) -> Path:
    """Write content to path via temp file + rename.

    Args:
        path: Destination file (parent directories are created)
        content: Full document text
        mode: Permission bits applied before the rename (default: keep the
            existing file's mode, 0644 for new files)

    Returns:
        The destination path

    Raises:
        OSError: If the document cannot be written; the temp file is removed
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    fd, temp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    temp_path = Path(temp_name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())

        if mode is None:
            mode = stat.S_IMODE(path.stat().st_mode) if path.exists() else 0o644
        os.chmod(temp_path, mode)

        temp_path.replace(path)
    except BaseException:
        # Cleanup temp file on error
        if temp_path.exists():
            temp_path.unlink()
        raise

    logger.debug(f"Wrote {path}")
    return path


__all__ = ["write_atomic"]
