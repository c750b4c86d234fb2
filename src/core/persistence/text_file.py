"""
Text file persistence — tolerant reads and atomic writes.

Writes go to a temp file in the target's directory and are renamed
into place, so an interrupted run never leaves a half-written file.
Symlinks are followed: the link target is replaced, the link is kept.
"""

from __future__ import annotations

import logging
import os
import stat
import tempfile
from pathlib import Path

logger = logging.getLogger(__name__)


def read_text_or_empty(path: Path) -> str:
    """Read a UTF-8 text file; a missing file reads as ``""``.

    Undecodable bytes come back as lone surrogates, so content written
    back with ``atomic_write_text`` keeps its original bytes.
    """
    try:
        return path.read_text(encoding="utf-8", errors="surrogateescape")
    except FileNotFoundError:
        return ""


def atomic_write_text(path: Path, content: str) -> None:
    """Replace ``path`` with ``content`` atomically.

    The existing file's permission bits are carried over; a new file
    gets 0644.
    """
    target = path.resolve() if path.is_symlink() else path
    target.parent.mkdir(parents=True, exist_ok=True)

    try:
        mode = stat.S_IMODE(target.stat().st_mode)
    except FileNotFoundError:
        mode = 0o644

    fd, tmp_path = tempfile.mkstemp(
        dir=target.parent,
        prefix=f".{target.name}_",
        suffix=".tmp",
    )
    tmp = Path(tmp_path)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", errors="surrogateescape") as fh:
            fh.write(content)
        tmp.chmod(mode)
        tmp.rename(target)
        logger.debug("Wrote %s (%d bytes)", target, len(content))
    except Exception:
        tmp.unlink(missing_ok=True)
        raise
