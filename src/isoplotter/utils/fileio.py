"""
Atomic file-write utilities.

Output is written to a temporary file in the destination directory and
moved into place with ``os.replace()``, so an interrupted run never leaves
a half-written table behind.
"""

from __future__ import annotations

import os
import tempfile


def atomic_write_text(path: str | os.PathLike, content: str, *, encoding: str = "utf-8") -> None:
    """Write *content* as text atomically via temp-file + rename.

    Parameters
    ----------
    path:
        Destination file path. Its parent directory must exist.
    content:
        Text content to write.
    encoding:
        Text encoding (default utf-8).
    """
    path = str(path)
    dir_path = os.path.dirname(path) or "."
    tmp_path: str | None = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="w", dir=dir_path, suffix=".tmp", delete=False, encoding=encoding, newline=""
        ) as tmp:
            tmp_path = tmp.name
            tmp.write(content)
        os.replace(tmp_path, path)
    except BaseException:
        if tmp_path is not None and os.path.exists(tmp_path):
            os.unlink(tmp_path)
        raise
