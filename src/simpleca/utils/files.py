"""
Filesystem helpers for the managed storage directory.

All writes set explicit permissions after creation so the umask
cannot widen access to private keys.
"""

import os
import tempfile
from pathlib import Path


def atomic_write(path: Path, data: bytes, mode: int = 0o644) -> None:
    """
    Write ``data`` to ``path`` through a temporary file and a rename.

    Readers see either the previous content or the new content, never a
    truncated file.

    Args:
        path: Destination file
        data: Bytes to write
        mode: Permission bits applied before the rename
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=path.parent)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        os.chmod(tmp_name, mode)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


def write_exclusive(path: Path, data: bytes, mode: int = 0o644) -> None:
    """
    Create ``path`` and write ``data``; fail if the file already exists.

    Raises:
        FileExistsError: If ``path`` already exists
    """
    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_EXCL, 0o600)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
    except BaseException:
        path.unlink(missing_ok=True)
        raise
    os.chmod(path, mode)


def is_strictly_inside(candidate: Path, root: Path) -> bool:
    """
    Check that ``candidate`` resolves to a path strictly below ``root``.

    Both paths are canonicalised first, so ``..`` segments and symlinks
    pointing outside ``root`` are rejected. ``root`` itself is not inside.
    """
    resolved_root = root.resolve()
    resolved = candidate.resolve()
    return resolved != resolved_root and resolved_root in resolved.parents
