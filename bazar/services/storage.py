# bazar/services/storage.py
import os
from pathlib import Path
from typing import List

from bazar.utils.retry import storage_retry
from bazar.utils.settings import STORAGE_ROOT
from bazar.utils.logging import get_logger

logger = get_logger(__name__)


class LocalStorage:
    """
    Local disk rooted at a single directory. Paths handed in and out are
    relative to the root and use forward slashes, e.g. "chunks/abc.part".

    Entries are never followed through symlinks: a link is listed, aged
    and removed as itself, its target is left alone.
    """

    def __init__(self, root: str | os.PathLike | None = None):
        self.root = Path(root or STORAGE_ROOT).resolve()

    def resolve_path(self, path: str) -> Path:
        #normalized lexically, symlinks stay unresolved
        resolved = Path(os.path.normpath(self.root / path))

        if resolved != self.root and self.root not in resolved.parents:
            raise ValueError(f"Path {path!r} is outside of the storage root")

        return resolved

    def list_files(self, namespace: str) -> List[str]:
        """All files and links below the namespace, recursively."""
        directory = self.resolve_path(namespace)

        if directory.is_symlink() or not directory.is_dir():
            return []

        return sorted(
            p.relative_to(self.root).as_posix()
            for p in directory.rglob("*")
            if p.is_symlink() or p.is_file()
        )

    def last_modified(self, path: str) -> float:
        return self.resolve_path(path).lstat().st_mtime

    @storage_retry()
    def delete(self, path: str) -> bool:
        """Remove a file or link. False when it was already gone."""
        try:
            self.resolve_path(path).unlink()
        except FileNotFoundError:
            logger.debug(f"File {path} already removed")
            return False

        return True
