"""Filesystem storage backend.

Every path handled here is relative to the storage root, using ``/`` as the
separator, the same strings that are stored in ``folders.parent_folder``
and ``files.path``.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path, PurePosixPath
from typing import BinaryIO

from flask import Flask, current_app

from .errors import StoragePathError

logger = logging.getLogger(__name__)


class LocalStorage:
    """Directory and file operations rooted at ``root``."""

    def __init__(self, root: str | Path, base_url: str = "/storage") -> None:
        self.root = Path(root).expanduser().resolve()
        self.base_url = base_url.rstrip("/")

    def path(self, relative: str) -> Path:
        """Resolve ``relative`` under the root, rejecting anything that escapes it."""

        pure = PurePosixPath(relative or "")
        if pure.is_absolute() or ".." in pure.parts:
            raise StoragePathError(f"Unsafe storage path: {relative!r}")
        return self.root.joinpath(*pure.parts)

    def exists(self, relative: str) -> bool:
        return self.path(relative).exists()

    def make_directory(self, relative: str) -> None:
        target = self.path(relative)
        logger.info("Creating directory: %s", relative, extra={"path": relative})
        target.mkdir(parents=True, exist_ok=True)

    def move(self, old: str, new: str) -> None:
        source = self.path(old)
        destination = self.path(new)
        if not source.exists():
            raise FileNotFoundError(f"Unable to move {old!r}: source does not exist")
        if destination.exists():
            raise FileExistsError(f"Unable to move {old!r}: {new!r} already exists")
        logger.info(
            "Moving directory: %s -> %s",
            old,
            new,
            extra={"old_path": old, "new_path": new},
        )
        destination.parent.mkdir(parents=True, exist_ok=True)
        shutil.move(str(source), str(destination))

    def delete_directory(self, relative: str) -> bool:
        target = self.path(relative)
        if target == self.root:
            raise StoragePathError("Refusing to delete the storage root")
        if not target.is_dir():
            return False
        logger.info("Deleting directory: %s", relative, extra={"path": relative})
        shutil.rmtree(target)
        return True

    def all_files(self, relative: str = "") -> list[str]:
        """Every file under ``relative``, recursively, as root-relative paths."""

        base = self.path(relative)
        if not base.is_dir():
            return []
        return sorted(
            p.relative_to(self.root).as_posix() for p in base.rglob("*") if p.is_file()
        )

    def put_file(self, relative: str, stream: BinaryIO, chunk_size: int = 1024 * 1024) -> int:
        """Write ``stream`` to ``relative`` and return the number of bytes written."""

        target = self.path(relative)
        target.parent.mkdir(parents=True, exist_ok=True)
        written = 0
        with open(target, "wb") as handle:
            for chunk in iter(lambda: stream.read(chunk_size), b""):
                handle.write(chunk)
                written += len(chunk)
        logger.info("Stored file: %s (%s bytes)", relative, written, extra={"path": relative})
        return written

    def delete(self, relative: str) -> bool:
        target = self.path(relative)
        if not target.is_file():
            return False
        logger.info("Deleting file: %s", relative, extra={"path": relative})
        target.unlink()
        return True

    def url(self, relative: str) -> str:
        return f"{self.base_url}/{PurePosixPath(relative).as_posix()}"


def init_storage(app: Flask) -> LocalStorage:
    storage = LocalStorage(app.config["STORAGE_ROOT"], app.config.get("STORAGE_URL", "/storage"))
    storage.root.mkdir(parents=True, exist_ok=True)
    app.extensions["storage"] = storage
    app.logger.info("STORAGE_ROOT=%s", storage.root)
    return storage


def get_storage() -> LocalStorage:
    return current_app.extensions["storage"]
