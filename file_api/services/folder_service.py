"""Folder CRUD kept in lockstep with storage directories.

Every mutation runs inside :func:`transaction`; the storage call is made
after the rows are flushed so database errors surface before the
filesystem is touched. A storage failure rolls the rows back, but storage
itself has no rollback: a directory created or moved before a later
failure stays where it is.
"""

from __future__ import annotations

import logging
from typing import Iterable

from sqlalchemy.orm import selectinload

from file_api.errors import ValidationError
from file_api.extensions import db
from file_api.models import File, Folder
from file_api.services.slug_service import compute_unique_slug
from file_api.services.transaction import transaction
from file_api.storage import LocalStorage, get_storage
from file_api.utils.files import join_path

logger = logging.getLogger(__name__)


def _newest_first(query, model):
    return query.order_by(model.created_at.desc(), model.id.desc())


def list_folders(limit: int) -> list[Folder]:
    """Root folders, newest first, with children and files loaded."""

    query = Folder.query.options(
        selectinload(Folder.children), selectinload(Folder.files)
    ).filter(Folder.parent_id.is_(None))
    return _newest_first(query, Folder).limit(limit).all()


def folder_contents(folder: Folder) -> tuple[list[Folder], list[File]]:
    """Direct children and files of ``folder``, each newest first."""

    children = _newest_first(Folder.query.filter(Folder.parent_id == folder.id), Folder).all()
    files = _newest_first(File.query.filter(File.folder_id == folder.id), File).all()
    return children, files


def _resolve_parent(
    parent_id: int | None,
    parent_folder: str | None,
    moving: Folder | None = None,
) -> tuple[int | None, str | None]:
    """Validate the requested parent and return ``(parent_id, parent_folder)``.

    ``parent_folder`` always comes from the parent row so the stored path
    matches the parent's directory.
    """

    if parent_id is None:
        return None, None

    parent = db.session.get(Folder, parent_id)
    if parent is None:
        raise ValidationError.single("parent_id", "The selected parent id is invalid.")

    if moving is not None:
        current: Folder | None = parent
        while current is not None:
            if current.id == moving.id:
                raise ValidationError.single(
                    "parent_id", "A folder cannot be moved inside itself."
                )
            current = current.parent

    expected = parent.directory
    if parent_folder and parent_folder.strip("/") != expected:
        raise ValidationError.single(
            "parent_folder", "The parent folder does not match the selected parent."
        )
    return parent.id, expected


def _rebase(path: str | None, old: str, new: str) -> str | None:
    if path is None:
        return None
    if path == old:
        return new
    if path.startswith(old + "/"):
        return new + path[len(old):]
    return path


def _relocate_tree(folder: Folder, old: str, new: str, storage: LocalStorage) -> int:
    """Rewrite stored paths below ``folder`` after its directory moves."""

    touched = 0
    stack = [folder]
    while stack:
        current = stack.pop()
        for file in current.files:
            file.path = _rebase(file.path, old, new)
            file.url = storage.url(file.path)
            touched += 1
        for child in current.children:
            child.parent_folder = _rebase(child.parent_folder, old, new)
            stack.append(child)
            touched += 1
    return touched


def create_folder(
    name: str,
    parent_id: int | None = None,
    parent_folder: str | None = None,
) -> Folder:
    parent_id, parent_folder = _resolve_parent(parent_id, parent_folder)
    storage = get_storage()

    with transaction("create folder"):
        folder = Folder(
            name=name.strip(),
            slug=compute_unique_slug(name),
            parent_id=parent_id,
            parent_folder=parent_folder,
        )
        db.session.add(folder)
        db.session.flush()
        storage.make_directory(folder.directory)

    logger.info(
        "Folder created: %s",
        folder.directory,
        extra={"event": "folder.create", "folder_id": folder.id},
    )
    return folder


def update_folder(
    folder: Folder,
    name: str,
    parent_id: int | None = None,
    parent_folder: str | None = None,
) -> Folder:
    """Rename and/or move ``folder``, relocating its directory."""

    parent_id, parent_folder = _resolve_parent(parent_id, parent_folder, moving=folder)
    storage = get_storage()

    with transaction("update folder"):
        slug = compute_unique_slug(name, exclude_id=folder.id)
        old_path = folder.directory
        new_path = join_path(parent_folder, slug)

        folder.name = name.strip()
        folder.slug = slug
        folder.parent_id = parent_id
        folder.parent_folder = parent_folder
        if old_path != new_path:
            _relocate_tree(folder, old_path, new_path, storage)
        db.session.flush()

        if old_path != new_path:
            storage.move(old_path, new_path)

    logger.info(
        "Folder updated: %s -> %s",
        old_path,
        new_path,
        extra={"event": "folder.update", "folder_id": folder.id},
    )
    return folder


def delete_folders(folder_names: Iterable[str], folder_ids: Iterable[int]) -> int:
    """Delete the given directories, then the rows (with their subtrees)."""

    names = [str(name).strip("/") for name in folder_names]
    ids = list(folder_ids)
    storage = get_storage()

    with transaction("delete folders"):
        for directory in names:
            storage.delete_directory(directory)
        folders = Folder.query.filter(Folder.id.in_(ids)).all()
        for folder in folders:
            db.session.delete(folder)

    logger.info(
        "Folders deleted: ids=%s directories=%s",
        ids,
        names,
        extra={"event": "folder.delete"},
    )
    return len(folders)
