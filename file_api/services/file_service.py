from __future__ import annotations

import logging
import posixpath

from werkzeug.datastructures import FileStorage

from file_api.errors import OperationFailure, ValidationError
from file_api.extensions import db
from file_api.models import File, Folder
from file_api.services.transaction import transaction
from file_api.storage import LocalStorage, get_storage
from file_api.utils.files import guess_mime, join_path, numbered, safe_filename
from file_api.utils.slugify import slugify

logger = logging.getLogger(__name__)

_GENERIC_MIME = "application/octet-stream"


def _free_path(storage: LocalStorage, directory: str | None, filename: str) -> str:
    path = join_path(directory, filename)
    number = 1
    while storage.exists(path) or File.query.filter_by(path=path).first() is not None:
        path = join_path(directory, numbered(filename, number))
        number += 1
    return path


def _rollback_upload(storage: LocalStorage, path: str) -> None:
    """Best-effort removal of a file whose row was rolled back."""

    try:
        logger.warning("Rolling back upload, deleting file: %s", path, extra={"path": path})
        storage.delete(path)
    except Exception:
        logger.exception("Failed to roll back upload, orphaned file: %s", path)


def upload_file(upload: FileStorage, folder_id: int | None = None) -> File:
    folder: Folder | None = None
    if folder_id is not None:
        folder = db.session.get(Folder, folder_id)
        if folder is None:
            raise ValidationError.single("folder_id", "The selected folder id is invalid.")

    storage = get_storage()
    filename = safe_filename(upload.filename)
    mime_type = upload.mimetype
    if not mime_type or mime_type == _GENERIC_MIME:
        mime_type = guess_mime(filename) or mime_type or _GENERIC_MIME

    path = _free_path(storage, folder.directory if folder else None, filename)
    written = False
    try:
        with transaction("upload file"):
            size = storage.put_file(path, upload.stream)
            written = True
            record = File(
                folder_id=folder.id if folder else None,
                name=upload.filename or filename,
                slug=slugify(posixpath.splitext(posixpath.basename(path))[0]),
                mime_type=mime_type,
                url=storage.url(path),
                path=path,
                size=size,
            )
            db.session.add(record)
            db.session.flush()
    except OperationFailure:
        if written:
            _rollback_upload(storage, path)
        raise

    logger.info(
        "File uploaded: %s",
        path,
        extra={"event": "file.upload", "file_id": record.id},
    )
    return record


def delete_file(record: File) -> None:
    storage = get_storage()
    file_id, path = record.id, record.path

    with transaction("delete file"):
        storage.delete(path)
        db.session.delete(record)

    logger.info("File deleted: %s", path, extra={"event": "file.delete", "file_id": file_id})
