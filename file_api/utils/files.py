from __future__ import annotations

import mimetypes
import posixpath

from werkzeug.utils import secure_filename


def guess_mime(path: str) -> str | None:
    mime, _ = mimetypes.guess_type(path)
    return mime


def mime_category(mime_type: str | None) -> str:
    """``"image/png" -> "image"``; missing types fall back to ``"file"``."""

    return (mime_type or "").split("/", 1)[0] or "file"


def join_path(directory: str | None, name: str) -> str:
    return posixpath.join(directory, name) if directory else name


def safe_filename(filename: str | None) -> str:
    return secure_filename(filename or "") or "upload"


def numbered(filename: str, number: int) -> str:
    """``numbered("photo.jpg", 2) -> "photo-2.jpg"``."""

    stem, ext = posixpath.splitext(filename)
    return f"{stem}-{number}{ext}"
