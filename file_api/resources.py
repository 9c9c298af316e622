"""Response shapes for folders, files and merged folder listings."""

from __future__ import annotations

from datetime import tzinfo
from typing import Iterable, Literal, TypedDict, Union

from flask import current_app

from file_api.models import File, Folder
from file_api.storage import LocalStorage
from file_api.utils.formatting import bytes_to_human, day_date_time
from file_api.utils.files import mime_category


class FolderItem(TypedDict):
    id: int
    name: str
    slug: str
    type: Literal["folder"]
    parent_id: int | None
    parent_folder: str | None
    items: int
    createdAt: str | None


class FileItem(TypedDict):
    id: int
    name: str
    slug: str
    type: str
    url: str
    path: str
    folder_id: int | None
    size: str
    createdAt: str | None


ListingItem = Union[FolderItem, FileItem]


def app_timezone() -> tzinfo:
    return current_app.extensions["timezone"]


def folder_item(folder: Folder, storage: LocalStorage, tz: tzinfo) -> FolderItem:
    return {
        "id": folder.id,
        "name": folder.name,
        "slug": folder.slug,
        "type": "folder",
        "parent_id": folder.parent_id,
        "parent_folder": folder.parent_folder,
        "items": len(storage.all_files(folder.directory)),
        "createdAt": day_date_time(folder.created_at, tz),
    }


def file_item(file: File, tz: tzinfo) -> FileItem:
    return {
        "id": file.id,
        "name": file.name,
        "slug": file.slug,
        "type": mime_category(file.mime_type),
        "url": file.url,
        "path": file.path,
        "folder_id": file.folder_id,
        "size": bytes_to_human(file.size),
        "createdAt": day_date_time(file.created_at, tz),
    }


def merge_listing(
    children: Iterable[Folder],
    files: Iterable[File],
    storage: LocalStorage,
    tz: tzinfo,
) -> list[ListingItem]:
    """Folder items in the given order, followed by file items in the given order."""

    listing: list[ListingItem] = [folder_item(child, storage, tz) for child in children]
    listing.extend(file_item(file, tz) for file in files)
    return listing


def file_resource(file: File, tz: tzinfo) -> dict[str, object]:
    data = file.to_dict()
    data["createdAt"] = day_date_time(file.created_at, tz)
    return data


def folder_resource(folder: Folder, tz: tzinfo, *, nested: bool = True) -> dict[str, object]:
    data = folder.to_dict()
    data["createdAt"] = day_date_time(folder.created_at, tz)
    if nested:
        data["children"] = [folder_resource(child, tz, nested=False) for child in folder.children]
        data["files"] = [file_resource(file, tz) for file in folder.files]
    return data
