import io
from datetime import datetime

import pytz

from file_api.models import File, Folder
from file_api.resources import merge_listing


def _folder(id_, slug, parent_id=None, parent_folder=None):
    return Folder(
        id=id_,
        name=slug.title(),
        slug=slug,
        parent_id=parent_id,
        parent_folder=parent_folder,
        created_at=datetime(2024, 1, 1, 15, 4),
    )


def _file(id_, name, mime, size):
    return File(
        id=id_,
        name=name,
        slug=name.split(".")[0],
        mime_type=mime,
        url=f"/storage/{name}",
        path=name,
        size=size,
        folder_id=None,
        created_at=datetime(2024, 2, 29, 9, 30),
    )


def test_folders_come_first_in_input_order(storage):
    children = [_folder(2, "beta"), _folder(1, "alpha")]
    files = [
        _file(10, "z.pdf", "application/pdf", 10),
        _file(11, "a.png", "image/png", 2048),
        _file(12, "m.mp4", "video/mp4", 1073741824),
    ]

    listing = merge_listing(children, files, storage, pytz.utc)

    assert len(listing) == 5
    assert [item["type"] for item in listing] == [
        "folder",
        "folder",
        "application",
        "image",
        "video",
    ]
    assert [item["id"] for item in listing] == [2, 1, 10, 11, 12]


def test_folder_item_counts_files_recursively(storage):
    storage.put_file("docs/a.txt", io.BytesIO(b"a"))
    storage.put_file("docs/sub/b.txt", io.BytesIO(b"b"))
    storage.put_file("other/c.txt", io.BytesIO(b"c"))

    (item,) = merge_listing([_folder(1, "docs")], [], storage, pytz.utc)

    assert item == {
        "id": 1,
        "name": "Docs",
        "slug": "docs",
        "type": "folder",
        "parent_id": None,
        "parent_folder": None,
        "items": 2,
        "createdAt": "Mon, Jan 1, 2024 3:04 PM",
    }


def test_nested_folder_uses_parent_path(storage):
    storage.put_file("docs/sub/b.txt", io.BytesIO(b"b"))

    (item,) = merge_listing([_folder(2, "sub", 1, "docs")], [], storage, pytz.utc)

    assert item["items"] == 1


def test_file_item_shape(storage):
    (item,) = merge_listing([], [_file(7, "a.png", "image/png", 1536)], storage, pytz.utc)

    assert item == {
        "id": 7,
        "name": "a.png",
        "slug": "a",
        "type": "image",
        "url": "/storage/a.png",
        "path": "a.png",
        "folder_id": None,
        "size": "1.5 KiB",
        "createdAt": "Thu, Feb 29, 2024 9:30 AM",
    }


def test_file_without_mime_type(storage):
    (item,) = merge_listing([], [_file(8, "blob", None, 0)], storage, pytz.utc)
    assert item["type"] == "file"
    assert item["size"] == "0 B"


def test_created_at_uses_configured_timezone(storage):
    tz = pytz.timezone("Asia/Tokyo")
    (item,) = merge_listing([_folder(1, "docs")], [], storage, tz)
    assert item["createdAt"] == "Tue, Jan 2, 2024 12:04 AM"
