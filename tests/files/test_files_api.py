import io

from file_api.extensions import db
from file_api.models import File


def test_upload_into_folder(client, make_folder, upload, storage):
    folder = make_folder("Photos")

    data = upload("Holiday Pic.JPG", b"\xff\xd8" + b"0" * 98, folder=folder)

    assert data["folder_id"] == folder["id"]
    assert data["path"] == "photos/Holiday_Pic.JPG"
    assert data["url"] == "/storage/photos/Holiday_Pic.JPG"
    assert data["name"] == "Holiday Pic.JPG"
    assert data["slug"] == "holiday-pic"
    assert data["mime_type"] == "image/jpeg"
    assert data["size"] == 100
    assert (storage.root / "photos" / "Holiday_Pic.JPG").read_bytes().startswith(b"\xff\xd8")


def test_upload_at_root(upload, storage):
    data = upload("notes.txt", b"hi")

    assert data["folder_id"] is None
    assert data["path"] == "notes.txt"
    assert (storage.root / "notes.txt").read_bytes() == b"hi"


def test_duplicate_names_are_numbered(make_folder, upload):
    folder = make_folder("Docs")

    first = upload("report.pdf", folder=folder)
    second = upload("report.pdf", folder=folder)

    assert first["path"] == "docs/report.pdf"
    assert second["path"] == "docs/report-1.pdf"


def test_upload_requires_file(client):
    res = client.post("/api/file", data={}, content_type="multipart/form-data")
    assert res.status_code == 422
    assert "file" in res.get_json()["errors"]


def test_upload_rejects_unknown_folder(client):
    res = client.post(
        "/api/file",
        data={"file": (io.BytesIO(b"x"), "x.txt"), "folder_id": "404"},
        content_type="multipart/form-data",
    )
    assert res.status_code == 422
    assert "folder_id" in res.get_json()["errors"]


def test_upload_removes_written_file_when_row_fails(client, storage, monkeypatch):
    def broken_url(path):
        raise RuntimeError("url service down")

    monkeypatch.setattr(storage, "url", broken_url)

    res = client.post(
        "/api/file",
        data={"file": (io.BytesIO(b"data"), "lost.txt")},
        content_type="multipart/form-data",
    )

    assert res.status_code == 400
    assert res.get_json()["error"] == "url service down"
    assert not (storage.root / "lost.txt").exists()
    assert File.query.count() == 0


def test_delete_file(client, upload, storage):
    data = upload("bye.txt", b"bye")

    res = client.delete(f"/api/file/{data['id']}")

    assert res.status_code == 200
    assert res.get_json() == {"message": "Successfully Deleted"}
    assert not (storage.root / "bye.txt").exists()
    db.session.expire_all()
    assert db.session.get(File, data["id"]) is None


def test_delete_unknown_file_is_404(client):
    assert client.delete("/api/file/77").status_code == 404


def test_delete_file_rolls_back_when_storage_fails(client, upload, storage, monkeypatch):
    data = upload("stay.txt", b"stay")

    def boom(path):
        raise PermissionError("read-only filesystem")

    monkeypatch.setattr(storage, "delete", boom)

    res = client.delete(f"/api/file/{data['id']}")

    assert res.status_code == 400
    db.session.expire_all()
    assert db.session.get(File, data["id"]) is not None


def test_deleting_folder_removes_its_files(client, make_folder, upload, storage):
    folder = make_folder("Box")
    data = upload("item.txt", folder=folder)

    res = client.delete("/api/folder", json={"folder_names": "box", "folder_ids": [folder["id"]]})

    assert res.status_code == 200
    db.session.expire_all()
    assert db.session.get(File, data["id"]) is None
    assert not (storage.root / "box").exists()
