import io
import os
import sys
from pathlib import Path

import pytest


PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from file_api import create_app, db


@pytest.fixture()
def app(tmp_path):
    os.environ.setdefault("FLASK_ENV", "testing")
    os.environ.setdefault("APP_ENV", "testing")

    flask_app = create_app(
        "testing",
        {
            "STORAGE_ROOT": str(tmp_path / "storage"),
            "STORAGE_URL": "/storage",
            "ROUTE_PREFIX": "/api",
            "ROUTE_MIDDLEWARE": [],
            "APP_TZ": "UTC",
            "SLUG_LANGUAGE": "en",
        },
    )

    with flask_app.app_context():
        db.create_all()
        try:
            yield flask_app
        finally:
            db.session.remove()
            db.drop_all()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def runner(app):
    return app.test_cli_runner()


@pytest.fixture()
def storage(app):
    return app.extensions["storage"]


@pytest.fixture()
def make_folder(client):
    def _mk(name: str, parent: dict | None = None) -> dict:
        body = {"name": name}
        if parent is not None:
            body["parent_id"] = parent["id"]
            body["parent_folder"] = (
                f"{parent['parent_folder']}/{parent['slug']}"
                if parent.get("parent_id")
                else parent["slug"]
            )
        res = client.post("/api/folder", json=body)
        assert res.status_code == 200, res.get_json()
        return res.get_json()["data"]

    return _mk


@pytest.fixture()
def upload(client):
    def _up(filename: str, content: bytes = b"hello", folder: dict | None = None) -> dict:
        data = {"file": (io.BytesIO(content), filename)}
        if folder is not None:
            data["folder_id"] = str(folder["id"])
        res = client.post("/api/file", data=data, content_type="multipart/form-data")
        assert res.status_code == 200, res.get_json()
        return res.get_json()["data"]

    return _up
