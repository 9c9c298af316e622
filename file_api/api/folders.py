from __future__ import annotations

from flask import Blueprint, current_app, jsonify, request

from file_api.extensions import db
from file_api.models import Folder
from file_api.resources import app_timezone, folder_resource, merge_listing
from file_api.services import folder_service
from file_api.storage import get_storage
from file_api.utils.validators import (
    as_list,
    int_list,
    optional_int,
    parse_positive_int,
    payload,
    require,
)

bp = Blueprint("folders", __name__)


@bp.get("/folder")
def index():
    """Root folders, newest first, with their direct children and files."""

    limit = parse_positive_int(
        request.args.get("limit"),
        current_app.config.get("FOLDER_LIST_LIMIT", 10),
        upper=current_app.config.get("FOLDER_LIST_MAX_LIMIT"),
    )
    tz = app_timezone()
    folders = folder_service.list_folders(limit)
    return jsonify(data=[folder_resource(folder, tz) for folder in folders]), 200


@bp.post("/folder")
def store():
    data = payload()
    require(data, "name")
    folder = folder_service.create_folder(
        str(data["name"]),
        parent_id=optional_int(data, "parent_id"),
        parent_folder=data.get("parent_folder"),
    )
    return (
        jsonify(
            data=folder_resource(folder, app_timezone(), nested=False),
            message="Successfully Created.",
        ),
        200,
    )


@bp.get("/folder/<int:folder_id>")
def show(folder_id: int):
    folder = db.get_or_404(Folder, folder_id)
    children, files = folder_service.folder_contents(folder)
    return jsonify(data=merge_listing(children, files, get_storage(), app_timezone())), 200


@bp.post("/folder/<int:folder_id>")
def update(folder_id: int):
    folder = db.get_or_404(Folder, folder_id)
    data = payload()
    require(data, "name")
    folder = folder_service.update_folder(
        folder,
        str(data["name"]),
        parent_id=optional_int(data, "parent_id"),
        parent_folder=data.get("parent_folder"),
    )
    return (
        jsonify(
            data=folder_resource(folder, app_timezone(), nested=False),
            message="Successfully Updated.",
        ),
        200,
    )


@bp.delete("/folder")
def destroy():
    data = payload()
    require(data, "folder_names", "folder_ids")
    names = [str(name) for name in as_list(data["folder_names"]) if str(name).strip("/ ")]
    folder_service.delete_folders(names, int_list(data, "folder_ids"))
    return jsonify(message="Successfully Deleted"), 200
