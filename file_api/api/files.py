from __future__ import annotations

from flask import Blueprint, jsonify, request

from file_api.errors import ValidationError
from file_api.extensions import db
from file_api.models import File
from file_api.resources import app_timezone, file_resource
from file_api.services import file_service
from file_api.utils.validators import optional_int

bp = Blueprint("files", __name__)


@bp.post("/file")
def store():
    upload = request.files.get("file")
    if upload is None or not upload.filename:
        raise ValidationError.single("file", "The file field is required.")
    record = file_service.upload_file(upload, folder_id=optional_int(request.form, "folder_id"))
    return (
        jsonify(data=file_resource(record, app_timezone()), message="Successfully Uploaded."),
        200,
    )


@bp.delete("/file/<int:file_id>")
def destroy(file_id: int):
    record = db.get_or_404(File, file_id)
    file_service.delete_file(record)
    return jsonify(message="Successfully Deleted"), 200
