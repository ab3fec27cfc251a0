# toolkit/api/routes/file_routes.py

from __future__ import annotations

from flask import Blueprint, current_app, request

from toolkit.api.schemas.file_schema import UploadFileResponse, UploadFilesResponse
from toolkit.tools import Tools

bp_files = Blueprint("files", __name__)


# -------------------------
# Helpers
# -------------------------

def _tools() -> Tools:
    return current_app.extensions["toolkit"]


def _upload_dir() -> str:
    return current_app.config["FILES_BASE_PATH"]


def _rename() -> bool:
    # ?rename=false mantém o nome original
    return request.args.get("rename", "true").strip().lower() not in ("0", "false", "no")


# -------------------------
# Upload
# -------------------------

@bp_files.post("/upload")
def upload_files():
    tools = _tools()
    uploaded = tools.upload_files(request, _upload_dir(), rename=_rename())

    payload = UploadFilesResponse(files=[UploadFileResponse.from_uploaded(f) for f in uploaded])
    return tools.write_json(payload, status=201)


@bp_files.post("/upload-one")
def upload_one_file():
    tools = _tools()
    uploaded = tools.upload_one_file(request, _upload_dir(), rename=_rename())

    return tools.write_json(UploadFileResponse.from_uploaded(uploaded), status=201)


# -------------------------
# Download
# -------------------------

@bp_files.get("/download/<path:file_name>")
def download_file(file_name: str):
    display_name = request.args.get("name") or file_name
    return _tools().download_static_file(request, _upload_dir(), file_name, display_name)
