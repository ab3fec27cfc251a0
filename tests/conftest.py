import io

import pytest
from werkzeug.test import EnvironBuilder
from werkzeug.wrappers import Request

from toolkit.config.settings import Settings
from toolkit.config.tools_config import ToolsConfig
from toolkit.main import create_app
from toolkit.tools import Tools


@pytest.fixture
def upload_dir(tmp_path):
    # ainda não existe: o pipeline cria
    return tmp_path / "uploads" / "nested"


@pytest.fixture
def config():
    return ToolsConfig()


@pytest.fixture
def tools(config):
    return Tools(config)


@pytest.fixture
def multipart_request():
    def _build(files: dict, form: dict | None = None) -> Request:
        data = dict(form or {})
        for field, value in files.items():
            if isinstance(value, list):
                data[field] = [(io.BytesIO(content), name) for name, content in value]
            else:
                name, content = value
                data[field] = (io.BytesIO(content), name)
        builder = EnvironBuilder(method="POST", data=data, content_type="multipart/form-data")
        return Request(builder.get_environ())

    return _build


@pytest.fixture
def json_request():
    def _build(body: bytes | str, content_type: str = "application/json") -> Request:
        if isinstance(body, str):
            body = body.encode("utf-8")
        builder = EnvironBuilder(method="POST", data=body, content_type=content_type)
        return Request(builder.get_environ())

    return _build


@pytest.fixture
def app_settings(tmp_path):
    return Settings(
        files_base_path=str(tmp_path / "files"),
        allowed_mime_types_raw="image/png, image/jpeg",
        max_json_bytes=1024,
        max_upload_bytes=64 * 1024,
        debug=False,
        environment="test",
        app_prefix="",
    )


@pytest.fixture
def client(app_settings):
    app = create_app(app_settings)
    app.config["TESTING"] = True
    with app.test_client() as test_client:
        yield test_client
