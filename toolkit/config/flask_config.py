from flask import Flask

from toolkit.config.settings import Settings


def configure_app(app: Flask, settings: Settings) -> None:
    app.config["ENV"] = settings.environment
    app.config["DEBUG"] = settings.debug
    app.config["FILES_BASE_PATH"] = settings.files_base_path
    # o próprio Flask recusa corpos acima do limite de upload
    app.config["MAX_CONTENT_LENGTH"] = settings.max_upload_bytes
