# toolkit/api/middlewares/error_handler.py
import structlog
from flask import Flask, current_app
from werkzeug.exceptions import HTTPException

from toolkit.core.exceptions import AppError
from toolkit.tools import Tools

logger = structlog.get_logger(__name__)


def _tools() -> Tools:
    return current_app.extensions["toolkit"]


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(AppError)
    def handle_app_error(err: AppError):
        return _tools().error_json(err, status=err.status_code)

    @app.errorhandler(HTTPException)
    def handle_http_exception(err: HTTPException):
        return _tools().error_json(err.description or err.name, status=err.code or 500)

    @app.errorhandler(Exception)
    def handle_unexpected_error(err: Exception):
        logger.exception("unhandled_error", error=str(err))

        if current_app.debug:
            return _tools().error_json(err, status=500)  # mostra a msg em dev

        return _tools().error_json("Internal server error", status=500)
