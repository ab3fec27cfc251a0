# toolkit/main.py
from __future__ import annotations

from flask import Flask
from flask_cors import CORS

from toolkit.api.middlewares.error_handler import register_error_handlers
from toolkit.api.routes import register_routes
from toolkit.config.flask_config import configure_app
from toolkit.config.logging_config import configure_logging
from toolkit.config.settings import Settings, settings as default_settings
from toolkit.tools import Tools


def create_app(settings: Settings | None = None) -> Flask:
    settings = settings or default_settings

    configure_logging(settings.log_level)

    app_prefix = settings.app_prefix.rstrip("/")
    api_prefix = f"{app_prefix}/api"

    app = Flask(__name__)

    CORS(
        app,
        resources={
            rf"{api_prefix}/*": {
                "origins": [
                    "http://localhost:5173",
                    "http://127.0.0.1:5173",
                ]
            }
        },
        allow_headers=["Content-Type", "Authorization"],
        methods=["GET", "POST", "OPTIONS"],
        expose_headers=["Content-Disposition"],
    )

    configure_app(app, settings)

    app.extensions["toolkit"] = Tools.from_settings(settings)

    register_routes(app, api_prefix=api_prefix, app_prefix=app_prefix)

    register_error_handlers(app)

    return app


if __name__ == "__main__":
    create_app().run(host="0.0.0.0", port=5000, debug=default_settings.debug)
