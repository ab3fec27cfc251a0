# toolkit/api/routes/__init__.py

from flask import Flask

from toolkit.api.routes.health_routes import bp_health
from toolkit.api.routes.file_routes import bp_files
from toolkit.api.routes.json_routes import bp_json
from toolkit.api.routes.tool_routes import bp_tools


def register_routes(app: Flask, *, api_prefix: str, app_prefix: str) -> None:
    # health fora de /api (mas dentro do app)
    app.register_blueprint(bp_health, url_prefix=f"{app_prefix}/health")

    app.register_blueprint(bp_files, url_prefix=f"{api_prefix}/files")
    app.register_blueprint(bp_json, url_prefix=f"{api_prefix}/json")
    app.register_blueprint(bp_tools, url_prefix=f"{api_prefix}/tools")
