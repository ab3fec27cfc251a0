# toolkit/api/routes/json_routes.py

from __future__ import annotations

from flask import Blueprint, current_app, request

from toolkit.api.schemas.json_schema import EchoRequest
from toolkit.core.envelope import JSONResponse
from toolkit.tools import Tools

bp_json = Blueprint("json", __name__)


def _tools() -> Tools:
    return current_app.extensions["toolkit"]


@bp_json.post("/echo")
def echo():
    """
    Lê o corpo no modo estrito e devolve o payload dentro do envelope.
    """
    tools = _tools()
    payload = tools.read_json(request, EchoRequest)

    response = JSONResponse(
        error=False,
        message=f"Ação '{payload.action}' recebida.",
        data=payload.model_dump(),
    )
    return tools.write_json(response.to_payload(), status=202)
