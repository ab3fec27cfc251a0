# toolkit/api/routes/tool_routes.py

from __future__ import annotations

from flask import Blueprint, current_app, request

from toolkit.core.alphabet import Alphabet
from toolkit.core.exceptions import AppError
from toolkit.tools import Tools

bp_tools = Blueprint("tools", __name__)

MAX_RANDOM_LENGTH = 1024


def _tools() -> Tools:
    return current_app.extensions["toolkit"]


def _alphabet_from_args() -> Alphabet:
    raw = (request.args.get("alphabet") or "").strip().lower()
    if not raw:
        return Alphabet.ALL

    alphabet = Alphabet(0)
    for part in raw.split(","):
        part = part.strip()
        try:
            alphabet |= Alphabet[part.upper()]
        except KeyError:
            raise AppError(f"Alfabeto inválido: '{part}'.")
    return alphabet


@bp_tools.get("/random-string")
def get_random_string():
    try:
        length = int(request.args.get("length", 25))
    except ValueError:
        raise AppError("Parâmetro 'length' deve ser inteiro.")

    if length < 0 or length > MAX_RANDOM_LENGTH:
        raise AppError(f"Parâmetro 'length' deve estar entre 0 e {MAX_RANDOM_LENGTH}.")

    tools = _tools()
    alphabet = _alphabet_from_args()
    if not alphabet:
        raise AppError("Alfabeto vazio.")

    return tools.write_json({"value": tools.random_string(length, alphabet)})


@bp_tools.get("/slugify")
def get_slug():
    tools = _tools()
    slug = tools.slugify(request.args.get("s", ""))
    return tools.write_json({"slug": slug})
