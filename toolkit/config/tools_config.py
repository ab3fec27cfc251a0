# toolkit/config/tools_config.py
from __future__ import annotations

from dataclasses import dataclass, field

from toolkit.config.settings import DEFAULT_MAX_JSON_BYTES, DEFAULT_MAX_UPLOAD_BYTES, Settings


@dataclass
class ToolsConfig:
    """Políticas de upload e JSON.

    Ajuste antes de atender requisições; durante o atendimento é tratado
    como somente leitura.
    """

    max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES
    allowed_mime_types: set[str] = field(default_factory=set)  # vazio = aceita tudo
    max_json_bytes: int = DEFAULT_MAX_JSON_BYTES
    allow_unknown_json_fields: bool = False

    @classmethod
    def from_settings(cls, settings: Settings) -> "ToolsConfig":
        return cls(
            max_upload_bytes=settings.max_upload_bytes,
            allowed_mime_types=settings.allowed_mime_types,
            max_json_bytes=settings.max_json_bytes,
            allow_unknown_json_fields=settings.allow_unknown_json_fields,
        )
