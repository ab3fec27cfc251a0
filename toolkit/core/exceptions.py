# toolkit/core/exceptions.py
from __future__ import annotations

from typing import Any


class AppError(Exception):
    def __init__(self, message: str, *, status_code: int = 400) -> None:
        super().__init__(message)
        self.status_code = status_code


class NotFoundError(AppError):
    def __init__(self, message: str = "Recurso não encontrado.") -> None:
        super().__init__(message, status_code=404)


# -------------------------
# Upload
# -------------------------

class UploadError(AppError):
    """Falha no pipeline de upload.

    ``uploaded`` guarda os arquivos já gravados antes da falha; quem precisa
    de tudo-ou-nada deve descartá-los.
    """

    def __init__(self, message: str, *, status_code: int = 400, uploaded: list[Any] | None = None) -> None:
        super().__init__(message, status_code=status_code)
        self.uploaded = list(uploaded or [])


class UploadTooLargeError(UploadError):
    def __init__(self, max_bytes: int) -> None:
        super().__init__(f"O upload excede o limite de {max_bytes} bytes.", status_code=413)
        self.max_bytes = max_bytes


class InvalidMultipartError(UploadError):
    def __init__(self, message: str = "A requisição não é um multipart/form-data válido.") -> None:
        super().__init__(message)


class DisallowedFileTypeError(UploadError):
    def __init__(self, content_type: str) -> None:
        super().__init__(f"Tipo de arquivo não permitido: '{content_type}'.", status_code=415)
        self.content_type = content_type


class InvalidFileNameError(UploadError):
    def __init__(self, file_name: str) -> None:
        super().__init__(f"Nome de arquivo inválido: '{file_name}'.")
        self.file_name = file_name


class DirectoryCreateError(UploadError):
    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Falha ao criar diretório '{path}': {reason}", status_code=500)
        self.path = path


class PersistenceError(UploadError):
    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Falha ao gravar arquivo '{path}': {reason}", status_code=500)
        self.path = path


class NoFileUploadedError(UploadError):
    def __init__(self) -> None:
        super().__init__("Nenhum arquivo enviado.")


class TooManyFilesError(UploadError):
    def __init__(self, count: int) -> None:
        super().__init__(f"Esperado exatamente um arquivo, recebidos {count}.")
        self.count = count


# -------------------------
# JSON
# -------------------------

class JSONError(AppError):
    pass


class MalformedJSONError(JSONError):
    def __init__(self, offset: int | None = None) -> None:
        if offset is None:
            message = "O corpo contém JSON mal formado."
        else:
            message = f"O corpo contém JSON mal formado (no caractere {offset})."
        super().__init__(message)
        self.offset = offset


class JSONTypeMismatchError(JSONError):
    def __init__(self, field: str | None = None, offset: int | None = None) -> None:
        if field:
            message = f"O corpo contém um tipo JSON incorreto para o campo '{field}'."
        elif offset is not None:
            message = f"O corpo contém um tipo JSON incorreto (no caractere {offset})."
        else:
            message = "O corpo contém um tipo JSON incorreto."
        super().__init__(message)
        self.field = field
        self.offset = offset


class EmptyBodyError(JSONError):
    def __init__(self) -> None:
        super().__init__("O corpo não pode ser vazio.")


class UnknownJSONFieldError(JSONError):
    def __init__(self, field: str) -> None:
        super().__init__(f"O corpo contém a chave desconhecida '{field}'.")
        self.field = field


class JSONTooLargeError(JSONError):
    def __init__(self, max_bytes: int) -> None:
        super().__init__(f"O corpo não pode ser maior que {max_bytes} bytes.", status_code=413)
        self.max_bytes = max_bytes


class MultipleJSONValuesError(JSONError):
    def __init__(self) -> None:
        super().__init__("O corpo deve conter um único valor JSON.")


class JSONDecodeFailedError(JSONError):
    pass


class JSONSerializationError(JSONError):
    def __init__(self, reason: str) -> None:
        super().__init__(f"Falha ao serializar resposta JSON: {reason}", status_code=500)


# -------------------------
# Slug
# -------------------------

class SlugError(AppError):
    pass


class EmptyInputError(SlugError):
    def __init__(self) -> None:
        super().__init__("String vazia não permitida.")


class EmptySlugError(SlugError):
    def __init__(self) -> None:
        super().__init__("Após remover os caracteres, o slug ficou vazio.")


# -------------------------
# Remoto
# -------------------------

class RemotePushError(AppError):
    def __init__(self, uri: str, reason: str) -> None:
        super().__init__(f"Falha ao enviar JSON para '{uri}': {reason}", status_code=502)
        self.uri = uri
