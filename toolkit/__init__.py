from toolkit.config.tools_config import ToolsConfig
from toolkit.core.alphabet import Alphabet
from toolkit.core.envelope import JSONResponse
from toolkit.core.exceptions import (
    AppError,
    DirectoryCreateError,
    DisallowedFileTypeError,
    EmptyBodyError,
    EmptyInputError,
    EmptySlugError,
    InvalidFileNameError,
    InvalidMultipartError,
    JSONDecodeFailedError,
    JSONError,
    JSONSerializationError,
    JSONTooLargeError,
    JSONTypeMismatchError,
    MalformedJSONError,
    MultipleJSONValuesError,
    NoFileUploadedError,
    NotFoundError,
    PersistenceError,
    RemotePushError,
    SlugError,
    TooManyFilesError,
    UnknownJSONFieldError,
    UploadError,
    UploadTooLargeError,
)
from toolkit.infrastructure.storage.file_storage import UploadedFile
from toolkit.tools import Tools

__all__ = [
    "Alphabet",
    "AppError",
    "DirectoryCreateError",
    "DisallowedFileTypeError",
    "EmptyBodyError",
    "EmptyInputError",
    "EmptySlugError",
    "InvalidFileNameError",
    "InvalidMultipartError",
    "JSONDecodeFailedError",
    "JSONError",
    "JSONResponse",
    "JSONSerializationError",
    "JSONTooLargeError",
    "JSONTypeMismatchError",
    "MalformedJSONError",
    "MultipleJSONValuesError",
    "NoFileUploadedError",
    "NotFoundError",
    "PersistenceError",
    "RemotePushError",
    "SlugError",
    "TooManyFilesError",
    "Tools",
    "ToolsConfig",
    "UnknownJSONFieldError",
    "UploadError",
    "UploadTooLargeError",
    "UploadedFile",
]
