from .config import Config
from .exceptions import (
    CopyError,
    DecodeError,
    InvalidParametersError,
    InvalidSourceError,
    JsonStoreError,
    ShapeError,
    WriteError,
)
from .storage.json_file import decode_document, load_document
from .storage.json_store import JsonCollection, JsonStore, find_by_key
from .storage.matching import loosely_equal


def create_store(config_class: type[Config] = Config) -> JsonStore:
    return JsonStore(
        config_class.DATA_DIR,
        indent=config_class.JSON_INDENT,
        atomic_writes=config_class.ATOMIC_WRITES,
    )


__all__ = [
    "Config",
    "CopyError",
    "DecodeError",
    "InvalidParametersError",
    "InvalidSourceError",
    "JsonCollection",
    "JsonStore",
    "JsonStoreError",
    "ShapeError",
    "WriteError",
    "create_store",
    "decode_document",
    "find_by_key",
    "load_document",
    "loosely_equal",
]
