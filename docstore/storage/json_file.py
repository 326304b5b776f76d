"""Whole-file JSON codec: read, decode, encode, write and copy documents."""
from pathlib import Path
import json
import logging
import os
import shutil
import tempfile
from typing import Any, Union

from ..exceptions import CopyError, DecodeError, WriteError

logger = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]

# Decoded in place of a missing file
EMPTY_DOCUMENT = "{}"


def _reject_constant(name: str):
    raise DecodeError(f"Error decoding JSON: {name} is not a valid JSON number")


def decode_document(text: str) -> Any:
    try:
        return json.loads(text, parse_constant=_reject_constant)
    except json.JSONDecodeError as e:
        raise DecodeError(f"Error decoding JSON: {e}") from e


def read_text(path: PathLike) -> str:
    p = Path(path)
    if not p.exists():
        return EMPTY_DOCUMENT
    try:
        return p.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise DecodeError(f"Error decoding JSON: {e}") from e


def load_document(path: PathLike) -> Any:
    """Decode the JSON document at ``path``; a missing file decodes as ``{}``."""
    return decode_document(read_text(path))


def encode_document(data: Any, indent: int = 4) -> str:
    return json.dumps(data, indent=indent, ensure_ascii=False, allow_nan=False)


def dump_document(path: PathLike, data: Any, indent: int = 4, atomic: bool = True) -> Path:
    """Encode ``data`` and overwrite the file at ``path`` with it.

    Encoding happens before the file is opened, so data that cannot be
    written as UTF-8 JSON leaves the target untouched. With ``atomic`` the
    bytes go to a temporary file in the same directory that is renamed over
    the target, so readers see either the old or the new document. Without
    it the target is truncated and rewritten.
    """
    p = Path(path)
    try:
        payload = encode_document(data, indent=indent).encode("utf-8")
    except (ValueError, UnicodeError) as e:
        logger.error("Encoding %s failed: %s", p, e)
        raise WriteError(f"Error saving JSON to file: {p}: {e}") from e
    try:
        if atomic:
            _write_atomic(p, payload)
        else:
            p.write_bytes(payload)
    except OSError as e:
        logger.error("Writing %s failed: %s", p, e)
        raise WriteError(f"Error saving JSON to file: {p}") from e
    logger.debug("Wrote %d bytes to %s", len(payload), p)
    return p


def _new_file_mode() -> int:
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def _write_atomic(p: Path, payload: bytes) -> None:
    fd, tmp = tempfile.mkstemp(prefix=f".{p.name}.", suffix=".tmp", dir=p.parent)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(payload)
        # mkstemp creates 0600; keep the target's mode or the umask default
        if p.exists():
            shutil.copymode(p, tmp)
        else:
            os.chmod(tmp, _new_file_mode())
        os.replace(tmp, p)
    except BaseException:
        if os.path.exists(tmp):
            os.unlink(tmp)
        raise


def copy_document(src: PathLike, dst: PathLike) -> Path:
    """Byte-for-byte copy of ``src`` onto ``dst``."""
    try:
        shutil.copyfile(src, dst)
    except OSError as e:
        logger.error("Copying %s to %s failed: %s", src, dst, e)
        raise CopyError(f"Error copying JSON file {src} to {dst}") from e
    return Path(dst)
