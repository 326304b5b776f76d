import logging
import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r: not an integer, using %d", name, raw, default)
        return default


class Config:
    # Relative to the working directory unless DOCSTORE_DATA_DIR is set
    DATA_DIR = Path(os.getenv("DOCSTORE_DATA_DIR", "data"))
    JSON_INDENT = _env_int("DOCSTORE_JSON_INDENT", 4)
    ATOMIC_WRITES = _env_flag("DOCSTORE_ATOMIC_WRITES", "true")


class TestingConfig(Config):
    JSON_INDENT = 2
