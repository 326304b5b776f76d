from pathlib import Path
import json
import logging
import os
from typing import Any, Dict, List, Optional, Union

from ..exceptions import InvalidParametersError, InvalidSourceError, ShapeError
from .json_file import (
    PathLike,
    copy_document,
    decode_document,
    dump_document,
    load_document,
)
from .matching import matches

logger = logging.getLogger(__name__)

Record = Dict[str, Any]
Document = Union[List[Any], Dict[str, Any]]

SHAPES = {"list": list, "mapping": dict}


def _normalize(data: Any) -> Document:
    # Missing files decode as {} and scalars carry no records
    if isinstance(data, (list, dict)):
        return data
    return []


def _search(node: Any, key: str, value: Any, results: List[Any]) -> None:
    if isinstance(node, dict):
        children = node.values()
    elif isinstance(node, list):
        children = node
    else:
        return
    for child in children:
        if matches(child, key, value):
            results.append(child)
        _search(child, key, value, results)


def search_document(data: Any, key: str, value: Any) -> List[Any]:
    """Depth-first search collecting every nested mapping whose ``key`` matches.

    A matching mapping is collected and then searched for matching
    descendants as well. The root is only traversed, never collected.
    """
    results: List[Any] = []
    _search(data, key, value, results)
    return results


def find_by_key(source: PathLike, key: str, value: Any) -> List[Any]:
    """Find matches in a JSON file or a raw JSON string."""
    if isinstance(source, os.PathLike):
        if not os.path.isfile(source):
            raise InvalidSourceError(f"No such JSON file: {source}")
        data = load_document(source)
    elif isinstance(source, str):
        if os.path.isfile(source):
            data = load_document(source)
        else:
            try:
                data = decode_document(source)
            except ValueError as e:
                raise InvalidSourceError(
                    "Invalid data source provided. Must be JSON string or valid file path."
                ) from e
    else:
        raise InvalidSourceError(
            f"Invalid data source of type {type(source).__name__}. "
            "Must be JSON string or valid file path."
        )
    return search_document(data, key, value)


def _sort_key(record: Any, key: str):
    value = record.get(key) if isinstance(record, dict) else None
    if value is None:
        return (0, 0)
    if isinstance(value, (bool, int, float)):
        return (1, value)
    if isinstance(value, str):
        return (2, value)
    return (3, json.dumps(value, sort_keys=True))


def merge_documents(current: Document, incoming: Document) -> Document:
    """Concatenate two lists or overlay two mappings (incoming keys win)."""
    if not isinstance(incoming, (list, dict)):
        raise ShapeError(f"Cannot merge a JSON {type(incoming).__name__}")
    if not current:
        return list(incoming) if isinstance(incoming, list) else dict(incoming)
    if not incoming:
        return current
    if isinstance(current, list) and isinstance(incoming, list):
        return current + incoming
    if isinstance(current, dict) and isinstance(incoming, dict):
        merged = dict(current)
        merged.update(incoming)
        return merged
    raise ShapeError("Cannot merge records into named locations (or the reverse)")


class JsonCollection:
    """A record collection persisted as one JSON document.

    The handle keeps only the path: every call re-reads the file, so changes
    made by other handles, other processes or :meth:`restore` are always seen.
    There is no locking; concurrent writers race and the last full rewrite
    wins.
    """

    def __init__(
        self,
        path: PathLike,
        *,
        shape: Optional[str] = None,
        indent: int = 4,
        atomic_writes: bool = True,
    ):
        if shape is not None and shape not in SHAPES:
            raise ValueError(f"shape must be one of {sorted(SHAPES)}, got {shape!r}")
        self.path = Path(path)
        self.shape = shape
        self.indent = indent
        self.atomic_writes = atomic_writes

    def __repr__(self) -> str:
        return f"JsonCollection({str(self.path)!r})"

    def _check_shape(self, data: Document):
        if self.shape and data and not isinstance(data, SHAPES[self.shape]):
            raise ShapeError(
                f"{self.path}: got a JSON {type(data).__name__} where a {self.shape} is expected"
            )

    def _load(self) -> Document:
        data = _normalize(load_document(self.path))
        self._check_shape(data)
        return data

    def _records(self) -> List[Any]:
        data = self._load()
        if isinstance(data, dict):
            if data:
                raise ShapeError(f"{self.path} holds named locations, not a flat list of records")
            return []
        return data

    def _store(self, data: Document):
        self._check_shape(data)
        dump_document(self.path, data, indent=self.indent, atomic=self.atomic_writes)

    def get_all(self) -> Document:
        return self._load()

    def save(
        self,
        record: Record,
        is_update: bool = False,
        location: Optional[str] = None,
        match_key: Optional[str] = None,
        match_value: Any = None,
    ):
        """Append ``record``, or upsert it into ``location``.

        The upsert path runs only when ``is_update`` is set and ``location``,
        ``match_key`` and ``match_value`` are all given. The first record in
        ``location`` whose ``match_key`` loosely equals ``match_value`` gets
        ``record``'s fields overlaid on its own; when nothing matches
        ``record`` is appended to the location, and a missing location is
        created holding just ``record``.
        """
        upsert = is_update and None not in (location, match_key, match_value)
        if not upsert:
            records = self._records()
            records.append(record)
            self._store(records)
            logger.debug("Appended record to %s (%d total)", self.path, len(records))
            return

        data = self._load()
        if isinstance(data, list):
            if data:
                raise ShapeError(f"{self.path} holds a flat list of records, not named locations")
            data = {}

        bucket = data.get(location)
        if isinstance(bucket, list):
            for i, existing in enumerate(bucket):
                if matches(existing, match_key, match_value):
                    bucket[i] = {**existing, **record}
                    logger.debug("Updated %s[%s] where %s=%r", self.path, location, match_key, match_value)
                    break
            else:
                bucket.append(record)
        else:
            data[location] = [record]
        self._store(data)

    def find_by_key(self, key: str, value: Any) -> List[Any]:
        return search_document(self._load(), key, value)

    def delete_by_key(self, key: str, value: Any) -> int:
        """Remove every top-level record matching ``key``/``value``; returns how many."""
        records = self._records()
        kept = [item for item in records if not matches(item, key, value)]
        removed = len(records) - len(kept)
        self._store(kept)
        if removed:
            logger.info("Deleted %d record(s) from %s where %s=%r", removed, self.path, key, value)
        return removed

    def count(self) -> int:
        return len(self._load())

    def sort_by_key(self, key: str) -> List[Any]:
        """Records ordered by ``key``: missing/null first, then numbers, strings, the rest."""
        return sorted(self._records(), key=lambda r: _sort_key(r, key))

    def paginate(self, per_page: int, page: int) -> List[Any]:
        for v in (per_page, page):
            if not isinstance(v, int) or isinstance(v, bool) or v <= 0:
                raise InvalidParametersError("Invalid pagination parameters")
        offset = (page - 1) * per_page
        return self._records()[offset:offset + per_page]

    def merge_from_file(self, other_path: PathLike):
        if not os.path.isfile(other_path):
            raise InvalidSourceError(f"Cannot merge missing JSON file: {other_path}")
        self.merge_from_array(load_document(other_path))
        logger.info("Merged %s into %s", other_path, self.path)

    def merge_from_array(self, records: Document):
        self._store(merge_documents(self._load(), records))

    def backup(self, dest_path: PathLike) -> Path:
        dest = copy_document(self.path, dest_path)
        logger.info("Backed up %s to %s", self.path, dest)
        return dest

    def restore(self, backup_path: PathLike):
        copy_document(backup_path, self.path)
        logger.info("Restored %s from %s", self.path, backup_path)


class JsonStore:
    """JSON-on-disk collections: one file per collection."""

    def __init__(self, data_dir: PathLike, indent: int = 4, atomic_writes: bool = True):
        self.data_dir = Path(data_dir)
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self.indent = indent
        self.atomic_writes = atomic_writes

    def _path(self, collection: str) -> Path:
        return self.data_dir / f"{collection}.json"

    def collection(self, name: str, shape: Optional[str] = None) -> JsonCollection:
        return JsonCollection(
            self._path(name),
            shape=shape,
            indent=self.indent,
            atomic_writes=self.atomic_writes,
        )

    def names(self) -> List[str]:
        return sorted(p.stem for p in self.data_dir.glob("*.json"))
