"""
JSON-backed Record Collection

An ordered, in-memory list of records of one model type, mirrored to a
JSON array file after every mutation.

Behaviour:
- The file (and its directory) is created with ``[]`` on first use
- Unreadable or malformed files load as an empty collection
- IDs continue from the highest ID found at load time
- Writes are guarded by a sidecar file lock
- Write failures are logged; memory is never rolled back
"""

import json
import logging
from pathlib import Path
from typing import Any, Callable, Generic, Iterator, Optional, TypeVar, Union

from filelock import FileLock, Timeout
from pydantic import TypeAdapter, ValidationError

from ristoword.models import Record

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=Record)

EMPTY_ARRAY = "[]"


def _ensure_file(path: Path) -> None:
    """Create the parent directory and an empty array file if needed."""
    if not path.parent.exists():
        path.parent.mkdir(parents=True, exist_ok=True)
        logger.info(f"Created data directory: {path.parent}")
    if not path.exists():
        path.write_text(EMPTY_ARRAY, encoding="utf-8")
        logger.info(f"Created data file: {path}")


def load_records(path: Path, record_type: type[RecordT]) -> list[RecordT]:
    """
    Read every record stored in ``path``.

    Any failure (I/O, JSON syntax, non-array content, an entry that does
    not validate) is logged and yields an empty list. Malformed entries
    are never skipped individually.
    """
    try:
        _ensure_file(path)
        raw = path.read_text(encoding="utf-8")
        parsed = json.loads(raw)
    except (OSError, ValueError, RecursionError) as e:
        logger.error(f"Error reading {path}: {e}")
        return []

    if not isinstance(parsed, list):
        logger.error(f"Error reading {path}: expected a JSON array, got {type(parsed).__name__}")
        return []

    try:
        return TypeAdapter(list[record_type]).validate_python(parsed)
    except ValidationError as e:
        logger.error(f"Error reading {path}: {e.error_count()} invalid entries")
        return []


def next_id(records: list[Record]) -> int:
    """1 for an empty collection, otherwise the highest ID plus one."""
    if not records:
        return 1
    return max(record.id for record in records) + 1


class JsonCollection(Generic[RecordT]):
    """
    Records of one type, keyed by integer ID and persisted as a JSON array.

    The next ID is computed once here and only incremented afterwards, so
    IDs keep growing for the life of the process.
    """

    def __init__(
        self,
        path: Union[str, Path],
        record_type: type[RecordT],
        lock_timeout: float = 10,
    ):
        self.path = Path(path)
        self.record_type = record_type
        self.lock_timeout = lock_timeout
        self.lock_path = self.path.with_name(self.path.name + ".lock")

        self._records: list[RecordT] = load_records(self.path, record_type)
        self._next_id = next_id(self._records)

        logger.info(
            f"Loaded {len(self._records)} {record_type.__name__} record(s) "
            f"from {self.path} (next id: {self._next_id})"
        )

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[RecordT]:
        return iter(self._records)

    @property
    def next_id(self) -> int:
        return self._next_id

    def all(self) -> list[RecordT]:
        """All records in insertion order."""
        return list(self._records)

    def find(self, record_id: int) -> Optional[RecordT]:
        for record in self._records:
            if record.id == record_id:
                return record
        return None

    def append(self, fields: dict[str, Any]) -> RecordT:
        """
        Store a new record built from ``fields`` under the next ID.

        Args:
            fields: Record fields, without ``id``

        Returns:
            The stored record
        """
        record = self.record_type(id=self._next_id, **fields)
        self._next_id += 1

        self._records.append(record)
        self.persist()
        return record

    def update(
        self,
        record_id: int,
        mutator: Callable[[RecordT], None],
    ) -> Optional[RecordT]:
        """
        Apply ``mutator`` to the record with ``record_id`` and persist.

        Returns:
            The updated record, or None when the ID is unknown (nothing
            is written in that case)
        """
        record = self.find(record_id)
        if record is None:
            return None

        mutator(record)
        self.persist()
        return record

    def persist(self) -> bool:
        """
        Overwrite the backing file with the full collection.

        Returns:
            True if the file was written, False if the write failed
        """
        payload = json.dumps(
            [record.to_json() for record in self._records],
            indent=2,
            ensure_ascii=False,
        )

        try:
            _ensure_file(self.path)
            with FileLock(str(self.lock_path), timeout=self.lock_timeout):
                self.path.write_text(payload, encoding="utf-8")
        except Timeout:
            logger.error(f"Lock timeout ({self.lock_timeout}s) saving {self.path}")
            return False
        except OSError:
            logger.exception(f"Error saving {self.path}")
            return False

        logger.debug(f"Saved {len(self._records)} record(s) to {self.path}")
        return True
