"""Persist and load media records (one JSON document)."""
import json
import logging
import os
import tempfile
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List

from echochamber.models.media import MediaRecord

logger = logging.getLogger(__name__)


class RecordStore:
    """
    Flat-file store: the whole document is an array of record objects.
    Every read and write touches the full file; there is no cache.
    Mutating callers hold lock() across their read-modify-write cycle.
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        self._lock = threading.RLock()

    def initialize(self) -> None:
        """Create the data dir and an empty document if missing."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        if not self.path.exists():
            logger.info("Creating default record store: %s", self.path)
            self.write([])

    @contextmanager
    def lock(self) -> Iterator[None]:
        with self._lock:
            yield

    def read(self) -> List[MediaRecord]:
        """Load all records; missing or corrupt documents read as empty."""
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning("Could not read %s, using empty store: %s", self.path, e)
            return []
        if not isinstance(data, list):
            logger.warning("%s does not hold a list, using empty store", self.path)
            return []
        out = []
        for item in data:
            try:
                out.append(MediaRecord.from_dict(item))
            except (KeyError, TypeError, ValueError, OverflowError) as e:
                logger.warning("Skipping malformed record in %s: %s", self.path, e)
                continue
        return out

    def write(self, records: List[MediaRecord]) -> bool:
        """Replace the document with records. Returns False on I/O error."""
        payload = json.dumps([r.to_dict() for r in records], indent=4)
        tmp_name = None
        try:
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
            os.replace(tmp_name, self.path)
            return True
        except OSError as e:
            logger.error("Failed to write %s: %s", self.path, e)
            if tmp_name is not None:
                try:
                    os.unlink(tmp_name)
                except OSError:
                    pass
            return False
