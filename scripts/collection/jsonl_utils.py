"""
JSONL utilities for the file-backed item store.

Provides locked JSONL reading/writing with error handling. Writers serialize
on an exclusive fcntl lock held on a sibling ``.lock`` file, so appends never
interleave lines and a compaction (load, rewrite, replace) cannot drop an
append that arrives mid-way. Readers take a shared lock on the log itself and
always see either the old or the replaced file.
"""

import json
import os
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Iterable, Iterator, List
import fcntl


class JSONLReader:
    """Read JSONL logs with error handling."""

    @staticmethod
    def read_log(path: Path) -> List[dict]:
        """
        Read every object entry of a JSONL file.

        Args:
            path: Path to JSONL file

        Returns:
            List of dict entries; empty if the file does not exist
        """
        if not path.exists():
            return []

        entries = []
        with open(path, 'r') as f:
            try:
                fcntl.flock(f.fileno(), fcntl.LOCK_SH)
                lines = f.readlines()
            finally:
                fcntl.flock(f.fileno(), fcntl.LOCK_UN)

        for line_num, line in enumerate(lines, 1):
            line = line.strip()
            if not line:
                continue
            try:
                entry = json.loads(line)
            except json.JSONDecodeError as e:
                # Skip malformed line but keep reading
                print(f"Warning: Malformed JSON at {path}:{line_num}: {e}",
                      file=sys.stderr)
                continue

            if not isinstance(entry, dict):
                print(f"Warning: Ignoring non-object entry at {path}:{line_num}",
                      file=sys.stderr)
                continue

            entries.append(entry)

        return entries


class JSONLWriter:
    """JSONL writer with file locking."""

    def __init__(self, path: Path):
        """
        Initialize writer.

        Args:
            path: Path to JSONL file
        """
        self.path = Path(path)
        self.lock_path = self.path.with_suffix(self.path.suffix + '.lock')
        self.path.parent.mkdir(parents=True, exist_ok=True)

    @contextmanager
    def locked(self) -> Iterator[None]:
        """
        Hold the exclusive writer lock for this log.

        The lock is not re-entrant: call ``append``/``append_batch`` outside
        of it and ``rewrite`` inside it.
        """
        with open(self.lock_path, 'a') as lock_file:
            try:
                fcntl.flock(lock_file.fileno(), fcntl.LOCK_EX)
                yield
            finally:
                fcntl.flock(lock_file.fileno(), fcntl.LOCK_UN)

    def append(self, data: dict):
        """
        Atomically append entry to JSONL file.

        Args:
            data: Dictionary to append as JSON line
        """
        self.append_batch([data])

    def append_batch(self, data_list: Iterable[dict]):
        """
        Atomically append multiple entries.

        Args:
            data_list: Dictionaries to append
        """
        data_list = list(data_list)
        if not data_list:
            return

        with self.locked():
            # Opened under the lock so a concurrent rewrite has already replaced the file
            with open(self.path, 'a') as f:
                for data in data_list:
                    f.write(json.dumps(data, ensure_ascii=False, default=str) + '\n')
                f.flush()

    def rewrite(self, data_list: Iterable[dict]):
        """
        Replace the file contents with ``data_list``.

        Must be called inside ``locked()`` together with the read that
        produced ``data_list``. Writes to a temporary sibling first and
        renames it into place; the temporary file is removed on failure.
        """
        tmp_path = self.path.with_suffix(self.path.suffix + '.tmp')
        try:
            with open(tmp_path, 'w') as f:
                for data in data_list:
                    f.write(json.dumps(data, ensure_ascii=False, default=str) + '\n')
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, self.path)
        except Exception:
            if tmp_path.exists():
                tmp_path.unlink()
            raise
