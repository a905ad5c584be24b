"""Common plumbing for the JSON-file-backed repositories.

Each collection is one JSON file holding a list of documents. Every read
and every read-modify-write runs under two locks: a thread lock shared by
all repository instances of this process that point at the same file, and
a ``filelock`` sidecar (``<collection>.json.lock``) shared with every other
process using the same data directory. Together they give the repositories
their atomic primitives (get-or-create, compare-and-swap, increment).

Writes go to a temporary file that then replaces the original, so a
crash mid-write never leaves a truncated collection behind.
"""

from __future__ import annotations

import json
import os
import threading
import time
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from filelock import FileLock, Timeout

from crowdprice.domain.exceptions import UnavailableError

_LOCKS: dict[Path, tuple[threading.RLock, FileLock]] = {}
_LOCKS_GUARD = threading.Lock()


def _locks_for(path: Path) -> tuple[threading.RLock, FileLock]:
    with _LOCKS_GUARD:
        locks = _LOCKS.get(path)
        if locks is None:
            # The thread lock already serializes this process, so one
            # file lock state is shared by all of its threads.
            file_lock = FileLock(str(path) + ".lock", thread_local=False)
            locks = _LOCKS[path] = (threading.RLock(), file_lock)
        return locks


class JsonDocumentStore:

    def __init__(self, file_path: Path, timeout: float = 5.0) -> None:
        self._file_path = file_path.resolve()
        self._timeout = timeout
        try:
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise UnavailableError(
                f"Cannot create {self._file_path.parent}: {exc}"
            ) from exc
        self._thread_lock, self._file_lock = _locks_for(self._file_path)
        self._ensure_file()

    # --- Access helpers -------------------------------------------------------

    def _read(self) -> list[dict]:
        with self._locked():
            return self._load_raw()

    @contextmanager
    def _transaction(self) -> Iterator[list[dict]]:
        """Yield the documents for in-place edits and persist them on exit.

        Nothing is written if the block raises.
        """
        with self._locked():
            records = self._load_raw()
            yield records
            self._persist_raw(records)

    @contextmanager
    def _locked(self) -> Iterator[None]:
        """Hold the collection exclusively, within ``timeout`` seconds overall."""
        deadline = time.monotonic() + self._timeout
        if not self._thread_lock.acquire(timeout=self._timeout):
            raise self._timed_out()
        try:
            try:
                self._file_lock.acquire(timeout=max(0.0, deadline - time.monotonic()))
            except Timeout as exc:
                raise self._timed_out() from exc
            try:
                yield
            finally:
                self._file_lock.release()
        finally:
            self._thread_lock.release()

    def _timed_out(self) -> UnavailableError:
        return UnavailableError(
            f"Timed out after {self._timeout}s waiting for {self._file_path.name}"
        )

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> list[dict]:
        try:
            return json.loads(self._file_path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise UnavailableError(f"Cannot read {self._file_path}: {exc}") from exc

    def _persist_raw(self, records: list[dict]) -> None:
        temp_path = self._file_path.with_name(self._file_path.name + ".tmp")
        try:
            temp_path.write_text(json.dumps(records, indent=2) + "\n", encoding="utf-8")
            os.replace(temp_path, self._file_path)
        except OSError as exc:
            temp_path.unlink(missing_ok=True)
            raise UnavailableError(f"Cannot write {self._file_path}: {exc}") from exc

    def _ensure_file(self) -> None:
        with self._locked():
            if not self._file_path.exists():
                try:
                    self._file_path.write_text("[]", encoding="utf-8")
                except OSError as exc:
                    raise UnavailableError(
                        f"Cannot create {self._file_path}: {exc}"
                    ) from exc
