"""Concurrency-safe record of authenticated sessions."""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager


class ReadWriteLock:
    """Many concurrent readers or one writer.

    Writers take priority: once a writer is waiting, new readers block until
    it has finished, so a steady stream of reads cannot starve a write.
    """

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writers_waiting = 0
        self._writing = False

    @contextmanager
    def read(self) -> Iterator[None]:
        with self._cond:
            while self._writing or self._writers_waiting:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if not self._readers:
                    self._cond.notify_all()

    @contextmanager
    def write(self) -> Iterator[None]:
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writing or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writing = True
        try:
            yield
        finally:
            with self._cond:
                self._writing = False
                self._cond.notify_all()


class AuthorizationGate:
    """Set of session ids that have presented valid credentials.

    Ids are only ever added; an authorized session stays authorized until the
    process exits.
    """

    def __init__(self) -> None:
        self._authorized: set[int] = set()
        self._lock = ReadWriteLock()

    def is_authorized(self, session_id: int) -> bool:
        with self._lock.read():
            return session_id in self._authorized

    def grant(self, session_id: int) -> None:
        """Mark ``session_id`` as authorized. Granting twice is a no-op."""
        with self._lock.write():
            self._authorized.add(session_id)
