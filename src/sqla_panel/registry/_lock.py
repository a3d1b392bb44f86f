"""Reader/writer lock for read-mostly shared state."""

from __future__ import annotations

import contextlib
import threading
from collections.abc import Generator

__all__ = ["ReadWriteLock"]


class ReadWriteLock:
    """Many concurrent readers, one writer at a time.

    Writers are preferred: once a writer is waiting, new readers block
    until it has finished, so startup registration is never starved by
    request traffic.
    """

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    @contextlib.contextmanager
    def read(self) -> Generator[None, None, None]:
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextlib.contextmanager
    def write(self) -> Generator[None, None, None]:
        with self._cond:
            self._writers_waiting += 1
            while self._writer or self._readers:
                self._cond.wait()
            self._writers_waiting -= 1
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()
