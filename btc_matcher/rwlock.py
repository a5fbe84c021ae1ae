"""Read-write lock guarding the resting sell pool."""

import threading
import time
from contextlib import contextmanager
from typing import Optional


class RWLock:
    """
    Many concurrent readers or one writer.

    Waiting writers block new readers so a steady stream of book reads
    cannot starve order submission.
    """

    def __init__(self):
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writers_waiting = 0
        self._writer_active = False

    def _wait(self, blocked, deadline: Optional[float]) -> bool:
        """Wait on the condition until ``blocked()`` is false or the deadline passes."""
        while blocked():
            if deadline is None:
                self._cond.wait()
                continue
            remaining = deadline - time.monotonic()
            if remaining <= 0 or not self._cond.wait(timeout=remaining):
                return not blocked()
        return True

    def acquire_read(self, timeout: Optional[float] = None) -> bool:
        deadline = None if timeout is None else time.monotonic() + timeout
        with self._cond:
            if not self._wait(lambda: self._writer_active or self._writers_waiting > 0, deadline):
                return False
            self._readers += 1
            return True

    def release_read(self) -> None:
        with self._cond:
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    def acquire_write(self, timeout: Optional[float] = None) -> bool:
        deadline = None if timeout is None else time.monotonic() + timeout
        with self._cond:
            self._writers_waiting += 1
            try:
                if not self._wait(lambda: self._readers > 0 or self._writer_active, deadline):
                    return False
                self._writer_active = True
                return True
            finally:
                self._writers_waiting -= 1
                # A writer giving up may unblock readers queued behind it
                self._cond.notify_all()

    def release_write(self) -> None:
        with self._cond:
            self._writer_active = False
            self._cond.notify_all()

    @contextmanager
    def read(self):
        """Context manager for the read side."""
        self.acquire_read()
        try:
            yield
        finally:
            self.release_read()

    @contextmanager
    def write(self):
        """Context manager for the write side."""
        self.acquire_write()
        try:
            yield
        finally:
            self.release_write()
