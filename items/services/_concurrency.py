from __future__ import annotations

import threading
from contextlib import contextmanager
from functools import wraps


class ReadWriteLock:
    """Many readers or one writer; a waiting writer blocks new readers."""

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    @contextmanager
    def read(self):
        with self._cond:
            while self._writer or self._writers_waiting:
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
    def write(self):
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()


def reading(fn):
    @wraps(fn)
    def wrapper(self, *args, **kwargs):
        with self.lock.read():
            return fn(self, *args, **kwargs)

    return wrapper


def writing(fn):
    @wraps(fn)
    def wrapper(self, *args, **kwargs):
        with self.lock.write():
            return fn(self, *args, **kwargs)

    return wrapper
