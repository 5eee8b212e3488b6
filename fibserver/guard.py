import threading
from contextlib import contextmanager
from typing import Generic, Iterator, TypeVar

T = TypeVar("T")


# A guard-ot egy hibával kilépő tulajdonos mérgezte meg
class LockError(Exception):
    pass


# A védett érték módosítása előtt dobott hiba, nem mérgezi a guard-ot
class Aborted(Exception):
    pass


class Mutex(Generic[T]):
    def __init__(self, value: T):
        self._lock = threading.Lock()
        self._value = value
        self._poisoned = False

    @property
    def poisoned(self) -> bool:
        return self._poisoned

    @contextmanager
    def lock(self) -> Iterator[T]:
        with self._lock:
            if self._poisoned:
                raise LockError("mutex poisoned")
            try:
                yield self._value
            except Aborted:
                raise
            except BaseException:
                self._poisoned = True
                raise

    def clear_poison(self) -> None:
        with self._lock:
            self._poisoned = False


# Több olvasó vagy egyetlen író; a várakozó író elsőbbséget kap
class RWLock(Generic[T]):
    def __init__(self, value: T):
        self._cond = threading.Condition(threading.Lock())
        self._value = value
        self._readers = 0
        self._writer = False
        self._waiting_writers = 0
        self._poisoned = False

    @property
    def poisoned(self) -> bool:
        return self._poisoned

    @contextmanager
    def read(self) -> Iterator[T]:
        with self._cond:
            while self._writer or self._waiting_writers:
                self._cond.wait()
            if self._poisoned:
                raise LockError("rwlock poisoned")
            self._readers += 1
        try:
            yield self._value
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextmanager
    def write(self) -> Iterator[T]:
        with self._cond:
            self._waiting_writers += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._waiting_writers -= 1
            if self._poisoned:
                # olvasók várhatnak ránk
                self._cond.notify_all()
                raise LockError("rwlock poisoned")
            self._writer = True

        failed = False
        try:
            yield self._value
        except Aborted:
            raise
        except BaseException:
            failed = True
            raise
        finally:
            with self._cond:
                if failed:
                    self._poisoned = True
                self._writer = False
                self._cond.notify_all()

    def clear_poison(self) -> None:
        with self._cond:
            self._poisoned = False
