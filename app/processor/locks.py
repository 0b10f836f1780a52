import threading
import weakref
from collections.abc import Generator
from contextlib import contextmanager


class ContainerLocks:
    """One lock per container id; runs against the same sheet are serialized in-process.

    Entries live only while a run holds or waits on them, so a long-lived
    process does not accumulate a lock per sheet it has ever seen.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: weakref.WeakValueDictionary[str, threading.Lock] = (
            weakref.WeakValueDictionary()
        )

    @contextmanager
    def hold(self, container_id: str) -> Generator[None, None, None]:
        with self._guard:
            lock = self._locks.get(container_id)
            if lock is None:
                lock = threading.Lock()
                self._locks[container_id] = lock
        with lock:
            yield

    def __len__(self) -> int:
        return len(self._locks)
