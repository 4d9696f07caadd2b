import logging
import threading
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional, Tuple

logger = logging.getLogger(__name__)


class ReadWriteLock:
    """
    Reader/writer lock: any number of readers, or a single writer.
    Waiting writers block new readers so inserts are not starved.
    """

    def __init__(self):
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    def acquire_read(self) -> None:
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1

    def release_read(self) -> None:
        with self._cond:
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    def acquire_write(self) -> None:
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = True

    def release_write(self) -> None:
        with self._cond:
            self._writer = False
            self._cond.notify_all()

    @contextmanager
    def read_locked(self) -> Iterator[None]:
        self.acquire_read()
        try:
            yield
        finally:
            self.release_read()

    @contextmanager
    def write_locked(self) -> Iterator[None]:
        self.acquire_write()
        try:
            yield
        finally:
            self.release_write()


class ClientCache:
    """
    Process-wide map from client cache key (region#profile#accessid) to an
    Athena client, shared by every connection.

    Lookups take the read lock only, inserts take the write lock only, and
    clients are built by the caller with no lock held. Two callers that miss
    on the same key at the same time will therefore both build a client and
    the later insert replaces the earlier one. Both clients are equivalent and
    usable, so this is accepted rather than serialising client construction.

    Entries are never evicted.
    """

    _default: Optional["ClientCache"] = None
    _default_lock = threading.Lock()

    def __init__(self):
        self._lock = ReadWriteLock()
        self._clients: Dict[str, Any] = {}

    @classmethod
    def default(cls) -> "ClientCache":
        """The cache shared by connectors that are not given one explicitly."""
        if cls._default is None:
            with cls._default_lock:
                if cls._default is None:
                    cls._default = cls()
        return cls._default

    def lookup(self, key: str) -> Tuple[Optional[Any], bool]:
        with self._lock.read_locked():
            client = self._clients.get(key)
        if client is None:
            logger.debug("Client cache miss for %s", key)
            return None, False
        logger.debug("Client cache hit for %s", key)
        return client, True

    def insert(self, key: str, client: Any) -> None:
        if client is None:
            raise ValueError("Cannot cache a None client for key {}".format(key))
        with self._lock.write_locked():
            replaced = key in self._clients
            self._clients[key] = client
        if replaced:
            logger.debug("Replaced concurrently built client for %s", key)

    def __contains__(self, key: str) -> bool:
        with self._lock.read_locked():
            return key in self._clients

    def __len__(self) -> int:
        with self._lock.read_locked():
            return len(self._clients)

    def keys(self) -> List[str]:
        with self._lock.read_locked():
            return list(self._clients)
