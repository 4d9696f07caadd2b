import threading
import logging
from abc import ABC, abstractmethod
from collections import defaultdict
from typing import Dict, List

logger = logging.getLogger(__name__)


class Counter(ABC):
    @abstractmethod
    def inc(self, delta: int = 1) -> None:
        pass


class Timer(ABC):
    @abstractmethod
    def record(self, seconds: float) -> None:
        pass


class BaseScope(ABC):
    """
    Base class for metrics scopes.
    A scope hands out named counters and timers; where the values go is up to
    the implementation.
    """

    @abstractmethod
    def counter(self, name: str) -> Counter:
        logger.debug("subclass must implement counter")
        pass

    @abstractmethod
    def timer(self, name: str) -> Timer:
        logger.debug("subclass must implement timer")
        pass


class _NoopCounter(Counter):
    def inc(self, delta: int = 1) -> None:
        pass


class _NoopTimer(Timer):
    def record(self, seconds: float) -> None:
        pass


class NoopScope(BaseScope):
    """
    NoopScope is a metrics scope that drops every value.
    It is used when metrics are disabled.
    """

    _instance = None
    _lock = threading.RLock()

    def __new__(cls):
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = super(NoopScope, cls).__new__(cls)
        return cls._instance

    def counter(self, name: str) -> Counter:
        return _NoopCounter()

    def timer(self, name: str) -> Timer:
        return _NoopTimer()


class _InMemoryCounter(Counter):
    def __init__(self, scope: "InMemoryScope", name: str):
        self._scope = scope
        self._name = name

    def inc(self, delta: int = 1) -> None:
        with self._scope._lock:
            self._scope._counters[self._name] += delta


class _InMemoryTimer(Timer):
    def __init__(self, scope: "InMemoryScope", name: str):
        self._scope = scope
        self._name = name

    def record(self, seconds: float) -> None:
        with self._scope._lock:
            self._scope._timers[self._name].append(seconds)
        logger.debug("%s took %.3fs", self._name, seconds)


class InMemoryScope(BaseScope):
    """
    Metrics scope that keeps counter totals and timer samples in process.
    Safe to share between threads.
    """

    def __init__(self):
        self._lock = threading.RLock()
        self._counters: Dict[str, int] = defaultdict(int)
        self._timers: Dict[str, List[float]] = defaultdict(list)

    def counter(self, name: str) -> Counter:
        return _InMemoryCounter(self, name)

    def timer(self, name: str) -> Timer:
        return _InMemoryTimer(self, name)

    def counter_value(self, name: str) -> int:
        with self._lock:
            return self._counters.get(name, 0)

    def timer_values(self, name: str) -> List[float]:
        with self._lock:
            return list(self._timers.get(name, []))

    def snapshot(self) -> Dict[str, Dict]:
        """Copy of everything recorded so far."""
        with self._lock:
            return {
                "counters": dict(self._counters),
                "timers": {k: list(v) for k, v in self._timers.items()},
            }
