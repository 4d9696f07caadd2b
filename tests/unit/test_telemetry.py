import logging
import threading

from athenadriver.config import Config
from athenadriver.telemetry import DriverTracer, InMemoryScope, NoopScope


class TestNoopScope:
    def test_noop_scope_behavior(self):
        """NoopScope is a singleton and all its instruments are safe no-ops."""
        scope1 = NoopScope()
        scope2 = NoopScope()
        assert scope1 is scope2

        scope1.counter("a").inc(1)
        scope1.timer("b").record(0.5)


class TestInMemoryScope:
    def test_counters_and_timers(self):
        scope = InMemoryScope()
        scope.counter("failures").inc()
        scope.counter("failures").inc(2)
        scope.timer("connect").record(0.25)

        assert scope.counter_value("failures") == 3
        assert scope.counter_value("unknown") == 0
        assert scope.timer_values("connect") == [0.25]
        assert scope.snapshot() == {
            "counters": {"failures": 3},
            "timers": {"connect": [0.25]},
        }

    def test_concurrent_increments(self):
        scope = InMemoryScope()

        def worker():
            for _ in range(1000):
                scope.counter("hits").inc()

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert scope.counter_value("hits") == 8000


class TestDriverTracer:
    def test_enabled_by_config(self):
        tracer = DriverTracer(Config())
        assert isinstance(tracer.scope(), InMemoryScope)
        assert tracer.logger is logging.getLogger("athenadriver")

    def test_disabled_by_config(self):
        tracer = DriverTracer(Config(logging_enabled=False, metrics_enabled=False))
        assert isinstance(tracer.scope(), NoopScope)
        assert tracer.logger.disabled

    def test_noop(self):
        tracer = DriverTracer.noop()
        assert isinstance(tracer.scope(), NoopScope)
        assert tracer.logger.disabled

    def test_with_overrides(self):
        base = DriverTracer(Config())
        scope = InMemoryScope()
        custom = logging.getLogger("test.custom")

        assert base.with_overrides(scope=scope).scope() is scope
        assert base.with_overrides(scope=scope).logger is base.logger
        assert base.with_overrides(logger=custom).logger is custom
        assert base.with_overrides(logger=custom).scope() is base.scope()
        assert base.scope() is not scope
