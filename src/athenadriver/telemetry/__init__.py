from athenadriver.telemetry.scope import (
    BaseScope,
    Counter,
    InMemoryScope,
    NoopScope,
    Timer,
)
from athenadriver.telemetry.tracer import DriverTracer

__all__ = [
    "BaseScope",
    "Counter",
    "DriverTracer",
    "InMemoryScope",
    "NoopScope",
    "Timer",
]
