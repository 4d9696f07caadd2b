import logging
from typing import Optional, TYPE_CHECKING

from athenadriver.constants import DRIVER_NAME
from athenadriver.telemetry.scope import BaseScope, InMemoryScope, NoopScope

if TYPE_CHECKING:
    from athenadriver.config import Config

logger = logging.getLogger(__name__)


def _disabled_logger() -> logging.Logger:
    noop_logger = logging.getLogger(DRIVER_NAME + ".noop")
    if not noop_logger.handlers:
        noop_logger.addHandler(logging.NullHandler())
    noop_logger.propagate = False
    noop_logger.disabled = True
    return noop_logger


class DriverTracer:
    """
    Bundles the metrics scope and the logger the driver reports to.

    Both default from the Config (disabled logging or metrics get no-op
    implementations) and can be replaced per connect call.
    """

    def __init__(self, config: Optional["Config"] = None):
        if config is not None and config.metrics_enabled:
            self._scope: BaseScope = InMemoryScope()
        else:
            self._scope = NoopScope()

        if config is not None and config.logging_enabled:
            self._logger = logging.getLogger(DRIVER_NAME)
        else:
            self._logger = _disabled_logger()

    @classmethod
    def noop(cls) -> "DriverTracer":
        return cls(None)

    def with_overrides(
        self,
        scope: Optional[BaseScope] = None,
        logger: Optional[logging.Logger] = None,
    ) -> "DriverTracer":
        """Copy of this tracer with the given scope and/or logger swapped in."""
        tracer = DriverTracer.noop()
        tracer.set_scope(scope if scope is not None else self._scope)
        tracer.set_logger(logger if logger is not None else self._logger)
        return tracer

    def scope(self) -> BaseScope:
        return self._scope

    def set_scope(self, scope: BaseScope) -> None:
        self._scope = scope

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    def set_logger(self, new_logger: logging.Logger) -> None:
        self._logger = new_logger
