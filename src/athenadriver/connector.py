import logging
import time
from typing import Optional

from botocore.config import Config as BotoConfig
from botocore.exceptions import BotoCoreError

from athenadriver import USER_AGENT_NAME, __version__
from athenadriver.auth.auth import SessionFactory, load_session, resolve_auth
from athenadriver.client import Connection
from athenadriver.client_cache import ClientCache
from athenadriver.config import Config
from athenadriver.constants import ATHENA_SERVICE_NAME, Metrics
from athenadriver.exc import SessionCreationError
from athenadriver.telemetry.scope import BaseScope
from athenadriver.telemetry.tracer import DriverTracer

logger = logging.getLogger(__name__)


class SQLConnector:
    """
    Turns a Config into Connections, reusing Athena clients through a
    ClientCache.

    Credentials are looked for in this order:
    1. AWS_SDK_LOAD_CONFIG set to true: the SDK default chain (shared
       config/credentials files, instance metadata, AWS_* variables), scoped to
       the configured profile if any.
    2. A configured access id: static credentials in the configured region.
    3. Otherwise: the SDK default chain in the configured region.
    """

    def __init__(
        self,
        config: Config,
        client_cache: Optional[ClientCache] = None,
        session_factory: Optional[SessionFactory] = None,
        tracer: Optional[DriverTracer] = None,
    ):
        self.config = config
        self.client_cache = client_cache if client_cache is not None else ClientCache.default()
        self.session_factory = session_factory
        self.tracer = tracer if tracer is not None else DriverTracer(config)

    @classmethod
    def noop(cls, client_cache: Optional[ClientCache] = None) -> "SQLConnector":
        """Connector with a no-op configuration and tracer, for callers that do
        not want real connectivity."""
        logger.debug("Creating no-op connector")
        return cls(
            Config.no_ops(),
            client_cache=client_cache if client_cache is not None else ClientCache(),
            tracer=DriverTracer.noop(),
        )

    def connect(
        self,
        scope: Optional[BaseScope] = None,
        logger: Optional[logging.Logger] = None,
    ) -> Connection:
        """
        Create a Connection.

        Loading the AWS configuration and building the Athena client happen
        with no cache lock held and cannot be cancelled or timed out from here;
        callers that need a bound should run connect in an executor with a
        timeout. Two concurrent calls that miss on the same cache key may each
        build a client; both are usable and the cache keeps whichever is
        inserted last.

        Args:
            scope: Metrics scope to report to for this call instead of the
                connector's default.
            logger: Logger to use for this call instead of the connector's default.

        Raises:
            SessionCreationError: The AWS configuration could not be loaded or
                the Athena client could not be built. Nothing is cached then.
        """
        start_time = time.monotonic()
        tracer = self.tracer.with_overrides(scope=scope, logger=logger)

        resolved = resolve_auth(self.config)
        tracer.logger.debug(
            "Resolved %s credentials, cache key %s",
            resolved.strategy.value,
            resolved.cache_key,
        )

        athena_client, found = self.client_cache.lookup(resolved.cache_key)
        if not found:
            # No lock is held here: loading config may touch files and the network.
            try:
                session = load_session(resolved, self.session_factory)
                athena_client = session.client(
                    ATHENA_SERVICE_NAME, config=self._boto_config()
                )
            except BotoCoreError as e:
                tracer.scope().counter(Metrics.NEW_SESSION_FAILURE).inc(1)
                tracer.logger.error(
                    "Failed to create AWS session (%s): %s", resolved.strategy.value, e
                )
                raise SessionCreationError(
                    "Failed to create AWS session: {}".format(e),
                    context={
                        "strategy": resolved.strategy.value,
                        "cache-key": resolved.cache_key,
                        "original-exception": e,
                    },
                ) from e

            self.client_cache.insert(resolved.cache_key, athena_client)
            tracer.logger.info("Created Athena client for %s", resolved.cache_key)

        connection = Connection(athena_client, self, tracer)
        tracer.scope().timer(Metrics.CONNECT_TIMER).record(
            time.monotonic() - start_time
        )
        return connection

    def _boto_config(self) -> BotoConfig:
        if self.config.user_agent_entry:
            user_agent_extra = "{}/{} ({})".format(
                USER_AGENT_NAME, __version__, self.config.user_agent_entry
            )
        else:
            user_agent_extra = "{}/{}".format(USER_AGENT_NAME, __version__)
        return BotoConfig(user_agent_extra=user_agent_extra)
