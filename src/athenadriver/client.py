import logging
from typing import TYPE_CHECKING

from botocore.exceptions import ClientError

from athenadriver.constants import Metrics
from athenadriver.exc import InterfaceError, NotSupportedError
from athenadriver.telemetry.tracer import DriverTracer
from athenadriver.workgroup import Workgroup, get_wg

if TYPE_CHECKING:
    from athenadriver.connector import SQLConnector

logger = logging.getLogger(__name__)


def _is_workgroup_not_found(error: ClientError) -> bool:
    err = error.response.get("Error", {})
    return (
        err.get("Code") == "InvalidRequestException"
        and "not found" in str(err.get("Message", "")).lower()
    )


class Connection:
    """
    One logical database connection.

    The Athena client is borrowed from the connector's client cache and is
    shared with other connections, so closing a Connection never closes it.
    """

    def __init__(self, athena_client, connector: "SQLConnector", tracer: DriverTracer):
        self.athena_client = athena_client
        self.connector = connector
        self.tracer = tracer
        self._open = True

    # The ideal return type for this method is perhaps Self, but that was not added until 3.11, and we support pre-3.11 pythons, currently.
    def __enter__(self) -> "Connection":
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()

    @property
    def open(self) -> bool:
        return self._open

    @property
    def config(self):
        return self.connector.config

    def close(self) -> None:
        if not self._open:
            logger.debug("Connection appears to have been closed already")
            return
        self._open = False
        self.athena_client = None

    def commit(self) -> None:
        """Athena has no transactions, every statement is committed on its own."""
        self._check_open("commit")

    def rollback(self) -> None:
        self._check_open("rollback")
        raise NotSupportedError("Transactions are not supported by Athena")

    def ensure_workgroup(self) -> bool:
        """
        Make sure the configured workgroup exists when remote workgroup creation
        is enabled.

        Returns True if the workgroup was created by this call.
        """
        self._check_open("ensure workgroup")
        if not self.config.wg_remote_creation:
            return False

        name = self.config.workgroup_name
        try:
            get_wg(self.athena_client, name)
            return False
        except ClientError as e:
            if not _is_workgroup_not_found(e):
                self.tracer.scope().counter(Metrics.WORKGROUP_GET_FAILURE).inc(1)
                self.tracer.logger.error("Failed to get workgroup %s: %s", name, e)
                raise

        Workgroup.new_default(name).create_wg_remotely(self.athena_client)
        self.tracer.scope().counter(Metrics.WORKGROUP_CREATED).inc(1)
        self.tracer.logger.info("Created workgroup %s", name)
        return True

    def _check_open(self, operation: str) -> None:
        if not self._open:
            raise InterfaceError(
                "Cannot {} on closed connection".format(operation),
                context={"operation": operation},
            )
