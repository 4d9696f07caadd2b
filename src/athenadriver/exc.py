import json
import logging

logger = logging.getLogger(__name__)

### PEP-249 Mandated ###
# https://peps.python.org/pep-0249/#exceptions
class Error(Exception):
    """Base class for DB-API2.0 exceptions.
    `message`: An optional user-friendly error message. It should be short, actionable and stable
    `context`: Optional extra context about the error. MUST be JSON serializable
    """

    def __init__(self, message=None, context=None, *args, **kwargs):
        super().__init__(message, *args, **kwargs)
        self.message = message
        self.context = context or {}

    def __str__(self):
        return str(self.message)

    def message_with_context(self):
        return str(self.message) + ": " + json.dumps(self.context, default=str)


class Warning(Exception):
    pass


class InterfaceError(Error):
    pass


class DatabaseError(Error):
    pass


class InternalError(DatabaseError):
    pass


class OperationalError(DatabaseError):
    pass


class ProgrammingError(DatabaseError):
    pass


class IntegrityError(DatabaseError):
    pass


class DataError(DatabaseError):
    pass


class NotSupportedError(DatabaseError):
    pass


### Custom error classes ###
class SessionCreationError(OperationalError):
    """Thrown if the AWS configuration for a new Athena client could not be loaded.
    Its context will have the following keys:
    "strategy": The credential strategy that was resolved
    "cache-key": The client cache key of the failed attempt
    "original-exception": The botocore level original exception
    """

    pass


class AthenaNilAPIError(InterfaceError):
    """Thrown if a remote Athena call is attempted without an Athena client.
    This is a usage error on the caller side, not a transient failure.
    """

    def __init__(self, message="Athena API is nil", context=None):
        super().__init__(message, context)


class ConfigurationError(ProgrammingError):
    """Thrown if a DSN or a connection argument cannot be turned into a Config"""

    pass
