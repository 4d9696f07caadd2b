__version__ = "1.0.0"
USER_AGENT_NAME = "PyAthenaDriver"

from athenadriver.exc import *

# PEP 249 module globals
apilevel = "2.0"
threadsafety = 1  # Threads may share the module but not connections.
paramstyle = "qmark"


def connect(dsn=None, **kwargs):
    """Open a Connection to Athena.

    Either pass a DSN (``s3://bucket/prefix?region=...``), keyword arguments
    matching athenadriver.config.Config fields, or both; keyword arguments win.
    """
    from .config import Config
    from .connector import SQLConnector

    config = Config.from_dsn(dsn) if dsn else Config()
    if kwargs:
        config = config.with_overrides(**kwargs)
    return SQLConnector(config).connect()
