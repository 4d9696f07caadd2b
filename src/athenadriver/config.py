import logging
from dataclasses import dataclass, fields, replace
from typing import Dict, Optional
from urllib.parse import parse_qs, urlencode, urlparse

from athenadriver.exc import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_REGION = "us-east-1"
DEFAULT_DB_NAME = "default"
DEFAULT_WG_NAME = "primary"
NOOPS_OUTPUT_BUCKET = "s3://athenadriver-noops-bucket/"

_TRUE_STRINGS = ("1", "t", "T", "TRUE", "true", "True")
_FALSE_STRINGS = ("0", "f", "F", "FALSE", "false", "False")


def parse_bool(value: Optional[str]) -> bool:
    """Parse a boolean flag the way AWS SDK tooling does.

    Only the canonical spellings are accepted; anything else, including an
    unset value, is treated as False.
    """
    if value is None:
        return False
    if value in _TRUE_STRINGS:
        return True
    if value not in _FALSE_STRINGS:
        logger.debug("Unparsable boolean value %r, treating as false", value)
    return False


# DSN query parameter -> Config attribute
_DSN_PARAMS = {
    "region": "region",
    "db": "database",
    "profile": "aws_profile",
    "accessID": "access_id",
    "secretAccessKey": "secret_access_key",
    "sessionToken": "session_token",
    "workgroupName": "workgroup_name",
    "WGRemoteCreation": "wg_remote_creation",
    "loggingEnabled": "logging_enabled",
    "metricsEnabled": "metrics_enabled",
    "userAgentEntry": "user_agent_entry",
}

_SECRET_FIELDS = ("secret_access_key", "session_token")


@dataclass(frozen=True)
class Config:
    """
    Connection configuration for the Athena driver.

    Credential fields are plain strings and an empty string means "not set".
    The precedence between credential strategies is decided in
    athenadriver.auth, not here.
    """

    output_bucket: str = ""
    region: str = DEFAULT_REGION
    database: str = DEFAULT_DB_NAME
    aws_profile: str = ""
    access_id: str = ""
    secret_access_key: str = ""
    session_token: str = ""
    workgroup_name: str = DEFAULT_WG_NAME
    wg_remote_creation: bool = False
    logging_enabled: bool = True
    metrics_enabled: bool = True
    user_agent_entry: str = ""

    def __repr__(self):
        shown = []
        for f in fields(self):
            value = getattr(self, f.name)
            if f.name in _SECRET_FIELDS and value:
                value = "***"
            shown.append("{}={!r}".format(f.name, value))
        return "Config({})".format(", ".join(shown))

    def with_overrides(self, **kwargs) -> "Config":
        try:
            return replace(self, **kwargs)
        except TypeError as e:
            raise ConfigurationError(
                "Unknown connection argument: {}".format(e),
                context={"arguments": sorted(kwargs)},
            ) from e

    @classmethod
    def no_ops(cls) -> "Config":
        """Configuration with logging and metrics disabled, used when no real
        connectivity is wanted."""
        return cls(
            output_bucket=NOOPS_OUTPUT_BUCKET,
            region=DEFAULT_REGION,
            logging_enabled=False,
            metrics_enabled=False,
        )

    @classmethod
    def from_dsn(cls, dsn: str) -> "Config":
        """Build a Config from a DSN such as
        ``s3://bucket/prefix?region=us-west-2&db=sales&profile=dev``.
        """
        parsed = urlparse(dsn)
        if parsed.scheme != "s3" or not parsed.netloc:
            raise ConfigurationError(
                "DSN must start with s3://<bucket>", context={"dsn-scheme": parsed.scheme}
            )

        output_bucket = "s3://{}{}".format(parsed.netloc, parsed.path or "/")
        kwargs: Dict[str, object] = {"output_bucket": output_bucket}
        for param, values in parse_qs(parsed.query, keep_blank_values=True).items():
            attr = _DSN_PARAMS.get(param)
            if attr is None:
                raise ConfigurationError(
                    "Unknown DSN parameter: {}".format(param), context={"parameter": param}
                )
            value = values[-1]
            if attr in ("wg_remote_creation", "logging_enabled", "metrics_enabled"):
                kwargs[attr] = parse_bool(value)
            else:
                kwargs[attr] = value
        return cls(**kwargs)

    def to_dsn(self) -> str:
        defaults = Config()
        params = {}
        for param, attr in _DSN_PARAMS.items():
            value = getattr(self, attr)
            if value == getattr(defaults, attr) and attr != "region":
                continue
            params[param] = str(value).lower() if isinstance(value, bool) else value
        return "{}?{}".format(self.output_bucket, urlencode(params))
