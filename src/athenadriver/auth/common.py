from enum import Enum
from typing import Optional


class AuthStrategy(Enum):
    ENVIRONMENT = "environment"
    STATIC_CREDENTIALS = "static-credentials"
    REGION_ONLY = "region-only"


class ResolvedAuth:
    """
    Outcome of credential resolution: the strategy that won, the client cache
    key that identifies it, and the inputs needed to load an AWS session for it.
    """

    def __init__(
        self,
        strategy: AuthStrategy,
        cache_key: str,
        region: str = "",
        profile: str = "",
        access_id: str = "",
        secret_access_key: str = "",
        session_token: str = "",
    ):
        self.strategy = strategy
        self.cache_key = cache_key
        self.region = region
        self.profile = profile
        self.access_id = access_id
        self.secret_access_key = secret_access_key
        self.session_token = session_token

    def __eq__(self, other):
        if not isinstance(other, ResolvedAuth):
            return NotImplemented
        return (
            self.strategy == other.strategy
            and self.cache_key == other.cache_key
            and self.region == other.region
            and self.profile == other.profile
            and self.access_id == other.access_id
            and self.secret_access_key == other.secret_access_key
            and self.session_token == other.session_token
        )

    def __repr__(self):
        return "ResolvedAuth(strategy={}, cache_key={!r})".format(
            self.strategy.value, self.cache_key
        )


def make_cache_key(region: str, profile: str, access_id: str) -> str:
    """Client cache key in the form region#profile#accessid.

    Empty segments stay empty, both separators are always present.
    """
    return "{}#{}#{}".format(region or "", profile or "", access_id or "")


def optional(value: str) -> Optional[str]:
    """boto3 wants None, not an empty string, for values that are not set."""
    return value or None
