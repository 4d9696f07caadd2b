from athenadriver.auth.auth import load_session, resolve_auth, sdk_load_config_enabled
from athenadriver.auth.common import AuthStrategy, ResolvedAuth, make_cache_key

__all__ = [
    "AuthStrategy",
    "ResolvedAuth",
    "load_session",
    "make_cache_key",
    "resolve_auth",
    "sdk_load_config_enabled",
]
