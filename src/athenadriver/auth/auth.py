import logging
import os
from typing import Callable, Mapping, Optional

import boto3

from athenadriver.auth.common import (
    AuthStrategy,
    ResolvedAuth,
    make_cache_key,
    optional,
)
from athenadriver.config import Config, parse_bool
from athenadriver.constants import SDK_LOAD_CONFIG_ENV

logger = logging.getLogger(__name__)

SessionFactory = Callable[..., boto3.Session]


def sdk_load_config_enabled(environ: Optional[Mapping[str, str]] = None) -> bool:
    if environ is None:
        environ = os.environ
    return parse_bool(environ.get(SDK_LOAD_CONFIG_ENV))


def resolve_auth(
    config: Config, environ: Optional[Mapping[str, str]] = None
) -> ResolvedAuth:
    """Pick the credential strategy for a Config.

    The first match wins:
    1. AWS_SDK_LOAD_CONFIG is true: let the SDK find everything, scoped to the
       configured profile if there is one. The region is not part of the key.
    2. An access id is configured: static credentials in the configured region.
    3. Otherwise: the SDK default credential chain in the configured region.

    Nothing is loaded or cached here.
    """
    if sdk_load_config_enabled(environ):
        profile = config.aws_profile
        return ResolvedAuth(
            AuthStrategy.ENVIRONMENT,
            make_cache_key("", profile, ""),
            profile=profile,
        )
    elif config.access_id != "":
        return ResolvedAuth(
            AuthStrategy.STATIC_CREDENTIALS,
            make_cache_key(config.region, "", config.access_id),
            region=config.region,
            access_id=config.access_id,
            secret_access_key=config.secret_access_key,
            session_token=config.session_token,
        )
    else:
        return ResolvedAuth(
            AuthStrategy.REGION_ONLY,
            make_cache_key(config.region, "", ""),
            region=config.region,
        )


def load_session(
    resolved: ResolvedAuth, session_factory: Optional[SessionFactory] = None
) -> boto3.Session:
    """Load the AWS configuration for a resolved strategy.

    This may read local files or environment variables, so callers must not
    hold any lock around it. botocore errors propagate to the caller.
    """
    session_factory = session_factory or boto3.Session

    if resolved.strategy == AuthStrategy.ENVIRONMENT:
        if resolved.profile != "":
            logger.debug("Loading AWS config for profile %s", resolved.profile)
            return session_factory(profile_name=resolved.profile)
        logger.debug("Loading default AWS config")
        return session_factory()
    elif resolved.strategy == AuthStrategy.STATIC_CREDENTIALS:
        logger.debug(
            "Loading AWS config with static credentials in %s", resolved.region
        )
        return session_factory(
            aws_access_key_id=resolved.access_id,
            aws_secret_access_key=resolved.secret_access_key,
            aws_session_token=optional(resolved.session_token),
            region_name=optional(resolved.region),
        )
    else:
        logger.debug("Loading default AWS config in %s", resolved.region)
        return session_factory(region_name=optional(resolved.region))
