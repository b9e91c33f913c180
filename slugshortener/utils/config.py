"""Utility functions for application configuration management.

This module provides a standardized interface for the shortener service to
access its configuration. Deployed environments (`APP_ENV`) read a JSON
document stored in **AWS AppConfig** within the AppConfig *Application*
identified by `APP_NAME`. Local environments build the same structure from
plain environment variables.

The AppConfig JSON follows this structure:

    {
        "active_backend": "redis",
        "configs": {
            "slugshortener": {
                "redis": {"host": "...", "port": 6379, "db": 0, "socket_timeout": 5.0},
                "expiry": {"default_ttl": 3600, "sliding": true},
                "sample_limit": 10
            }
        }
    }

Functions:
    app_env() -> str
        Return the current application environment (`APP_ENV`) value,
        defaulting to `'local'`.

    app_name() -> str | None
        Return the application name (`APP_NAME`), or None if not set.

    app_prefix() -> str | None
        Return the Redis key prefix, or None if `APP_NAME` is not set.

    load_config(service_name: str) -> dict
        Load the configuration section of a service. Uses AWS AppConfig,
        or the local environment when running locally.

    expiry_policy_from_config(config: dict) -> ExpiryPolicy
        Build an ExpiryPolicy from a loaded configuration section.

Example:
    >>> from slugshortener.utils.config import load_config
    >>> config = load_config('slugshortener')
    >>> config['redis']['host']
    'localhost'
"""

import os
import json
import functools
import logging
from collections.abc import Callable

import boto3

from slugshortener.constants import ENV, TTL, DEFAULT_SAMPLE_LIMIT, DEFAULT_SOCKET_TIMEOUT
from slugshortener.exceptions import BadConfigurationError
from slugshortener.models import ExpiryPolicy
from slugshortener.types import ServiceConfiguration
from slugshortener.utils.helpers import require_environment, env_int, env_float, env_bool
from slugshortener.utils.runtime import running_locally


logger = logging.getLogger(__name__)


def app_env() -> str:
    """Return the current application environment by reading 'APP_ENV'

    Returns:
        str:
            Value of `APP_ENV` environment variable, `'local'` by default.

    Example:
        >>> os.environ['APP_ENV'] = 'dev'
        >>> app_env()
        'dev'
    """
    return os.environ.get(ENV.App.APP_ENV, 'local').lower()


def app_name() -> str | None:
    """Return the current application name by reading 'APP_NAME'"""
    return os.environ.get(ENV.App.APP_NAME)


def app_prefix() -> str | None:
    """Return Redis key prefix for DAOs

    Returns:
        str: app prefix as <app name>:<app env>.
             None if APP_NAME is not set, in which case keys keep their
             bare layout (`url:<slug>`, `urlhitcount:<slug>`).

    Example:
        >>> os.environ['APP_NAME'] = 'slugshortener'
        >>> os.environ['APP_ENV'] = 'local'
        >>> app_prefix()
        'slugshortener:local'
    """
    return None if app_name() is None else f'{app_name()}:{app_env()}'


def _local_environment_config(func: Callable[[str], dict]) -> Callable[[str], dict]:
    """Decorator: build the configuration from environment variables when running locally

    Behavior:
        - If the application is running locally, assemble the configuration
          section from REDIS_* and SLUG_* environment variables.
        - Else, call the wrapped function (which pulls from AWS AppConfig via boto3).

    Args:
        func (Callable[[str], dict]):
            load_config()

    Returns:
        Callable[[str], dict]:
            A compatible function with load_config() which prefers the local
            environment when running locally.
    """

    @functools.wraps(func)
    def wrapper(service_name: str, *args, **kwargs) -> dict:
        if not running_locally():
            return func(service_name, *args, **kwargs)

        logger.debug('Loading configuration from local environment.', extra={'serviceName': service_name})
        redis_config = {
            'host': os.environ.get(ENV.Redis.HOST, 'localhost'),
            'port': env_int(ENV.Redis.PORT, 6379),
            'db': env_int(ENV.Redis.DB, 0),
            'socket_timeout': env_float(ENV.Redis.SOCKET_TIMEOUT, DEFAULT_SOCKET_TIMEOUT),
        }
        if os.environ.get(ENV.Redis.USERNAME):
            redis_config['username'] = os.environ[ENV.Redis.USERNAME]
        if os.environ.get(ENV.Redis.PASSWORD):
            redis_config['password'] = os.environ[ENV.Redis.PASSWORD]

        return {
            'redis': redis_config,
            'expiry': {
                'default_ttl': env_int(ENV.Shortener.TTL_SECONDS, TTL.ONE_HOUR),
                'sliding': env_bool(ENV.Shortener.TTL_SLIDING, True),
            },
            'sample_limit': env_int(ENV.Shortener.SAMPLE_LIMIT, DEFAULT_SAMPLE_LIMIT),
        }

    return wrapper


@_local_environment_config
@require_environment(ENV.AppConfig.APP_ID, ENV.AppConfig.ENV_ID, ENV.AppConfig.PROFILE_ID)
def load_config(service_name: str) -> ServiceConfiguration:
    """Load configuration for a given service from AWS AppConfig

    Fetches the AppConfig JSON once and returns the section relevant
    to the requested service, flattened to its active backend.

    Environment variables required:
        APPCONFIG_APP_ID       – AppConfig Application ID
        APPCONFIG_ENV_ID       – AppConfig Environment ID
        APPCONFIG_PROFILE_ID   – AppConfig Configuration Profile ID

    Args:
        service_name (str):
            Name of the service section (e.g., "slugshortener").

    Returns:
        dict: The service's config section as a Python dictionary.

    Raises:
        MissingEnvironmentVariableError:
            If any AppConfig identifier is missing from the environment.
        BadConfigurationError:
            If the document lacks the active backend or the service section.

    Example:
        >>> config = load_config('slugshortener')
        >>> config['redis']['host']
        'redis-15501.host.docker.internal'
    """
    logger.debug('Trying to load AppConfig from AWS AppConfig.', extra={'serviceName': service_name})

    appconfig = boto3.client('appconfigdata')

    # Start an AppConfig data session
    session_token = appconfig.start_configuration_session(
        ApplicationIdentifier=os.environ[ENV.AppConfig.APP_ID],
        EnvironmentIdentifier=os.environ[ENV.AppConfig.ENV_ID],
        ConfigurationProfileIdentifier=os.environ[ENV.AppConfig.PROFILE_ID],
    )['InitialConfigurationToken']

    # Fetch the configuration
    response = appconfig.get_latest_configuration(ConfigurationToken=session_token)
    content = response['Configuration'].read()
    document = json.loads(content.decode('utf-8'))

    try:
        backend = document['active_backend']
        section = document['configs'][service_name]
        data = {
            backend: section[backend],
            'expiry': section.get('expiry', {}),
            'sample_limit': section.get('sample_limit', DEFAULT_SAMPLE_LIMIT),
        }
    except KeyError as e:
        raise BadConfigurationError(f"AppConfig document has no {e} entry for service '{service_name}'.") from e

    logger.debug('Loaded AppConfig from AWS AppConfig.', extra={'serviceName': service_name, 'build': document.get('build')})
    return data


def expiry_policy_from_config(config: ServiceConfiguration) -> ExpiryPolicy:
    """Build the ExpiryPolicy described by a configuration section

    Raises:
        BadConfigurationError:
            If the expiry section holds invalid values.
    """
    expiry = config.get('expiry', {})
    try:
        return ExpiryPolicy(
            default_ttl=expiry.get('default_ttl', TTL.ONE_HOUR),
            sliding=expiry.get('sliding', True),
        )
    except (TypeError, ValueError) as e:
        raise BadConfigurationError(f'Invalid expiry configuration: {e}') from e
