"""Helper utilities.

Functions:
    require_environment(*names: str) -> Callable
        Decorator: Ensure required environment variables are present
    env_int(name: str, default: int) -> int
        Read an integer environment variable
    env_float(name: str, default: float) -> float
        Read a float environment variable
    env_bool(name: str, default: bool) -> bool
        Read a boolean environment variable
"""

import os
import functools
from collections.abc import Callable

from slugshortener.exceptions import BadConfigurationError, MissingEnvironmentVariableError


_TRUTHY = frozenset({'1', 'true', 'yes', 'on'})
_FALSY = frozenset({'0', 'false', 'no', 'off'})


def require_environment(*names: str) -> Callable:
    """Decorator ensuring required environment variables are present.

    Args:
        *names (str):
            Names of required environment variables.

    Raises:
        MissingEnvironmentVariableError:
            If any required environment variable is missing or empty.

    Example:
        >>> @require_environment('APPCONFIG_APP_ID', 'APPCONFIG_ENV_ID')
        ... def my_function():
        ...     pass
        >>> my_function()
        MissingEnvironmentVariableError: Missing required environment variables: 'APPCONFIG_APP_ID', 'APPCONFIG_ENV_ID'
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            missing = [name for name in names if not os.environ.get(name)]
            if missing:
                missing_list = ', '.join(f"'{name}'" for name in missing)
                raise MissingEnvironmentVariableError(f'Missing required environment variables: {missing_list}')
            return func(*args, **kwargs)

        return wrapper

    return decorator


def env_int(name: str, default: int) -> int:
    value = os.environ.get(name)
    if not value:
        return default
    try:
        return int(value)
    except ValueError as e:
        raise BadConfigurationError(f"Environment variable '{name}' must be an integer (given value: {value!r}).") from e


def env_float(name: str, default: float) -> float:
    value = os.environ.get(name)
    if not value:
        return default
    try:
        return float(value)
    except ValueError as e:
        raise BadConfigurationError(f"Environment variable '{name}' must be a number (given value: {value!r}).") from e


def env_bool(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if not value:
        return default
    if value.lower() in _TRUTHY:
        return True
    if value.lower() in _FALSY:
        return False
    raise BadConfigurationError(f"Environment variable '{name}' must be a boolean (given value: {value!r}).")
