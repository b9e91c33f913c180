from enum import StrEnum


class TTL:
    """TTL durations in seconds."""

    # Default short URL TTL duration, refreshed on every hit (1 hour in seconds)
    ONE_HOUR = 3_600  # 60 * 60


class Slug:
    """Slug generation and allocation parameters."""

    LENGTH = 8  # Fixed length of generated slugs
    MAX_ATTEMPTS = 10  # SET NX attempts before giving up on allocation


DEFAULT_SAMPLE_LIMIT = 10  # Number of records sampled for the summary view

# Redis client deadline (seconds) for connecting and for each command
DEFAULT_SOCKET_TIMEOUT = 5.0


class ENV:
    """Environment variable names."""

    class App(StrEnum):
        APP_ENV = 'APP_ENV'
        APP_NAME = 'APP_NAME'
        LOG_LEVEL = 'LOG_LEVEL'

    class AppConfig(StrEnum):
        APP_ID = 'APPCONFIG_APP_ID'
        ENV_ID = 'APPCONFIG_ENV_ID'
        PROFILE_ID = 'APPCONFIG_PROFILE_ID'

    class Redis(StrEnum):
        HOST = 'REDIS_HOST'
        PORT = 'REDIS_PORT'
        DB = 'REDIS_DB'
        USERNAME = 'REDIS_USERNAME'
        PASSWORD = 'REDIS_PASSWORD'  # noqa: S105
        SOCKET_TIMEOUT = 'REDIS_SOCKET_TIMEOUT'

    class Shortener(StrEnum):
        TTL_SECONDS = 'SLUG_TTL_SECONDS'
        TTL_SLIDING = 'SLUG_TTL_SLIDING'
        SAMPLE_LIMIT = 'SLUG_SAMPLE_LIMIT'
