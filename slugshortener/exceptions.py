class SlugShortenerError(Exception):
    """Base exception for all application-specific errors."""

    error_code = 'app:slugshortener_error'


class InvalidSlugError(SlugShortenerError):
    """Raised when a caller-supplied slug contains characters outside the slug alphabet."""

    error_code = 'app:invalid_slug_error'


class ConfigurationError(SlugShortenerError):
    """Base exception for all configuration errors."""

    error_code = 'config:configuration_error'


class MissingEnvironmentVariableError(ConfigurationError):
    """Raised when a required environment variable is missing."""

    error_code = 'config:missing_environment_variable_error'


class BadConfigurationError(ConfigurationError):
    """Raised when the application is configured with invalid parameters."""

    error_code = 'config:bad_configuration_error'
