from slugshortener.utils.config import app_env, app_name, app_prefix, load_config, expiry_policy_from_config
from slugshortener.utils.helpers import require_environment
from slugshortener.utils.slugs import ALPHABET, generate_slug, is_valid_slug
from slugshortener.utils.logging import initialize_logging


__all__ = [
    'ALPHABET',
    'generate_slug',
    'is_valid_slug',
    'app_env',
    'app_name',
    'app_prefix',
    'load_config',
    'expiry_policy_from_config',
    'require_environment',
    'initialize_logging',
]
