"""Core-facing contract of the shortener

The transport layer (HTTP routing, form parsing, templating) talks to the
record store exclusively through ShortenerService.

Responsibilities:
    - Reject foreign slugs before they reach the data store;
    - Create, resolve and inspect short URLs within caller-supplied deadlines;
    - Assemble the reporting summary (record sample + keyspace statistics).

Classes:
    ShortenerService:
        Facade over a ShortURLBaseDAO implementing the shortener operations.

Example:
    >>> from slugshortener.service import ShortenerService
    >>> from slugshortener.utils.config import load_config

    >>> service = ShortenerService.from_config(load_config('slugshortener'))
    >>> short_url = service.create_slug('https://example.com/page')
    >>> service.resolve_slug(short_url.slug)
    ('https://example.com/page', 1)
    >>> service.inspect_slug(short_url.slug).clicks
    1
"""

import logging
from typing import Any

from slugshortener.constants import DEFAULT_SAMPLE_LIMIT
from slugshortener.dao.base import ShortURLBaseDAO
from slugshortener.dao.deadline import Deadline
from slugshortener.dao.exceptions import DataStoreError
from slugshortener.dao.redis import ShortURLRedisDAO
from slugshortener.exceptions import BadConfigurationError, InvalidSlugError
from slugshortener.models import ShortURLModel, ServerSummaryModel
from slugshortener.types import ServiceConfiguration
from slugshortener.utils.config import app_prefix, expiry_policy_from_config
from slugshortener.utils.slugs import is_valid_slug


logger = logging.getLogger(__name__)


class ShortenerService:
    """Shortener operations on top of a short URL DAO

    Attributes:
        dao (ShortURLBaseDAO):
            Record store backing the service.
        sample_limit (int):
            Default number of records returned by list_sample() and summary().
    """

    def __init__(self, dao: ShortURLBaseDAO, sample_limit: int = DEFAULT_SAMPLE_LIMIT):
        self.dao = dao
        self.sample_limit = sample_limit

    @classmethod
    def from_config(cls, config: ServiceConfiguration, prefix: str | None = None, **kwargs: Any) -> 'ShortenerService':
        """Build a Redis-backed service from a loaded configuration section

        Args:
            config (dict):
                Section returned by load_config().
            prefix (str | None):
                Redis key prefix. Defaults to app_prefix().
            **kwargs:
                Forwarded to ShortURLRedisDAO (e.g. redis_client, slug_factory).

        Raises:
            BadConfigurationError:
                If the redis or expiry sections are missing or invalid.
            DataStoreError:
                If Redis is unreachable.
        """
        if 'redis' not in config:
            raise BadConfigurationError("Configuration has no 'redis' section.")

        redis_config = {f'redis_{k}': v for k, v in config['redis'].items()}
        dao = ShortURLRedisDAO(
            **redis_config,
            **kwargs,
            prefix=prefix if prefix is not None else app_prefix(),
            expiry_policy=expiry_policy_from_config(config),
        )
        return cls(dao, sample_limit=config.get('sample_limit', DEFAULT_SAMPLE_LIMIT))

    @staticmethod
    def validate_slug_syntax(candidate: Any) -> bool:
        """Return True if candidate only holds slug alphabet characters.

        Must be checked before any externally supplied slug is used as part of
        a Redis key. Length is not checked.
        """
        return isinstance(candidate, str) and is_valid_slug(candidate)

    def _require_valid_slug(self, slug: Any) -> None:
        if not self.validate_slug_syntax(slug):
            logger.info('Rejected invalid slug.', extra={'slug': repr(slug)})
            raise InvalidSlugError(f'Invalid slug {slug!r}.')

    def create_slug(self, target: str, timeout: float | None = None) -> ShortURLModel:
        """Create a short URL for target

        Args:
            target (str):
                Redirect destination.
            timeout (float | None):
                Deadline in seconds for the whole allocation.

        Raises:
            SlugAllocationError:
                If no free slug could be allocated.
            DataStoreError:
                If Redis fails.
        """
        return self.dao.create(target, timeout=timeout)

    def resolve_slug(self, slug: str, timeout: float | None = None) -> tuple[str, int]:
        """Resolve a slug for redirection: count the hit and return the target

        The deadline covers both the read and the hit.

        Returns:
            tuple[str, int]: target and hit count after this resolution.

        Raises:
            InvalidSlugError:
                If slug holds characters outside the alphabet.
            ShortURLNotFoundError:
                If the record does not exist (or has expired).
            DataStoreError:
                If Redis fails.
        """
        self._require_valid_slug(slug)
        deadline = Deadline(timeout)
        short_url = self.dao.get(slug, timeout=deadline.remaining())
        clicks = self.dao.hit(slug, timeout=deadline.remaining())
        logger.info('Resolved short URL.', extra={'slug': slug, 'clicks': clicks})
        return short_url.target, clicks

    def inspect_slug(self, slug: str, timeout: float | None = None) -> ShortURLModel:
        """Return the record of a slug without counting a hit

        Raises:
            InvalidSlugError:
                If slug holds characters outside the alphabet.
            ShortURLNotFoundError:
                If the record does not exist (or has expired).
            DataStoreError:
                If Redis fails.
        """
        self._require_valid_slug(slug)
        return self.dao.get(slug, timeout=timeout)

    def list_sample(self, limit: int | None = None, timeout: float | None = None) -> list[ShortURLModel]:
        """Return an approximate sample of live records (never exhaustive)"""
        return self.dao.sample(self.sample_limit if limit is None else limit, timeout=timeout)

    def summary(self, limit: int | None = None, timeout: float | None = None) -> ServerSummaryModel:
        """Assemble the reporting view: a record sample and keyspace statistics

        Keyspace statistics are optional: if Redis refuses INFO (e.g. the
        command is disabled on managed instances) the summary is still
        returned, with an empty keyspace. The same holds when the deadline
        runs out after sampling.
        """
        deadline = Deadline(timeout)
        known_slugs = self.list_sample(limit, timeout=deadline.remaining())
        try:
            keyspace = self.dao.keyspace(timeout=deadline.remaining())
        except DataStoreError:
            logger.warning('Failed to read keyspace statistics.', exc_info=True)
            keyspace = {}
        return ServerSummaryModel(known_slugs=known_slugs, keyspace=keyspace)
