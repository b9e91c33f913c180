"""Data Access Object (DAO) implementation for managing short URLs in Redis

This module provides a Redis-based implementation of ShortURLBaseDAO.

Responsibilities:
    - Allocate random slugs with SET NX (bounded retry on collision);
    - Retrieve records with their hit counters and remaining TTL;
    - Count hits atomically and refresh expiry (sliding expiration);
    - Sample live records via SCAN for reporting;
    - Honor caller-supplied deadlines before every round trip;
    - Translate Redis failures into DAO exceptions.

Redis layout (per record, both keys expire independently):
    url:<slug>            -> target                  EX <default ttl>
    urlhitcount:<slug>    -> hit counter (integer)   EX <default ttl>

Classes:
    ShortURLRedisDAO:
        DAO for storing and retrieving ShortURLModel in a Redis datastore.

Example:
    >>> from slugshortener.dao.redis import ShortURLRedisDAO

    >>> dao = ShortURLRedisDAO(redis_host="localhost")

    >>> short_url = dao.create("https://example.com/page")
    >>> short_url.slug
    'Rk7dPq2x'

    >>> dao.hit("Rk7dPq2x", timeout=0.5)
    1

    >>> retrieved = dao.get("Rk7dPq2x")
    >>> retrieved.target
    'https://example.com/page'
    >>> retrieved.clicks
    1
    >>> retrieved.ttl
    datetime.timedelta(seconds=3600)
"""

import logging
from datetime import timedelta

from beartype import beartype

from slugshortener.constants import Slug
from slugshortener.models import ShortURLModel, ExpiryPolicy
from slugshortener.types import KeyspaceInfo, SlugFactory
from slugshortener.dao.base import ShortURLBaseDAO
from slugshortener.dao.deadline import Deadline
from slugshortener.dao.redis.mixins import RedisClientMixin
from slugshortener.dao.redis.helpers import handle_redis_connection_error
from slugshortener.dao.exceptions import ShortURLAlreadyExistsError, ShortURLNotFoundError, SlugAllocationError
from slugshortener.utils.slugs import generate_slug, is_valid_slug


logger = logging.getLogger(__name__)


# KEYS: url:<slug>, urlhitcount:<slug>
# ARGV: target, ttl (seconds)
# The counter is only dropped when this call wrote the record, never after a collision.
INSERT_SCRIPT = """
if redis.call('SET', KEYS[1], ARGV[1], 'NX', 'EX', ARGV[2]) then
    redis.call('DEL', KEYS[2])
    return 1
end
return 0
"""


class ShortURLRedisDAO(RedisClientMixin, ShortURLBaseDAO):
    """Redis-based Data Access Object (DAO) for managing short URL records

    Attributes (see RedisClientMixin):
        redis (redis.Redis):
            Redis client used to communicate with the Redis datastore.
        keys (RedisKeySchema):
            Key schema helper for generating namespaced Redis keys.

    Attributes:
        expiry_policy (ExpiryPolicy):
            TTL applied on creation and on every hit.
        slug_factory (Callable[[], str]):
            Source of candidate slugs. Defaults to generate_slug.

    Every operation accepts an optional `timeout` (seconds). It is checked
    before each Redis round trip and raises DeadlineExceededError once spent.

    Example:
        >>> dao = ShortURLRedisDAO(redis_host="localhost", expiry_policy=ExpiryPolicy(default_ttl=600))
        >>> short_url = dao.create("https://example.com")
        >>> dao.get(short_url.slug).target
        'https://example.com'
    """

    def __init__(
        self,
        *,
        expiry_policy: ExpiryPolicy | None = None,
        slug_factory: SlugFactory | None = None,
        **kwargs,
    ):
        self.expiry_policy = expiry_policy if expiry_policy is not None else ExpiryPolicy()
        self.slug_factory = slug_factory if slug_factory is not None else generate_slug
        super().__init__(**kwargs)
        self._insert_script = self.redis.register_script(INSERT_SCRIPT)

    @handle_redis_connection_error
    @beartype
    def insert(self, short_url: ShortURLModel, timeout: int | float | None = None) -> 'ShortURLRedisDAO':
        """Insert a short URL record into Redis, only if its slug is free

        SET NX of the record and removal of a leftover hit counter run as one
        Lua script: either both happen or neither does, and no reader can
        observe the new record next to a stale counter.

        Args:
            short_url (ShortURLModel):
                Record to insert. Its clicks and ttl fields are ignored: new
                records always start at 0 hits with the policy's default TTL.
            timeout (int | float | None):
                Deadline in seconds. None waits for the client's socket timeout.

        Returns:
            ShortURLRedisDAO: self (for method chaining)

        Raises:
            ShortURLAlreadyExistsError:
                If a record with the same slug already exists.
            DeadlineExceededError:
                If the deadline elapsed before the script was sent.
            DataStoreError:
                If a Redis failure occurs.
        """
        Deadline(timeout).check()

        # NOTE: the hit counter may outlive its record by up to one TTL window
        #       (e.g. hits counted with a non-sliding policy), so a freshly
        #       written record drops whatever a previous incarnation left behind.
        created = self._insert_script(
            keys=[self.keys.link_url_key(short_url.slug), self.keys.link_hits_key(short_url.slug)],
            args=[short_url.target, self.expiry_policy.seconds],
        )
        if not created:
            raise ShortURLAlreadyExistsError(f"Short URL with slug '{short_url.slug}' already exists.")
        return self

    @handle_redis_connection_error
    @beartype
    def create(self, target: str, timeout: int | float | None = None) -> ShortURLModel:
        """Allocate a random slug for target and persist the record

        Up to Slug.MAX_ATTEMPTS fresh slugs are tried. A taken slug is a
        collision and is never retried; a new slug is generated instead. The
        deadline covers all attempts together.

        Args:
            target (str):
                Redirect destination. Not validated.
            timeout (int | float | None):
                Deadline in seconds for the whole allocation.

        Returns:
            ShortURLModel:
                The new record, with 0 clicks and the default TTL.

        Raises:
            SlugAllocationError:
                If every attempt collided with an existing record.
            DeadlineExceededError:
                If the deadline elapsed before a free slug was written.
            DataStoreError:
                If a Redis failure occurs.

        Example:
            >>> dao.create('https://example.com')
            ShortURLModel(slug='Rk7dPq2x', target='https://example.com', clicks=0, ttl=datetime.timedelta(seconds=3600))
        """
        deadline = Deadline(timeout)

        for attempt in range(1, Slug.MAX_ATTEMPTS + 1):
            deadline.check()
            short_url = ShortURLModel(
                slug=self.slug_factory(),
                target=target,
                clicks=0,
                ttl=self.expiry_policy.as_timedelta(),
            )
            try:
                self.insert(short_url, timeout=deadline.remaining())
            except ShortURLAlreadyExistsError:
                logger.warning('Slug collision, retrying with a new slug.', extra={'slug': short_url.slug, 'attempt': attempt})
                continue

            logger.info('Created short URL.', extra={'slug': short_url.slug, 'target': target, 'attempt': attempt})
            return short_url

        logger.error('Slug allocation exhausted.', extra={'target': target, 'attempts': Slug.MAX_ATTEMPTS})
        raise SlugAllocationError(f'Could not allocate a free slug after {Slug.MAX_ATTEMPTS} attempts.')

    @handle_redis_connection_error
    @beartype
    def get(self, slug: str, timeout: int | float | None = None) -> ShortURLModel:
        """Retrieve a stored short URL record by slug

        Fetches the target, the hit counter and the remaining TTL in a single
        Redis transaction. Neither counts a hit nor refreshes the TTL.

        Args:
            slug (str):
                The slug identifying the record.
            timeout (int | float | None):
                Deadline in seconds.

        Returns:
            ShortURLModel:
                The record. A missing hit counter reads as 0 clicks.

        Raises:
            ShortURLNotFoundError:
                If the record does not exist (or has expired).
            DeadlineExceededError:
                If the deadline elapsed before the transaction was sent.
            DataStoreError:
                If a Redis failure occurs.

        Example:
            >>> dao.get('Rk7dPq2x')
            ShortURLModel(slug='Rk7dPq2x', target='https://example.com', clicks=4, ttl=datetime.timedelta(seconds=3597))
        """
        Deadline(timeout).check()

        link_url_key = self.keys.link_url_key(slug)
        link_hits_key = self.keys.link_hits_key(slug)

        with self.redis.pipeline(transaction=True) as pipe:
            pipe.get(link_url_key)
            pipe.get(link_hits_key)
            pipe.ttl(link_url_key)
            target, clicks, ttl = pipe.execute()

        if target is None:
            raise ShortURLNotFoundError(f"Short URL with slug '{slug}' not found.")

        return ShortURLModel(
            slug=slug,
            target=target,
            clicks=int(clicks) if clicks is not None else 0,
            # TTL returns -1 for keys without expiry
            ttl=timedelta(seconds=ttl) if ttl >= 0 else None,
        )

    @handle_redis_connection_error
    @beartype
    def hit(self, slug: str, timeout: int | float | None = None) -> int:
        """Count a hit for a short URL and refresh its expiry

        NOTE: INCR and both EXPIRE commands run in one MULTI/EXEC transaction,
              so the counter is never incremented without the TTL refresh
              (or the other way around). INCR creates a missing counter at 0.
        NOTE: with a non-sliding expiry policy the record's TTL is left alone
              and the counter only receives an expiry if it has none yet.

        Args:
            slug (str):
                The slug identifying the record.
            timeout (int | float | None):
                Deadline in seconds, covering both round trips.

        Return:
            int:
                Hit count after this hit.

        Raises:
            ShortURLNotFoundError:
                If the record does not exist (or has expired).
            DeadlineExceededError:
                If the deadline elapsed before the hit was counted.
            DataStoreError:
                If a Redis failure occurs.

        Example:
            >>> dao.hit('Rk7dPq2x')
            5
        """
        deadline = Deadline(timeout)
        link_url_key = self.keys.link_url_key(slug)
        link_hits_key = self.keys.link_hits_key(slug)
        ttl = self.expiry_policy.seconds

        deadline.check()
        if not self.redis.exists(link_url_key):
            raise ShortURLNotFoundError(f"Short URL with slug '{slug}' not found.")

        deadline.check()
        with self.redis.pipeline(transaction=True) as pipe:
            pipe.incr(link_hits_key)
            if self.expiry_policy.sliding:
                pipe.expire(link_hits_key, ttl)
                pipe.expire(link_url_key, ttl)
            else:
                pipe.expire(link_hits_key, ttl, nx=True)
            clicks, *_ = pipe.execute()

        logger.debug('Recorded hit.', extra={'slug': slug, 'clicks': clicks})
        return clicks

    @handle_redis_connection_error
    @beartype
    def sample(self, limit: int, timeout: int | float | None = None) -> list[ShortURLModel]:
        """Return a best-effort sample of at most `limit` live records

        Issues a single SCAN from cursor 0 over the primary key namespace and
        discards the continuation cursor. The result is neither exhaustive nor
        a uniform random sample. Records that expire between SCAN and GET, and
        keys that do not carry a valid slug, are skipped.

        Args:
            limit (int):
                Maximum number of records to return. Also passed to SCAN as
                its COUNT hint.
            timeout (int | float | None):
                Deadline in seconds for the SCAN and every record read.

        Returns:
            list[ShortURLModel]: Sampled records, possibly empty.

        Raises:
            ValueError:
                If limit is negative.
            DeadlineExceededError:
                If the deadline elapsed before every sampled record was read.
            DataStoreError:
                If a Redis failure occurs.
        """
        if limit < 0:
            raise ValueError(f'Sample limit must be a non-negative integer (given value: {limit}).')
        if limit == 0:
            return []

        deadline = Deadline(timeout)
        deadline.check()
        _, keys = self.redis.scan(cursor=0, match=self.keys.link_url_pattern(), count=limit)

        records = []
        for key in keys[:limit]:
            try:
                slug = self.keys.slug_from_key(key)
            except ValueError:
                logger.debug('Skipping unparsable key.', extra={'key': key})
                continue
            if not is_valid_slug(slug):
                logger.debug('Skipping key with invalid slug.', extra={'key': key})
                continue

            deadline.check()
            try:
                records.append(self.get(slug, timeout=deadline.remaining()))
            except ShortURLNotFoundError:
                logger.debug('Skipping record which expired during sampling.', extra={'slug': slug})

        return records

    @handle_redis_connection_error
    def keyspace(self, timeout: int | float | None = None) -> KeyspaceInfo:
        """Return the parsed `INFO keyspace` section

        Example:
            >>> dao.keyspace()
            {'db0': {'keys': 2, 'expires': 2, 'avg_ttl': 3591235}}
        """
        Deadline(timeout).check()
        return self.redis.info('keyspace')
