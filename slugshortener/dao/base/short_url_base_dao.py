"""Abstract base class for ShortURL data access objects (DAOs).

This class establishes a consistent contract for all ShortURL DAO implementations,
regardless of the underlying storage mechanism.

Responsibilities:
    - Allocate collision-free slugs and persist new records.
    - Retrieve records together with their hit counters and remaining TTL.
    - Record hits atomically and refresh expiry.
    - Provide a best-effort sample of live records for reporting.

Example:
    Typical usage with a datastore-specific implementation:

        >>> from slugshortener.dao.redis import ShortURLRedisDAO

        >>> dao = ShortURLRedisDAO(...)

        >>> short_url = dao.create("https://example.com/blog/article-123")
        >>> short_url.clicks
        0

        >>> dao.hit(short_url.slug)
        1

        >>> dao.get(short_url.slug).clicks
        1
"""

from abc import ABC, abstractmethod

from slugshortener.models import ShortURLModel
from slugshortener.types import KeyspaceInfo


class ShortURLBaseDAO(ABC):
    """Interface for ShortURL data access objects (DAOs).

    Methods:
        insert(short_url: ShortURLModel, timeout=None) -> ShortURLBaseDAO:
            Insert a record under a given slug, only if the slug is free.
            Raises ShortURLAlreadyExistsError if the slug is taken.

        create(target: str, timeout=None) -> ShortURLModel:
            Allocate a fresh random slug for target and insert it.
            Raises SlugAllocationError if every attempt collided.

        get(slug: str, timeout=None) -> ShortURLModel:
            Retrieve a record with its hit count and remaining TTL. No side effects.
            Raises ShortURLNotFoundError if the record does not exist.

        hit(slug: str, timeout=None) -> int:
            Atomically count a hit and refresh the record's TTL.
            Raises ShortURLNotFoundError if the record does not exist.

        sample(limit: int, timeout=None) -> list[ShortURLModel]:
            Return at most `limit` live records. Best effort, not exhaustive.

        keyspace(timeout=None) -> dict:
            Return data store keyspace statistics.

    All methods raise DataStoreError on connection, timeout or server failure.
    `timeout` is a per-call deadline in seconds; once it elapses the call
    raises DeadlineExceededError (a DataStoreError) instead of waiting.

    NOTE:
        - Records are expected to expire automatically. The DAO does not
          provide an interface to manually delete entries.
    """

    @abstractmethod
    def insert(self, short_url: ShortURLModel, timeout: float | None = None) -> 'ShortURLBaseDAO':
        """Insert a new record, only if its slug is not taken.

        Raises:
            ShortURLAlreadyExistsError:
                If a record with the same slug already exists.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def create(self, target: str, timeout: float | None = None) -> ShortURLModel:
        """Allocate a new slug for target and persist the record.

        Raises:
            SlugAllocationError:
                If no free slug was found within the attempt bound.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def get(self, slug: str, timeout: float | None = None) -> ShortURLModel:
        """Retrieve a record by its slug.

        Raises:
            ShortURLNotFoundError:
                If no record with the given slug exists.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def hit(self, slug: str, timeout: float | None = None) -> int:
        """Record a hit and return the new hit count.

        Raises:
            ShortURLNotFoundError:
                If no record with the given slug exists.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def sample(self, limit: int, timeout: float | None = None) -> list[ShortURLModel]:
        """Return a best-effort sample of at most `limit` live records."""
        pass

    @abstractmethod
    def keyspace(self, timeout: float | None = None) -> KeyspaceInfo:
        """Return data store keyspace statistics."""
        pass
