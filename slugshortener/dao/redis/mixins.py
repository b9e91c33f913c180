"""Redis mixin providing shared client initialization and connectivity checks.

Responsibilities:
    - Initialize Redis client (with connect and command deadlines)
    - Healthcheck Redis client

Classes:
    - RedisClientMixin: Base mixin to inject Redis key management, client setup & healthcheck.

Example:
    Typical usage with a DAO implementation:

        >>> class ShortURLRedisDAO(RedisClientMixin, ShortURLBaseDAO):
        ...     pass
        ...
        >>> dao = ShortURLRedisDAO(prefix="slugshortener:prod")
        >>> dao._healthcheck()
        True
"""

from typing import Optional

import redis

from slugshortener.constants import DEFAULT_SOCKET_TIMEOUT
from slugshortener.dao.redis.redis_key_schema import RedisKeySchema
from slugshortener.dao.exceptions import DataStoreError


class RedisClientMixin:
    """Mixin Redis client setup and health check for Redis-backed DAOs.

    The Redis client is the process-wide shared resource of the DAO. redis-py
    clients are safe to share between threads (each command borrows a
    connection from the client's pool), so no locking is added here.

    Attributes:
        redis (redis.Redis):
            Active Redis client instance used by subclasses.

        keys (RedisKeySchema):
            Helper class for generating namespaced Redis key names.

    Methods:
        _healthcheck(raise_error: bool = True) -> bool:
            Ping Redis to verify connectivity.
            Optionally raise a DataStoreError if unreachable.
    """

    def __init__(
        self,
        redis_host: Optional[str] = 'localhost',
        redis_port: Optional[int] = 6379,
        redis_db: Optional[int] = 0,
        redis_username: Optional[str] = None,
        redis_password: Optional[str] = None,
        redis_socket_timeout: Optional[float] = DEFAULT_SOCKET_TIMEOUT,
        redis_socket_connect_timeout: Optional[float] = DEFAULT_SOCKET_TIMEOUT,
        redis_client: Optional[redis.Redis] = None,
        prefix: Optional[str] = None,
    ):
        """Initialize a Redis-based DAO

        The option is given to either use an existing Redis client instance or
        create one via the appropriate Redis connection parameters.

        Args:
            redis_host (Optional[str]):
                Hostname of the Redis server. Defaults to 'localhost'.

            redis_port (Optional[int]):
                Redis server port. Defaults to 6379.

            redis_db (Optional[int]):
                Redis database index. Defaults to 0.

            redis_username (Optional[str]):
                Username for Redis authentication (if required).

            redis_password (Optional[str]):
                Password for Redis authentication (if required).

            redis_socket_timeout (Optional[float]):
                Deadline in seconds for each Redis command. Defaults to 5.

            redis_socket_connect_timeout (Optional[float]):
                Deadline in seconds for establishing a connection. Defaults to 5.

            redis_client (Optional[redis.Redis]):
                Pre-initialized Redis client. If None, a new client is created.
                Must be created with decode_responses=True: records, counters
                and scanned keys are handled as str.

            prefix (Optional[str]):
                Namespace prefix for all Redis keys, e.g. 'app:env'.

        Raises:
            ValueError:
                If redis_client does not decode responses.
            DataStoreError:
                If Redis healthcheck fails (connectivity issues).
        """
        if redis_client is None:
            redis_client = redis.Redis(
                host=redis_host,
                port=int(redis_port),
                db=int(redis_db),
                decode_responses=True,
                username=redis_username,
                password=redis_password,
                socket_timeout=redis_socket_timeout,
                socket_connect_timeout=redis_socket_connect_timeout,
            )
        elif not redis_client.connection_pool.connection_kwargs.get('decode_responses', False):
            raise ValueError('Redis client must be created with decode_responses=True.')

        self.redis = redis_client
        self.keys = RedisKeySchema(prefix=prefix)

        self._healthcheck()

    def _healthcheck(self, raise_error: bool = True) -> bool:
        """PING Redis to healthcheck connectivity

        Args:
            raise_error (bool):
                If True, raises DataStoreError on failure. Defaults to True.

        Returns:
            bool:
                True if Redis is reachable, False otherwise (only if raise_error=False).

        Raises:
            DataStoreError:
                If Redis connection cannot be established and raise_error=True.
        """
        try:
            self.redis.ping()
        except (redis.exceptions.ConnectionError, redis.exceptions.TimeoutError) as e:
            if raise_error:
                info = self.redis.connection_pool.connection_kwargs
                redis_host = info.get('host')
                redis_port = info.get('port')
                redis_db = info.get('db')
                raise DataStoreError(
                    f"Can't connect to Redis at {redis_host}:{redis_port}/{redis_db}. Check the provided configuration parameters."
                ) from e
            return False
        else:
            return True
