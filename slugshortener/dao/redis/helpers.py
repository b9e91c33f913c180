import functools
import redis
from typing import TypeVar, Any
from collections.abc import Callable

from slugshortener.dao.exceptions import DataStoreError


__all__ = []

F = TypeVar('F', bound=Callable[..., Any])


def _redis_location(client: redis.Redis) -> str:
    info = client.connection_pool.connection_kwargs
    return f"{info.get('host')}:{info.get('port')}/{info.get('db')}"


def handle_redis_connection_error[F](method: F) -> F:
    """Wrap Redis-interacting DAO methods to translate Redis failures

    Connection failures, timeouts and server-side errors are all surfaced as
    DataStoreError. Nothing is retried.

    Args:
        method (Callable[..., Any]):
            DAO method performing Redis operations which may raise redis.exceptions.RedisError.

    Returns:
        Callable[..., Any]:
            Wrapped method which raises DataStoreError on Redis failures.

    Example:
        >>> @handle_redis_connection_error
        ... def get_target(self, slug):
        ...     return self.redis.get(f'url:{slug}')
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except redis.exceptions.TimeoutError as e:
            raise DataStoreError(f'Timed out waiting for Redis at {_redis_location(self.redis)}.') from e
        except redis.exceptions.ConnectionError as e:
            raise DataStoreError(f"Can't connect to Redis at {_redis_location(self.redis)}.") from e
        except redis.exceptions.RedisError as e:
            raise DataStoreError(f'Redis at {_redis_location(self.redis)} failed: {e}') from e

    return wrapper
