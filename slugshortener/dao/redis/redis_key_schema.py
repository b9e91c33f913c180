import functools
from collections.abc import Callable


__all__ = ['RedisKeySchema']  # hide internal decorator prefix_key from imports


def prefix_key(func: Callable) -> Callable:
    @functools.wraps(func)
    def wrapper(self, *args, **kwargs) -> str:
        key = func(self, *args, **kwargs)
        return f'{self.prefix}:{key}' if self.prefix is not None else key

    return wrapper


class RedisKeySchema:
    """Provide standardized Redis keys for storing short URL records.

    Without a prefix the layout is the bare, interoperable one:
        url:<slug>            -> target
        urlhitcount:<slug>    -> hit counter

    An optional prefix can be provided to namespace all generated keys,
    e.g. "slugshortener:prod" yields "slugshortener:prod:url:<slug>".
    """

    URL_NAMESPACE = 'url'
    HITS_NAMESPACE = 'urlhitcount'

    def __init__(self, prefix: str | None = None):
        if prefix is not None and not isinstance(prefix, str):
            raise TypeError(f'Prefix must be of type string (given type: {type(prefix)}).')

        self.prefix = prefix

    @prefix_key
    def link_url_key(self, slug: str) -> str:
        return f'{self.URL_NAMESPACE}:{slug}'

    @prefix_key
    def link_hits_key(self, slug: str) -> str:
        return f'{self.HITS_NAMESPACE}:{slug}'

    @prefix_key
    def link_url_pattern(self) -> str:
        return f'{self.URL_NAMESPACE}:*'

    def slug_from_key(self, key: str) -> str:
        """Derive the slug from a primary key, e.g. 'url:abcd2345' -> 'abcd2345'

        Raises:
            ValueError:
                If the key does not belong to the primary key namespace.
        """
        head = self.link_url_key('')
        if not key.startswith(head):
            raise ValueError(f"Cannot parse slug from key '{key}' (expected prefix '{head}').")
        return key[len(head) :]
