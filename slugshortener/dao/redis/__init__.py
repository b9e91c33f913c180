from slugshortener.dao.redis.redis_key_schema import RedisKeySchema
from slugshortener.dao.redis.mixins import RedisClientMixin
from slugshortener.dao.redis.short_url_redis_dao import ShortURLRedisDAO


__all__ = [
    'RedisKeySchema',
    'RedisClientMixin',
    'ShortURLRedisDAO',
]
