import os

import pytest
import redis


# Dedicated database index, flushed around every test
TEST_DB = 15


@pytest.fixture
def live_redis() -> redis.Redis:
    """Connect to a live Redis, skipping the test when none is reachable."""
    client = redis.Redis(
        host=os.getenv('REDIS_HOST', 'localhost'),
        port=int(os.getenv('REDIS_PORT', '6379')),
        db=TEST_DB,
        decode_responses=True,
        socket_connect_timeout=1,
    )
    try:
        client.ping()
    except redis.exceptions.ConnectionError:
        pytest.skip('No Redis server reachable for integration tests.')

    client.flushdb()
    yield client
    client.flushdb()
    client.close()
