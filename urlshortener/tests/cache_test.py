import redis.exceptions

from urlshortener.services.cache import MappingCache


class BrokenRedis:
    """Every call fails the way an unreachable Redis does."""

    def get(self, key):
        raise redis.exceptions.ConnectionError("Connection refused")

    def setex(self, key, ttl, value):
        raise redis.exceptions.ConnectionError("Connection refused")

    def delete(self, key):
        raise redis.exceptions.TimeoutError("Timeout")


def test_put_then_get(fake_redis):
    cache = MappingCache(fake_redis, ttl=60)
    cache.put("abc12345", "https://example.com")
    assert cache.get("abc12345") == "https://example.com"
    assert cache.get("missing0") is None


def test_get_decodes_bytes(fake_redis):
    fake_redis.data["url:abc12345"] = b"https://example.com"
    assert MappingCache(fake_redis).get("abc12345") == "https://example.com"


def test_evict(fake_redis):
    cache = MappingCache(fake_redis)
    cache.put("abc12345", "https://example.com")
    cache.evict("abc12345")
    assert cache.get("abc12345") is None


def test_unreachable_redis_fails_open():
    cache = MappingCache(BrokenRedis())
    assert cache.get("abc12345") is None
    cache.put("abc12345", "https://example.com")
    cache.evict("abc12345")
