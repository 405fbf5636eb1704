import redis

from app.config import get_settings

redis_client = redis.Redis.from_url(get_settings().redis_url, decode_responses=True)
