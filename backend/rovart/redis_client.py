from redis import Redis

from .config import settings

# None when no REDIS_URL is configured: event emission is then skipped
redis_client: Redis | None = (
    Redis.from_url(settings.redis_url, socket_timeout=2.0, decode_responses=True)
    if settings.redis_url
    else None
)
