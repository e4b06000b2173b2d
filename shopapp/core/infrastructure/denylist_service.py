# shopapp/core/infrastructure/denylist_service.py

from datetime import timedelta
import logging

import redis

from ..config import settings

logger = logging.getLogger(__name__)

# Connect to Redis
try:
    redis_client = redis.from_url(settings.REDIS_URL, decode_responses=True, socket_connect_timeout=1)
    # Ping the server to check the connection
    redis_client.ping()
    logger.info("Successfully connected to Redis.")
except redis.exceptions.RedisError as e:
    logger.warning(f"Could not connect to Redis, token revocation is disabled: {e}")
    redis_client = None

def add_token_to_denylist(jti: str, expires: timedelta) -> None:
    """
    Adds a token's JTI to the denylist with an expiration time.

    Args:
        jti (str): The JWT ID of the token to be denylisted.
        expires (timedelta): The remaining lifetime of the token, used as the
                             expiry for the Redis key.
    """
    if redis_client:
        redis_client.setex(jti, expires, "denied")

def is_token_denylisted(jti: str) -> bool:
    """
    Checks if a token's JTI is in the denylist.

    Returns:
        bool: True if the token is denylisted, False otherwise.
    """
    if redis_client:
        return bool(redis_client.exists(jti))
    # Redis unavailable: fail open
    return False
