# Core infrastructure services
from .denylist_service import add_token_to_denylist, is_token_denylisted
from .rate_limiter import limiter

__all__ = [
    "add_token_to_denylist",
    "is_token_denylisted",
    "limiter",
]
