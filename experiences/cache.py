"""Cache keys for experience read models."""

from django.conf import settings
from django.core.cache import cache


def experience_detail_key(experience_id: str) -> str:
    return f"experiences:{experience_id}"


def experience_slots_key(experience_id: str) -> str:
    return f"experiences:{experience_id}:slots"


def get_cache_timeout() -> int:
    return getattr(settings, "EXPERIENCE_CACHE_TIMEOUT", 60)


def invalidate_experience(experience_id: str) -> None:
    """Drop every cached view of one experience."""
    cache.delete_many(
        [experience_detail_key(str(experience_id)), experience_slots_key(str(experience_id))]
    )
