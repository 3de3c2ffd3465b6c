"""Django signals for cache invalidation."""

from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from experiences.cache import invalidate_experience
from experiences.models import Experience, Slot


@receiver([post_save, post_delete], sender=Experience)
def invalidate_experience_cache(sender, instance, **kwargs):
    """Invalidate caches when an experience is saved or deleted."""
    invalidate_experience(str(instance.pk))


@receiver([post_save, post_delete], sender=Slot)
def invalidate_slot_cache(sender, instance, **kwargs):
    """Invalidate caches when a slot is saved or deleted."""
    invalidate_experience(str(instance.experience_id))
