"""Experience service - catalog reads."""

from typing import Any

from experiences.domain import Experience, ExperienceId, Page, Slot
from experiences.domain.errors import ExperienceNotFoundError, InvalidExperienceIdError
from experiences.services.pagination import parse_pagination
from experiences.stores.interfaces import ExperienceStore


class ExperienceService:
    """Service for experience catalog operations."""

    def __init__(self, store: ExperienceStore) -> None:
        self._store = store

    def list_experiences(self, page: Any = None, page_size: Any = None) -> Page[Experience]:
        """Return one page of experiences, newest first.

        Raises:
            InvalidPaginationError: If page or limit are not positive integers.
        """
        page_number, size = parse_pagination(page, page_size)
        return self._store.list_experiences(page_number, size)

    def get_experience(self, experience_id: str) -> Experience:
        """Return an experience by ID.

        Raises:
            InvalidExperienceIdError: If the experience_id is not a valid UUID.
            ExperienceNotFoundError: If the experience does not exist.
        """
        try:
            parsed = ExperienceId.from_string(experience_id)
        except ValueError:
            raise InvalidExperienceIdError()

        experience = self._store.get_experience(parsed)
        if experience is None:
            raise ExperienceNotFoundError(experience_id)
        return experience

    def get_slot_availability(self, experience_id: str) -> tuple[Slot, ...]:
        """Return explicit slots plus advertised pairs not yet materialized.

        Raises:
            InvalidExperienceIdError: If the experience_id is not a valid UUID.
            ExperienceNotFoundError: If the experience does not exist.
        """
        return self.get_experience(experience_id).availability_grid()
