from typing import Any

from experiences.domain.errors import InvalidPaginationError

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100
# Keeps the row offset within a signed 64-bit SQL integer.
MAX_PAGE = (2**63 - 1) // MAX_PAGE_SIZE


def parse_pagination(page: Any = None, page_size: Any = None) -> tuple[int, int]:
    """Parse page/limit query values, applying defaults and the page size cap.

    Raises:
        InvalidPaginationError: If either value is not a positive integer, or
            page is past the last addressable row offset.
    """
    try:
        page_number = int(page) if page not in (None, "") else 1
        size = int(page_size) if page_size not in (None, "") else DEFAULT_PAGE_SIZE
    except (TypeError, ValueError):
        raise InvalidPaginationError()
    if not 1 <= page_number <= MAX_PAGE or size < 1:
        raise InvalidPaginationError()
    return page_number, min(size, MAX_PAGE_SIZE)
