"""
Slot Finder

Bounded linear search for the nearest placement that conflicts with no
existing project. Each attempt checks every project, so the cost is
O(attempts x projects): fine for one user's timeline, not meant for large
shared calendars.
"""

from datetime import date, timedelta
from typing import Optional, Sequence

from timeplanner.platform.config import settings
from timeplanner.platform.logging import get_logger

from .dates import ONE_DAY, duration_days
from .models import DateRange, Project
from .overlap import project_blocks_range

logger = get_logger(__name__)


def _is_free(start: date, end: date, projects: Sequence[Project]) -> bool:
    return not any(project_blocks_range(project, start, end) for project in projects)


def find_nearest_available_slot(
    requested_start: date,
    requested_end: date,
    existing_projects: Sequence[Project],
    max_attempts: Optional[int] = None,
) -> Optional[DateRange]:
    """
    Find a conflict-free window with the requested duration.

    Scans forward one day at a time starting the day after
    ``requested_end``; if nothing is free, scans backward from the window
    that ends the day before ``requested_start``.

    Returns:
        The first free window found, or None when both scans are exhausted.

    Raises:
        ValueError: requested_end is before requested_start
    """
    if requested_end < requested_start:
        raise ValueError(
            f"requested_end {requested_end} is before requested_start {requested_start}"
        )
    if max_attempts is None:
        max_attempts = settings.SLOT_SEARCH_MAX_ATTEMPTS

    span = timedelta(days=duration_days(requested_start, requested_end))

    test_start = requested_end + ONE_DAY
    for _ in range(max_attempts):
        if _is_free(test_start, test_start + span, existing_projects):
            return DateRange(start_date=test_start, end_date=test_start + span)
        test_start = test_start + ONE_DAY

    test_start = requested_start - span - ONE_DAY
    for _ in range(max_attempts):
        if _is_free(test_start, test_start + span, existing_projects):
            return DateRange(start_date=test_start, end_date=test_start + span)
        test_start = test_start - ONE_DAY

    logger.warning(
        "No available slot found",
        requested_start=requested_start,
        requested_end=requested_end,
        attempts=max_attempts,
    )
    return None
