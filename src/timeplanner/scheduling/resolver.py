"""
Conflict Resolver

Turns a detected drag conflict into a decision the caller can act on:

- adjust: move the request to the nearest free slot (default)
- reject: keep the request as-is and report the rejection
- force: keep the request as-is; the caller places it despite the overlap

An unresolved conflict is reported through ``was_adjusted=False`` and a
human-readable ``adjustment_reason``; it is never an exception.
"""

from datetime import date
from typing import Sequence, Union

from timeplanner.platform.logging import get_logger

from .dates import duration_days
from .models import DateAdjustmentResult, DateRange, Project, ResolutionStrategy
from .overlap import detect_live_drag_conflicts
from .slots import find_nearest_available_slot

logger = get_logger(__name__)

REASON_REJECTED = "conflicts detected — rejected"
REASON_FORCED = "forced — conflicts ignored"
REASON_MOVED = "moved to avoid conflicts"
REASON_NO_SLOT = "no suitable slot found"
REASON_NO_CONFLICTS = "no conflicts detected"


def _unchanged(requested: DateRange, reason: str) -> DateAdjustmentResult:
    return DateAdjustmentResult(
        original_start_date=requested.start_date,
        original_end_date=requested.end_date,
        adjusted_start_date=requested.start_date,
        adjusted_end_date=requested.end_date,
        was_adjusted=False,
        adjustment_reason=reason,
        days_moved=0,
    )


def resolve_drag_conflicts(
    requested: DateRange,
    conflicting_projects: Sequence[Project],
    strategy: Union[ResolutionStrategy, str] = ResolutionStrategy.ADJUST,
) -> DateAdjustmentResult:
    """
    Resolve a pending move against the projects it conflicts with.

    Args:
        requested: Range the user dragged the project to
        conflicting_projects: Projects the range conflicts with
        strategy: adjust, reject or force

    Returns:
        DateAdjustmentResult; ``days_moved`` is negative when the slot was
        found before the requested start.

    Raises:
        ValueError: Unknown strategy
    """
    strategy = ResolutionStrategy(strategy)

    if strategy == ResolutionStrategy.REJECT:
        return _unchanged(requested, REASON_REJECTED)

    if strategy == ResolutionStrategy.FORCE:
        return _unchanged(requested, REASON_FORCED)

    if not conflicting_projects:
        return _unchanged(requested, REASON_NO_CONFLICTS)

    slot = find_nearest_available_slot(
        requested.start_date, requested.end_date, conflicting_projects
    )
    if slot is None:
        logger.warning(
            "Drag conflict left unresolved",
            start=requested.start_date,
            end=requested.end_date,
            conflicts=len(conflicting_projects),
        )
        return _unchanged(requested, REASON_NO_SLOT)

    return DateAdjustmentResult(
        original_start_date=requested.start_date,
        original_end_date=requested.end_date,
        adjusted_start_date=slot.start_date,
        adjusted_end_date=slot.end_date,
        was_adjusted=True,
        adjustment_reason=REASON_MOVED,
        days_moved=duration_days(requested.start_date, slot.start_date),
    )


def adjust_project_dates_for_drag(
    project: Project,
    new_start: date,
    new_end: date,
    all_projects: Sequence[Project],
) -> DateAdjustmentResult:
    """Validate a drag on the project's own row and auto-correct it if needed."""
    requested = DateRange(start_date=new_start, end_date=new_end)
    conflicts = detect_live_drag_conflicts(project.id, requested, project.row_id, all_projects)

    if not conflicts.has_conflicts:
        return _unchanged(requested, REASON_NO_CONFLICTS)

    return resolve_drag_conflicts(
        requested, conflicts.conflicting_projects, ResolutionStrategy.ADJUST
    )
