"""
Overlap Detector

Date-range conflict tests between a candidate placement and the projects on
the timeline.

Continuous projects have no fixed end: a continuous project starting on S
conflicts with every candidate whose end is on/after S, and with none whose
end is before S.
"""

from datetime import date
from typing import List, Optional, Sequence

from timeplanner.platform.logging import get_logger

from .dates import duration_days
from .models import ConflictDetail, ConflictDetectionResult, DateRange, OverlapType, Project

logger = get_logger(__name__)

# overlap_days reported against a continuous project
INDEFINITE_OVERLAP = -1


def intervals_overlap(a_start: date, a_end: date, b_start: date, b_end: date) -> bool:
    """Inclusive interval intersection test."""
    return a_start <= b_end and a_end >= b_start


def project_blocks_range(project: Project, start: date, end: date) -> bool:
    """
    Check whether an existing project occupies any part of [start, end].

    Non-continuous projects without an end date never block.
    """
    if project.continuous:
        return end >= project.start_date
    if project.end_date is None:
        return False
    return intervals_overlap(start, end, project.start_date, project.end_date)


def calculate_overlap_days(a_start: date, a_end: date, b_start: date, b_end: date) -> int:
    """
    Day span of the shared part of two ranges.

    Counted as day boundaries crossed, so two ranges that only share their
    boundary date have 0 overlap days.
    """
    if not intervals_overlap(a_start, a_end, b_start, b_end):
        return 0
    return duration_days(max(a_start, b_start), min(a_end, b_end))


def determine_overlap_type(a_start: date, a_end: date, b_start: date, b_end: date) -> OverlapType:
    """
    Classify the relation between two ranges.

    adjacent: one range ends on the date the other starts (or they do not
        intersect). Checked first, so a single-day range on the boundary of
        a longer one is adjacent rather than complete.
    complete: one range contains the other.
    partial: anything else.
    """
    if a_end == b_start or b_end == a_start:
        return OverlapType.ADJACENT
    if not intervals_overlap(a_start, a_end, b_start, b_end):
        return OverlapType.ADJACENT

    a_contains_b = a_start <= b_start and a_end >= b_end
    b_contains_a = b_start <= a_start and b_end >= a_end
    if a_contains_b or b_contains_a:
        return OverlapType.COMPLETE
    return OverlapType.PARTIAL


def calculate_overlap_percentage(a_start: date, a_end: date, b_start: date, b_end: date) -> float:
    """Share of range A's span covered by range B, 0-100."""
    if not intervals_overlap(a_start, a_end, b_start, b_end):
        return 0.0
    total = duration_days(a_start, a_end)
    if total <= 0:
        return 0.0
    return calculate_overlap_days(a_start, a_end, b_start, b_end) / total * 100.0


def check_project_overlap(
    candidate: DateRange,
    all_projects: Sequence[Project],
    exclude_project_id: Optional[str] = None,
    same_row_only: bool = False,
    target_row_id: Optional[str] = None,
) -> ConflictDetectionResult:
    """
    Find the projects a candidate placement would conflict with.

    Args:
        candidate: Proposed inclusive date range
        all_projects: Projects currently on the timeline
        exclude_project_id: Project being moved (never conflicts with itself)
        same_row_only: Only consider projects on ``target_row_id``
        target_row_id: Row the candidate is placed on

    Returns:
        ConflictDetectionResult with one detail per conflicting project
    """
    start, end = candidate.start_date, candidate.end_date
    conflicting: List[Project] = []
    details: List[ConflictDetail] = []

    for project in all_projects:
        if exclude_project_id is not None and project.id == exclude_project_id:
            continue
        if same_row_only and target_row_id is not None and project.row_id != target_row_id:
            continue
        if not project_blocks_range(project, start, end):
            continue

        conflicting.append(project)
        if project.continuous:
            details.append(ConflictDetail(
                project_id=project.id,
                overlap_type=OverlapType.COMPLETE,
                overlap_days=INDEFINITE_OVERLAP,
            ))
        else:
            details.append(ConflictDetail(
                project_id=project.id,
                overlap_type=determine_overlap_type(
                    start, end, project.start_date, project.end_date
                ),
                overlap_days=calculate_overlap_days(
                    start, end, project.start_date, project.end_date
                ),
            ))

    if conflicting:
        logger.debug(
            "Overlap detected",
            start=start,
            end=end,
            conflicts=[p.id for p in conflicting],
        )

    return ConflictDetectionResult(
        has_conflicts=bool(conflicting),
        conflicting_projects=conflicting,
        conflict_details=details,
    )


def detect_live_drag_conflicts(
    dragged_project_id: str,
    candidate: DateRange,
    target_row_id: str,
    all_projects: Sequence[Project],
) -> ConflictDetectionResult:
    """Is this interactive drag position valid on its own row?"""
    return check_project_overlap(
        candidate,
        all_projects,
        exclude_project_id=dragged_project_id,
        same_row_only=True,
        target_row_id=target_row_id,
    )
