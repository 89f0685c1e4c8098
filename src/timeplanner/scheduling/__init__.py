"""
Timeplanner - Scheduling Core

Pure, synchronous functions behind the project timeline:

Time allocation:
- is_working_day: Holiday + enabled-weekday eligibility
- classify_events: Planned vs. completed event hours per date
- generate_occurrences: Anchor dates of a recurring milestone
- allocate_segment: Even split of a budget over one segment
- compute_project_estimates: Event > milestone > auto-estimate layering

Timeline conflicts:
- check_project_overlap / detect_live_drag_conflicts: Date-range conflicts
- find_nearest_available_slot: Bounded search for a free window
- resolve_drag_conflicts: adjust / reject / force decisions
"""

from .models import (
    CalendarEvent,
    ConflictDetail,
    ConflictDetectionResult,
    DateAdjustmentResult,
    DateRange,
    DayEstimate,
    DayEventSummary,
    EstimateSource,
    EventCategory,
    EventType,
    Holiday,
    Milestone,
    MonthlyPattern,
    OverlapType,
    Project,
    RecurrenceType,
    RecurringConfig,
    ResolutionStrategy,
    WorkSettings,
    WorkSlot,
)
from .working_days import is_working_day, get_working_days_between
from .events import classify_events
from .recurrence import generate_occurrences
from .allocation import allocate_segment
from .estimates import (
    compute_project_estimates,
    aggregate_estimates_by_date,
    total_estimated_hours,
)
from .overlap import (
    intervals_overlap,
    check_project_overlap,
    detect_live_drag_conflicts,
    calculate_overlap_percentage,
)
from .slots import find_nearest_available_slot
from .resolver import resolve_drag_conflicts, adjust_project_dates_for_drag

__all__ = [
    # Models
    "CalendarEvent",
    "ConflictDetail",
    "ConflictDetectionResult",
    "DateAdjustmentResult",
    "DateRange",
    "DayEstimate",
    "DayEventSummary",
    "EstimateSource",
    "EventCategory",
    "EventType",
    "Holiday",
    "Milestone",
    "MonthlyPattern",
    "OverlapType",
    "Project",
    "RecurrenceType",
    "RecurringConfig",
    "ResolutionStrategy",
    "WorkSettings",
    "WorkSlot",
    # Time allocation
    "is_working_day",
    "get_working_days_between",
    "classify_events",
    "generate_occurrences",
    "allocate_segment",
    "compute_project_estimates",
    "aggregate_estimates_by_date",
    "total_estimated_hours",
    # Timeline conflicts
    "intervals_overlap",
    "check_project_overlap",
    "detect_live_drag_conflicts",
    "calculate_overlap_percentage",
    "find_nearest_available_slot",
    "resolve_drag_conflicts",
    "adjust_project_dates_for_drag",
]
