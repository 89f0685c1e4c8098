"""
Scheduling models for the time allocation and overlap engines.

Input records (projects, milestones, events, holidays, work settings) and the
pure outputs computed from them. Field names are snake_case; the camelCase
spelling used by the web client is accepted as an alias on input and used
when serializing.
"""

from datetime import date, datetime
from enum import Enum
from typing import Annotated, Any, Dict, List, Optional

from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from .dates import to_date


def _parse_calendar_date(value: Any) -> Any:
    if value is None:
        return None
    try:
        return to_date(value)
    except TypeError as e:
        raise ValueError(str(e)) from e


CalendarDate = Annotated[date, BeforeValidator(_parse_calendar_date)]


def _to_local_naive(value: datetime) -> datetime:
    """Offset-aware times are converted to naive local wall-clock time."""
    if value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)


LocalDateTime = Annotated[datetime, AfterValidator(_to_local_naive)]


def _check_order(start: Optional[date], end: Optional[date], record: str) -> None:
    if start is not None and end is not None and end < start:
        raise ValueError(f"{record} end_date {end} is before start_date {start}")


class EstimateSource(str, Enum):
    """Where the hours of a day estimate came from."""
    EVENT = "event"
    MILESTONE_ALLOCATION = "milestone-allocation"
    PROJECT_AUTO_ESTIMATE = "project-auto-estimate"


class RecurrenceType(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


class MonthlyPattern(str, Enum):
    DATE = "date"
    DAY_OF_WEEK = "dayOfWeek"


class EventCategory(str, Enum):
    """Habits and tasks never count toward a project."""
    EVENT = "event"
    HABIT = "habit"
    TASK = "task"


class EventType(str, Enum):
    PLANNED = "planned"
    TRACKED = "tracked"
    COMPLETED = "completed"


class OverlapType(str, Enum):
    PARTIAL = "partial"
    COMPLETE = "complete"
    ADJACENT = "adjacent"


class ResolutionStrategy(str, Enum):
    """How a detected drag conflict is turned into a decision."""
    ADJUST = "adjust"
    REJECT = "reject"
    FORCE = "force"


class SchedulingModel(BaseModel):
    """Base for all scheduling records: immutable, camelCase aliases."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


# =============================================================================
# INPUTS
# =============================================================================

class WorkSlot(SchedulingModel):
    """A block of working time inside a weekday."""
    id: Optional[str] = None
    start_time: str
    end_time: str
    duration: float = 0.0


class WorkSettings(SchedulingModel):
    """
    User work-week settings.

    ``weekly_work_hours`` maps a lowercase weekday name ('monday' ...
    'sunday') to its work slots. A weekday with at least one slot is a
    working day for projects that do not define their own auto-estimate days.
    """
    weekly_work_hours: Dict[str, List[WorkSlot]] = Field(default_factory=dict)


class Holiday(SchedulingModel):
    """Inclusive date range on which nothing is allocated."""
    id: Optional[str] = None
    title: Optional[str] = None
    start_date: CalendarDate
    end_date: CalendarDate

    @model_validator(mode="after")
    def _check_dates(self) -> "Holiday":
        _check_order(self.start_date, self.end_date, "holiday")
        return self

    def contains(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date


class Project(SchedulingModel):
    """
    A project bar on the timeline.

    Continuous projects are open-ended: their ``end_date`` is ignored, they
    never receive auto-estimates and they block their row from their start
    onward.
    """
    id: str
    name: Optional[str] = None
    start_date: CalendarDate
    end_date: Optional[CalendarDate] = None
    estimated_hours: float = 0.0
    # Weekday name -> whether auto-estimates may land on that weekday
    auto_estimate_days: Optional[Dict[str, bool]] = None
    row_id: Optional[str] = None
    continuous: bool = False

    @model_validator(mode="after")
    def _check_dates(self) -> "Project":
        # A continuous project's end_date is ignored, stale values are allowed
        if not self.continuous:
            _check_order(self.start_date, self.end_date, "project")
        return self

    @property
    def has_fixed_end(self) -> bool:
        return not self.continuous and self.end_date is not None


class RecurringConfig(SchedulingModel):
    """
    Recurrence pattern of a milestone.

    Days of week use the web client convention: 0 = Sunday ... 6 = Saturday.
    """
    type: RecurrenceType
    interval: int = Field(1, ge=1)
    weekly_day_of_week: Optional[int] = Field(None, ge=0, le=6)
    monthly_pattern: Optional[MonthlyPattern] = None
    monthly_date: Optional[int] = Field(None, ge=1, le=31)
    monthly_week_of_month: Optional[int] = Field(None, ge=1, le=5)
    monthly_day_of_week: Optional[int] = Field(None, ge=0, le=6)


class Milestone(SchedulingModel):
    """
    A milestone or phase with an hour budget.

    A milestone with an explicit ``start_date`` is a phase: its segment start
    is authoritative. ``due_date`` and ``time_allocation`` are legacy
    spellings used when the newer fields are absent.
    """
    id: str
    project_id: str
    start_date: Optional[CalendarDate] = None
    end_date: Optional[CalendarDate] = None
    due_date: Optional[CalendarDate] = None
    time_allocation_hours: Optional[float] = None
    time_allocation: Optional[float] = None
    is_recurring: bool = False
    recurring_config: Optional[RecurringConfig] = None

    @model_validator(mode="after")
    def _require_end(self) -> "Milestone":
        if self.end_date is None and self.due_date is None:
            raise ValueError("milestone needs an end_date or a due_date")
        return self

    @property
    def effective_end(self) -> date:
        return self.end_date or self.due_date

    @property
    def allocation_hours(self) -> float:
        if self.time_allocation_hours is not None:
            return self.time_allocation_hours
        return self.time_allocation or 0.0

    @property
    def is_phase(self) -> bool:
        return self.start_date is not None


class CalendarEvent(SchedulingModel):
    """
    A logged calendar block, grouped by the calendar date it starts on.

    Offset-aware times are stored as naive local time, so mixed inputs compare
    and group by the local calendar date.
    """
    id: str
    project_id: Optional[str] = None
    start_time: LocalDateTime
    end_time: LocalDateTime
    completed: bool = False
    category: EventCategory = EventCategory.EVENT
    event_type: EventType = Field(EventType.PLANNED, alias="type")

    @property
    def is_valid(self) -> bool:
        return self.end_time > self.start_time

    @property
    def is_completed_time(self) -> bool:
        return self.completed or self.event_type in (EventType.TRACKED, EventType.COMPLETED)

    @property
    def duration_hours(self) -> float:
        if not self.is_valid:
            return 0.0
        return (self.end_time - self.start_time).total_seconds() / 3600.0

    @property
    def local_date(self) -> date:
        return self.start_time.date()


class DateRange(SchedulingModel):
    """Inclusive calendar range."""
    start_date: CalendarDate
    end_date: CalendarDate

    @model_validator(mode="after")
    def _check_dates(self) -> "DateRange":
        _check_order(self.start_date, self.end_date, "range")
        return self


# =============================================================================
# OUTPUTS
# =============================================================================

class DayEventSummary(SchedulingModel):
    """Planned vs. completed event hours on one date."""
    planned_hours: float = 0.0
    completed_hours: float = 0.0
    event_count: int = 0

    @property
    def total_hours(self) -> float:
        return self.planned_hours + self.completed_hours


class DayEstimate(SchedulingModel):
    """Hours estimated for one project on one date. Never persisted."""
    date: CalendarDate
    project_id: str
    hours: float
    source: EstimateSource
    milestone_id: Optional[str] = None
    is_working_day: bool = True
    is_planned_event: Optional[bool] = None
    is_completed_event: Optional[bool] = None


class ConflictDetail(SchedulingModel):
    project_id: str
    overlap_type: OverlapType
    # -1 when the other project is continuous (indefinite overlap)
    overlap_days: int


class ConflictDetectionResult(SchedulingModel):
    has_conflicts: bool
    conflicting_projects: List[Project] = Field(default_factory=list)
    conflict_details: List[ConflictDetail] = Field(default_factory=list)


class DateAdjustmentResult(SchedulingModel):
    original_start_date: CalendarDate
    original_end_date: CalendarDate
    adjusted_start_date: CalendarDate
    adjusted_end_date: CalendarDate
    was_adjusted: bool
    adjustment_reason: str
    days_moved: int = 0
