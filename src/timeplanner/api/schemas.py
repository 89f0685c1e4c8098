"""
Request and response schemas for the scheduling endpoints.
"""

from typing import List, Optional

from pydantic import Field, model_validator

from timeplanner.scheduling.models import (
    CalendarDate,
    CalendarEvent,
    DateRange,
    DayEstimate,
    Holiday,
    Milestone,
    Project,
    ResolutionStrategy,
    SchedulingModel,
    WorkSettings,
)


# --- Day estimates ---

class EstimateRequest(SchedulingModel):
    project: Project
    milestones: List[Milestone] = Field(default_factory=list)
    events: List[CalendarEvent] = Field(default_factory=list)
    holidays: List[Holiday] = Field(default_factory=list)
    settings: WorkSettings = Field(default_factory=WorkSettings)
    # Estimated time is never placed before this date when given
    today: Optional[CalendarDate] = None


class EstimateResponse(SchedulingModel):
    project_id: str
    estimates: List[DayEstimate]
    total_hours: float


# --- Overlap ---

class OverlapRequest(SchedulingModel):
    candidate: DateRange
    projects: List[Project]
    exclude_project_id: Optional[str] = None
    same_row_only: bool = False
    target_row_id: Optional[str] = None


class LiveDragRequest(SchedulingModel):
    dragged_project_id: str
    candidate: DateRange
    target_row_id: str
    projects: List[Project]


# --- Resolution ---

class ResolveRequest(SchedulingModel):
    requested: DateRange
    conflicting_projects: List[Project] = Field(default_factory=list)
    strategy: ResolutionStrategy = ResolutionStrategy.ADJUST


class SlotRequest(SchedulingModel):
    requested_start: CalendarDate
    requested_end: CalendarDate
    existing_projects: List[Project] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_dates(self) -> "SlotRequest":
        if self.requested_end < self.requested_start:
            raise ValueError("requested_end is before requested_start")
        return self


class SlotResponse(SchedulingModel):
    found: bool
    slot: Optional[DateRange] = None
