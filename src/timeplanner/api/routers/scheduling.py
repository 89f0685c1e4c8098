"""
Router for the scheduling core.

Endpoints:
- POST /estimates  - Day estimates for one project
- POST /overlap    - Conflict check for a candidate range
- POST /live-drag  - Same-row conflict check during a drag
- POST /resolve    - adjust / reject / force decision for a conflict
- POST /slots      - Nearest conflict-free window
"""

from fastapi import APIRouter

from timeplanner.api import schemas
from timeplanner.platform.logging import get_logger
from timeplanner.scheduling import (
    ConflictDetectionResult,
    DateAdjustmentResult,
    check_project_overlap,
    compute_project_estimates,
    detect_live_drag_conflicts,
    find_nearest_available_slot,
    resolve_drag_conflicts,
    total_estimated_hours,
)

logger = get_logger(__name__)

router = APIRouter()


@router.post("/estimates", response_model=schemas.EstimateResponse)
async def compute_estimates(request: schemas.EstimateRequest):
    """
    Compute the day estimates of one project.
    """
    estimates = compute_project_estimates(
        request.project,
        request.milestones,
        request.events,
        request.holidays,
        request.settings,
        today=request.today,
    )
    logger.info(
        "Computed estimates",
        project_id=request.project.id,
        days=len(estimates),
    )
    return schemas.EstimateResponse(
        project_id=request.project.id,
        estimates=estimates,
        total_hours=total_estimated_hours(estimates),
    )


@router.post("/overlap", response_model=ConflictDetectionResult)
async def check_overlap(request: schemas.OverlapRequest):
    """
    Check a candidate range against the projects on the timeline.
    """
    return check_project_overlap(
        request.candidate,
        request.projects,
        exclude_project_id=request.exclude_project_id,
        same_row_only=request.same_row_only,
        target_row_id=request.target_row_id,
    )


@router.post("/live-drag", response_model=ConflictDetectionResult)
async def check_live_drag(request: schemas.LiveDragRequest):
    """
    Validate an interactive drag position on its own row.
    """
    return detect_live_drag_conflicts(
        request.dragged_project_id,
        request.candidate,
        request.target_row_id,
        request.projects,
    )


@router.post("/resolve", response_model=DateAdjustmentResult)
async def resolve_conflicts(request: schemas.ResolveRequest):
    """
    Turn a conflict into an adjust / reject / force decision.
    """
    result = resolve_drag_conflicts(
        request.requested,
        request.conflicting_projects,
        request.strategy,
    )
    logger.info(
        "Resolved drag conflict",
        strategy=request.strategy.value,
        was_adjusted=result.was_adjusted,
        days_moved=result.days_moved,
    )
    return result


@router.post("/slots", response_model=schemas.SlotResponse)
async def find_slot(request: schemas.SlotRequest):
    """
    Find the nearest window with the requested duration that is free.
    """
    slot = find_nearest_available_slot(
        request.requested_start,
        request.requested_end,
        request.existing_projects,
    )
    return schemas.SlotResponse(found=slot is not None, slot=slot)
