"""
Support technician speed-up model.
"""

from typing import Optional

from .errors import InvalidSupportPercentageError, InvalidSupportTechnicianError
from .types import SupportTechnicianEntry, WorkSchedule


MIN_REDUCTION_PERCENTAGE = 1
MAX_REDUCTION_PERCENTAGE = 50


def validate_support_technicians(
    support_technicians: list[SupportTechnicianEntry],
    primary_technician_id: Optional[int] = None,
    min_pct: int = MIN_REDUCTION_PERCENTAGE,
    max_pct: int = MAX_REDUCTION_PERCENTAGE,
) -> None:
    """Reject out-of-range percentages, the primary as support, and repeats."""
    seen: set[int] = set()
    for entry in support_technicians:
        if not min_pct <= entry.reduction_percentage <= max_pct:
            raise InvalidSupportPercentageError(
                f"Reduction for technician {entry.technician_id} must be within "
                f"{min_pct}-{max_pct}%, got {entry.reduction_percentage}"
            )
        if primary_technician_id is not None and entry.technician_id == primary_technician_id:
            raise InvalidSupportTechnicianError(
                f"Technician {entry.technician_id} is already the primary technician"
            )
        if entry.technician_id in seen:
            raise InvalidSupportTechnicianError(
                f"Technician {entry.technician_id} selected more than once"
            )
        seen.add(entry.technician_id)


def combined_reduction_factor(support_technicians: list[SupportTechnicianEntry]) -> float:
    """Product of (1 - r/100); each helper speeds up what the previous ones left."""
    factor = 1.0
    for entry in support_technicians:
        factor *= 1 - entry.reduction_percentage / 100
    return factor


def apply_support_reduction(
    base_hours: float,
    support_technicians: list[SupportTechnicianEntry],
    min_pct: int = MIN_REDUCTION_PERCENTAGE,
    max_pct: int = MAX_REDUCTION_PERCENTAGE,
) -> float:
    """
    Reduce base_hours by each support technician in turn.

    Raises:
        InvalidSupportPercentageError: a reduction outside [min_pct, max_pct]
        InvalidSupportTechnicianError: the same technician listed twice
    """
    validate_support_technicians(support_technicians, min_pct=min_pct, max_pct=max_pct)
    return base_hours * combined_reduction_factor(support_technicians)


def governing_schedule(
    primary_schedule: WorkSchedule,
    support_technicians: list[SupportTechnicianEntry],
) -> WorkSchedule:
    """
    Calendar used for the walk.

    Always the primary technician's: support schedules only change the hours
    figure, there is no multi-calendar intersection.
    """
    return primary_schedule


def has_mixed_schedules(
    primary_schedule: WorkSchedule,
    support_technicians: list[SupportTechnicianEntry],
) -> bool:
    return any(
        entry.schedule is not None and entry.schedule != primary_schedule
        for entry in support_technicians
    )
