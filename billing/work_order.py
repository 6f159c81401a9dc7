"""Work-order status lifecycle for a technician's field visit"""
from typing import Dict, FrozenSet, Iterable, Optional, Union

from .errors import ValidationError
from .models import LaborEntry, WorkOrderStatus

S = WorkOrderStatus

# Allowed moves out of each status. COMPLETED and CANCELLED are terminal.
TRANSITIONS: Dict[WorkOrderStatus, FrozenSet[WorkOrderStatus]] = {
    S.PENDING: frozenset({S.SCHEDULED, S.CONFIRMED, S.EN_ROUTE, S.CANCELLED}),
    S.SCHEDULED: frozenset({S.CONFIRMED, S.EN_ROUTE, S.CANCELLED}),
    S.CONFIRMED: frozenset({S.EN_ROUTE, S.CANCELLED}),
    S.EN_ROUTE: frozenset({S.ARRIVED, S.CANCELLED}),
    S.ARRIVED: frozenset({S.IN_PROGRESS, S.CANCELLED}),
    S.IN_PROGRESS: frozenset({S.ON_HOLD, S.COMPLETED, S.REQUIRES_FOLLOWUP}),
    S.ON_HOLD: frozenset({S.IN_PROGRESS, S.CANCELLED}),
    S.REQUIRES_FOLLOWUP: frozenset({S.SCHEDULED, S.CANCELLED}),
    S.COMPLETED: frozenset(),
    S.CANCELLED: frozenset(),
}

# The single "next step" a technician takes from each status
NEXT_STEP: Dict[WorkOrderStatus, WorkOrderStatus] = {
    S.PENDING: S.EN_ROUTE,
    S.SCHEDULED: S.EN_ROUTE,
    S.CONFIRMED: S.EN_ROUTE,
    S.EN_ROUTE: S.ARRIVED,
    S.ARRIVED: S.IN_PROGRESS,
    S.IN_PROGRESS: S.COMPLETED,
    S.ON_HOLD: S.IN_PROGRESS,
}

STATUS_LABELS = {
    S.PENDING: 'Pending',
    S.SCHEDULED: 'Scheduled',
    S.CONFIRMED: 'Confirmed',
    S.EN_ROUTE: 'En Route',
    S.ARRIVED: 'Arrived',
    S.IN_PROGRESS: 'In Progress',
    S.ON_HOLD: 'On Hold',
    S.COMPLETED: 'Completed',
    S.CANCELLED: 'Cancelled',
    S.REQUIRES_FOLLOWUP: 'Follow-up',
}


def parse_status(value: Union[WorkOrderStatus, str]) -> WorkOrderStatus:
    """Accept an enum member or its API code."""
    if isinstance(value, WorkOrderStatus):
        return value
    try:
        return WorkOrderStatus(str(value).strip().upper())
    except ValueError:
        raise ValidationError(f"Unknown work order status: {value!r}") from None


def can_transition(current, target) -> bool:
    return parse_status(target) in TRANSITIONS[parse_status(current)]


def transition(
    current: Union[WorkOrderStatus, str],
    target: Union[WorkOrderStatus, str],
    labor_entries: Iterable[LaborEntry] = (),
) -> WorkOrderStatus:
    """
    Move a work order from one status to another.

    Args:
        current: Status the work order is in now
        target: Requested status
        labor_entries: Clock sessions of the work order; a job can not be
            completed while a technician is still clocked in

    Returns:
        The new status

    Raises:
        ValidationError: if the move is not allowed
    """
    current = parse_status(current)
    target = parse_status(target)

    if target not in TRANSITIONS[current]:
        raise ValidationError(
            f"Cannot move work order from {STATUS_LABELS[current]} to {STATUS_LABELS[target]}"
        )
    if target == S.COMPLETED and any(entry.is_open for entry in labor_entries):
        raise ValidationError("Clock out before completing the work")
    return target


def next_step(current: Union[WorkOrderStatus, str]) -> Optional[WorkOrderStatus]:
    """Status reached by the technician's main action, None when there is none."""
    return NEXT_STEP.get(parse_status(current))


def is_terminal(current: Union[WorkOrderStatus, str]) -> bool:
    return not TRANSITIONS[parse_status(current)]
