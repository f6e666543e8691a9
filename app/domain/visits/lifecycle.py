"""
Schedule status state machine

    upcoming ──start──> in_progress ──end──> completed
    missed (terminal, only ever set outside the API)

Every status has an entry in ``TRANSITIONS``; anything not listed there is
rejected with a ConflictError.
"""

from ...errors import ConflictError
from ...models import ScheduleStatus

TRANSITIONS: dict[ScheduleStatus, frozenset] = {
    ScheduleStatus.UPCOMING: frozenset({ScheduleStatus.IN_PROGRESS}),
    ScheduleStatus.IN_PROGRESS: frozenset({ScheduleStatus.COMPLETED}),
    ScheduleStatus.COMPLETED: frozenset(),
    ScheduleStatus.MISSED: frozenset(),
}

_REJECTION_MESSAGES = {
    (ScheduleStatus.IN_PROGRESS, ScheduleStatus.IN_PROGRESS): "Visit already started",
    (ScheduleStatus.COMPLETED, ScheduleStatus.IN_PROGRESS): "Visit already completed",
    (ScheduleStatus.MISSED, ScheduleStatus.IN_PROGRESS): "Visit was missed and cannot be started",
    (ScheduleStatus.UPCOMING, ScheduleStatus.COMPLETED): "Visit not started yet",
    (ScheduleStatus.COMPLETED, ScheduleStatus.COMPLETED): "Visit already completed",
    (ScheduleStatus.MISSED, ScheduleStatus.COMPLETED): "Visit was missed and cannot be ended",
}


def can_transition(current: ScheduleStatus, target: ScheduleStatus) -> bool:
    return target in TRANSITIONS[current]


def ensure_transition(current: ScheduleStatus, target: ScheduleStatus) -> None:
    """Raise ConflictError unless ``current -> target`` is a legal move"""
    if can_transition(current, target):
        return
    message = _REJECTION_MESSAGES.get(
        (current, target), f"Cannot move visit from {current.value} to {target.value}"
    )
    raise ConflictError(
        message,
        details={"current_status": current.value, "requested_status": target.value},
    )
