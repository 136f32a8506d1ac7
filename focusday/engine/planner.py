"""
Greedy single-day planner.

Walks a cursor from the start of the day window towards its end, placing open
tasks back-to-back in policy order (see focusday.engine.ordering) and
interleaving short breaks after long stretches of continuous focus.

Overflow policy: a task that does not fit in the remaining window is skipped,
not reported. It stays in the caller's task list and is reconsidered on the
next call. Due times are soft: they influence the order, never placement.

Complexity: O(n log n) sort + O(n * k) placement, k = size of the head tier.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from focusday.engine.errors import DuplicateTaskId, InvalidWindow
from focusday.engine.ordering import (
    DEFAULT_SLOT_BOUNDARIES,
    open_tasks_in_order,
    select_next,
    slot_at,
)
from focusday.models.entities import BreakBlock, ScheduleItem, SchedulePlan, Task, TaskBlock
from focusday.utils.clock import minutes_to_time, time_to_minutes

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlannerConfig:
    break_minutes: int = 15
    break_after_minutes: int = 90
    break_label: str = "Break"
    slot_boundaries: Tuple[float, float] = DEFAULT_SLOT_BOUNDARIES

    def __post_init__(self):
        if not 10 <= self.break_minutes <= 15:
            raise ValueError("break_minutes must be between 10 and 15")
        if self.break_after_minutes <= 0:
            raise ValueError("break_after_minutes must be positive")
        first, second = self.slot_boundaries
        if not 0 < first < second < 1:
            raise ValueError("slot_boundaries must be increasing fractions in (0, 1)")


DEFAULT_CONFIG = PlannerConfig()


def generate_plan(
    tasks: Iterable[Task],
    day_start: str,
    day_end: str,
    config: Optional[PlannerConfig] = None,
) -> SchedulePlan:
    """
    Build the schedule for one day window.

    Algorithm:
    1. Filter out done tasks and sort the rest by tier
    2. At each step pick the tier head, preferring a slot match for the cursor
    3. Place the task if it (and a pending break) fits, else drop it
    4. After a block pushes continuous focus past the threshold, mark a
       break as pending; it is emitted right before the next placed task,
       so a plan never starts or ends with a break

    Args:
        tasks: Task collection, insertion order is the final tie-break
        day_start: Window start "HH:MM"
        day_end: Window end "HH:MM"
        config: Break and slot tuning, DEFAULT_CONFIG when omitted

    Returns:
        A freshly built SchedulePlan

    Raises:
        InvalidTimeFormat: a bound is not "HH:MM"
        InvalidWindow: day_end is not after day_start
        DuplicateTaskId: two tasks share an id
    """
    config = config or DEFAULT_CONFIG
    start = time_to_minutes(day_start)
    end = time_to_minutes(day_end)
    if end <= start:
        raise InvalidWindow(f"day end {day_end} must be after day start {day_start}")

    tasks = list(tasks)
    seen = set()
    for task in tasks:
        if task.id in seen:
            raise DuplicateTaskId(f"task id {task.id!r} appears more than once")
        seen.add(task.id)

    pending = open_tasks_in_order(tasks)
    items: List[ScheduleItem] = []
    cursor = start
    focus_minutes = 0
    streak = 0  # continuous focus since the last break
    break_due = False
    breaks = 0
    last_task_end = None

    while pending and cursor < end:
        slot = slot_at(cursor, start, end, config.slot_boundaries)
        task = pending.pop(select_next(pending, slot))
        if task.duration <= 0:
            continue

        lead = 0
        if break_due and cursor + config.break_minutes <= end:
            lead = config.break_minutes
        if cursor + lead + task.duration > end:
            logger.debug(f"Task {task.id} ({task.duration} min) does not fit after {minutes_to_time(cursor)}")
            continue

        if lead:
            breaks += 1
            items.append(BreakBlock(f"break-{breaks}", cursor, cursor + lead, config.break_label))
            cursor += lead
            streak = 0

        items.append(TaskBlock(f"task-{task.id}", cursor, cursor + task.duration, task))
        cursor += task.duration
        last_task_end = cursor
        focus_minutes += task.duration
        streak += task.duration
        break_due = streak >= config.break_after_minutes

    return SchedulePlan(
        items=tuple(items),
        focus_minutes=focus_minutes,
        buffer_minutes=max(0, end - cursor),
        finish_time=minutes_to_time(last_task_end if last_task_end is not None else start),
    )
