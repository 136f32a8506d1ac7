"""
Task ordering policy for the day planner.

Open tasks are ranked into tiers by a static key:

1. must-do before everything else
2. priority descending (high, medium, low)
3. tasks with a due time first, earliest deadline first

Tasks that share a tier are not interchangeable: the planner re-evaluates the
tier head every time the cursor moves and prefers the task whose preferred
slot matches the part of the day the cursor is in. Remaining ties fall back to
insertion order, so identical input always yields the identical sequence.

Complexity: O(n log n) for the initial sort, O(k) per selection where k is
the size of the head tier.
"""

from typing import Iterable, List, Optional, Tuple

from focusday.models.entities import Priority, Slot, Task

PRIORITY_RANK = {Priority.HIGH: 0, Priority.MEDIUM: 1, Priority.LOW: 2}

DEFAULT_SLOT_BOUNDARIES: Tuple[float, float] = (1 / 3, 2 / 3)


def tier_key(task: Task) -> Tuple[int, int, int, int]:
    """
    Static sort key of a task.

    Tasks without a due time sort after every task with one in the same
    priority tier.
    """
    if task.due_time is not None:
        due = (0, task.due_time)
    else:
        due = (1, 0)
    return (0 if task.must_do else 1, PRIORITY_RANK[Priority(task.priority)]) + due


def open_tasks_in_order(tasks: Iterable[Task]) -> List[Task]:
    """Drop completed tasks and stable-sort the rest by tier."""
    return sorted((t for t in tasks if not t.done), key=tier_key)


def slot_at(
    cursor: int,
    day_start: int,
    day_end: int,
    boundaries: Tuple[float, float] = DEFAULT_SLOT_BOUNDARIES,
) -> Slot:
    """
    Part of the day window the cursor falls into.

    Args:
        cursor: Current position (minutes from midnight)
        day_start: Window start (minutes)
        day_end: Window end (minutes), strictly after day_start
        boundaries: Fractions of the window where afternoon and evening begin

    Returns:
        Slot.MORNING, Slot.AFTERNOON or Slot.EVENING
    """
    progress = (cursor - day_start) / (day_end - day_start)
    if progress < boundaries[0]:
        return Slot.MORNING
    if progress < boundaries[1]:
        return Slot.AFTERNOON
    return Slot.EVENING


def select_next(pending: List[Task], slot: Slot) -> int:
    """
    Index of the task to try next.

    Only the head tier of `pending` (already sorted by tier_key) competes; the
    first task in it preferring `slot` wins, otherwise the tier head.
    """
    head = tier_key(pending[0])
    for idx, task in enumerate(pending):
        if tier_key(task) != head:
            break
        if _preferred(task) == slot:
            return idx
    return 0


def _preferred(task: Task) -> Optional[Slot]:
    if task.preferred_slot is None:
        return None
    return Slot(task.preferred_slot)
