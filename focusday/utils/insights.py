import random
from collections import Counter
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from focusday.models.entities import Energy, Priority, SchedulePlan, Task

MOTIVATION_POOL = (
    "Focus on one task at a time; the plan already picked the best order.",
    "Short breaks after each block give your brain a chance to reset.",
    "Plan a reward for the end of the day once the key task is done.",
    "Take care of what brings the most peace of mind first; the rest gets easier.",
    "Match your playlist to the energy level of the current block.",
)

ENERGY_TIPS = {
    Energy.HIGH: "These tasks need deep focus. Fit them in early, before distractions show up.",
    Energy.MEDIUM: "Medium-energy tasks work well after lunch and in shorter time windows.",
    Energy.LOW: "Low energy cost? Use them to fill the buffer or travel time.",
}

PRIORITY_TIPS = {
    Priority.HIGH: "High priority: plan a checkpoint to make sure you are on track.",
    Priority.MEDIUM: "Medium priority: make sure you know what 'done' means.",
    Priority.LOW: "Low priority: ideal for closing the day when energy drops but you still want progress.",
}


@dataclass(frozen=True)
class CategoryStats:
    total: int
    done: int


@dataclass(frozen=True)
class DayInsights:
    focus_minutes: int
    buffer_minutes: int
    finish_time: str
    must_do_count: int
    remaining_minutes: int
    dominant_energy: Optional[Energy]
    dominant_priority: Optional[Priority]
    energy_tip: Optional[str]
    priority_tip: Optional[str]
    motivation: str


def category_stats(tasks: Iterable[Task]) -> Dict[str, CategoryStats]:
    """Completion counts per category, in order of first appearance."""
    totals: Dict[str, List[int]] = {}
    for task in tasks:
        counts = totals.setdefault(task.category, [0, 0])
        counts[0] += 1
        counts[1] += 1 if task.done else 0
    return {cat: CategoryStats(total=t, done=d) for cat, (t, d) in totals.items()}


def _dominant(values: List, order: List):
    # ties go to the first level in `order` (high before medium before low)
    if not values:
        return None
    counts = Counter(values)
    return max(order, key=lambda level: (counts[level], -order.index(level)))


def day_insights(plan: SchedulePlan, tasks: Iterable[Task], seed: Optional[int] = None) -> DayInsights:
    """
    Summarize the day for display next to the plan.

    The motivational line is drawn from MOTIVATION_POOL with random.Random(seed),
    so a fixed seed always picks the same message.
    """
    open_tasks = [t for t in tasks if not t.done]
    energy = _dominant([Energy(t.energy) for t in open_tasks], list(Energy))
    priority = _dominant([Priority(t.priority) for t in open_tasks], list(Priority))
    return DayInsights(
        focus_minutes=plan.focus_minutes,
        buffer_minutes=plan.buffer_minutes,
        finish_time=plan.finish_time,
        must_do_count=sum(1 for t in open_tasks if t.must_do),
        remaining_minutes=sum(t.duration for t in open_tasks),
        dominant_energy=energy,
        dominant_priority=priority,
        energy_tip=ENERGY_TIPS[energy] if energy is not None else None,
        priority_tip=PRIORITY_TIPS[priority] if priority is not None else None,
        motivation=random.Random(seed).choice(MOTIVATION_POOL),
    )
