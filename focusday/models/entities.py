from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple, Union


class Priority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Energy(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Slot(str, Enum):
    MORNING = "morning"
    AFTERNOON = "afternoon"
    EVENING = "evening"


DEFAULT_CATEGORY = "Other"


@dataclass(frozen=True)
class Task:
    id: str
    title: str
    duration: int  # minutes, >= 10
    priority: Priority = Priority.MEDIUM
    energy: Energy = Energy.MEDIUM
    category: str = DEFAULT_CATEGORY
    due_time: Optional[int] = None  # minutes from midnight
    must_do: bool = False
    notes: Optional[str] = None
    preferred_slot: Optional[Slot] = None
    done: bool = False


@dataclass(frozen=True)
class TaskBlock:
    id: str
    start: int
    end: int
    task: Task
    kind: str = field(default="task", init=False)

    @property
    def duration(self) -> int:
        return self.end - self.start


@dataclass(frozen=True)
class BreakBlock:
    id: str
    start: int
    end: int
    label: str = "Break"
    kind: str = field(default="break", init=False)

    @property
    def duration(self) -> int:
        return self.end - self.start


ScheduleItem = Union[TaskBlock, BreakBlock]


@dataclass(frozen=True)
class SchedulePlan:
    items: Tuple[ScheduleItem, ...]
    focus_minutes: int
    buffer_minutes: int
    finish_time: str  # "HH:MM"


@dataclass(frozen=True)
class DayState:
    tasks: List[Task]
    day_start: str
    day_end: str
