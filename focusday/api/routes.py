from typing import Dict, List, Optional
import logging
import uuid
from dataclasses import asdict, replace

from fastapi import APIRouter, HTTPException, Depends, Query, Response, status
from pydantic import BaseModel, Field, field_validator, model_validator

from focusday.config.settings import get_settings
from focusday.engine.errors import SchedulingError
from focusday.engine.planner import PlannerConfig, generate_plan
from focusday.engine.window import adjust_window
from focusday.models.entities import (
    DEFAULT_CATEGORY,
    DayState,
    Energy,
    Priority,
    SchedulePlan,
    Slot,
    Task,
    TaskBlock,
)
from focusday.storage.cache import PlanCache, get_cache
from focusday.storage.database import get_db
from focusday.storage.repositories import DayWindowRepository, TaskRepository
from focusday.utils.clock import minutes_to_time, time_to_minutes
from focusday.utils.insights import category_stats, day_insights
from sqlalchemy.orm import Session

router = APIRouter()
settings = get_settings()
planner_config = PlannerConfig(
    break_minutes=settings.break_minutes,
    break_after_minutes=settings.break_after_minutes,
)
logger = logging.getLogger(__name__)


class TaskCreateDTO(BaseModel):
    title: str
    duration: int = 45
    priority: Priority = Priority.MEDIUM
    energy: Energy = Energy.MEDIUM
    category: str = DEFAULT_CATEGORY
    due_time: Optional[str] = None
    must_do: bool = False
    notes: Optional[str] = None
    preferred_slot: Optional[Slot] = None

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str):
        v = v.strip()
        if not v:
            raise ValueError("title must not be blank")
        return v

    @field_validator("duration")
    @classmethod
    def validate_duration(cls, v: int):
        """Raise short tasks to the 10 minute floor; reject anything over a day."""
        if v > 1440:
            raise ValueError("duration must be at most 1440 minutes")
        return max(10, v)

    @field_validator("category")
    @classmethod
    def validate_category(cls, v: str):
        return v.strip() or DEFAULT_CATEGORY

    @field_validator("notes")
    @classmethod
    def validate_notes(cls, v: Optional[str]):
        if v is None:
            return v
        return v.strip() or None

    @field_validator("due_time")
    @classmethod
    def validate_due_time(cls, v: Optional[str]):
        """Blank means no deadline; otherwise normalize to zero-padded HH:MM."""
        if v is None or not v.strip():
            return None
        return minutes_to_time(time_to_minutes(v))

    @field_validator("preferred_slot", mode="before")
    @classmethod
    def validate_preferred_slot(cls, v):
        return v or None

    def to_domain(self, task_id: str, done: bool = False) -> Task:
        return Task(
            id=task_id,
            title=self.title,
            duration=self.duration,
            priority=self.priority,
            energy=self.energy,
            category=self.category,
            due_time=None if self.due_time is None else time_to_minutes(self.due_time),
            must_do=self.must_do,
            notes=self.notes,
            preferred_slot=self.preferred_slot,
            done=done,
        )


class TaskDTO(TaskCreateDTO):
    id: str
    done: bool = False

    def to_task(self) -> Task:
        return self.to_domain(self.id, self.done)

    @classmethod
    def from_domain(cls, t: Task) -> "TaskDTO":
        return cls(
            id=t.id,
            title=t.title,
            duration=t.duration,
            priority=t.priority,
            energy=t.energy,
            category=t.category,
            due_time=None if t.due_time is None else minutes_to_time(t.due_time),
            must_do=t.must_do,
            notes=t.notes,
            preferred_slot=t.preferred_slot,
            done=t.done,
        )


class PlanItemDTO(BaseModel):
    id: str
    kind: str
    start: int
    end: int
    start_time: str
    end_time: str
    task: Optional[TaskDTO] = None
    label: Optional[str] = None


class PlanResponse(BaseModel):
    items: List[PlanItemDTO]
    focus_minutes: int
    buffer_minutes: int
    finish_time: str
    cached: bool = False

    @classmethod
    def from_domain(cls, plan: SchedulePlan) -> "PlanResponse":
        items = []
        for item in plan.items:
            if isinstance(item, TaskBlock):
                detail = {"task": TaskDTO.from_domain(item.task)}
            else:
                detail = {"label": item.label}
            items.append(PlanItemDTO(
                id=item.id,
                kind=item.kind,
                start=item.start,
                end=item.end,
                start_time=minutes_to_time(item.start),
                end_time=minutes_to_time(item.end),
                **detail,
            ))
        return cls(
            items=items,
            focus_minutes=plan.focus_minutes,
            buffer_minutes=plan.buffer_minutes,
            finish_time=plan.finish_time,
        )


class GenerateRequest(BaseModel):
    tasks: List[TaskDTO]
    day_start: str = settings.default_day_start
    day_end: str = settings.default_day_end

    @model_validator(mode="after")
    def validate_unique_ids(self):
        seen = set()
        for task in self.tasks:
            if task.id in seen:
                raise ValueError(f"duplicate task id {task.id!r}")
            seen.add(task.id)
        return self


class WindowDTO(BaseModel):
    day_start: str
    day_end: str


class WindowUpdateRequest(BaseModel):
    day_start: Optional[str] = None
    day_end: Optional[str] = None


class DayStateResponse(BaseModel):
    tasks: List[TaskDTO]
    day_start: str
    day_end: str


class CategoryStatsDTO(BaseModel):
    total: int
    done: int


class InsightsResponse(BaseModel):
    focus_minutes: int
    buffer_minutes: int
    finish_time: str
    must_do_count: int
    remaining_minutes: int
    dominant_energy: Optional[Energy] = None
    dominant_priority: Optional[Priority] = None
    energy_tip: Optional[str] = None
    priority_tip: Optional[str] = None
    motivation: str
    categories: Dict[str, CategoryStatsDTO] = Field(default_factory=dict)


class ClearCompletedResponse(BaseModel):
    removed: int


def _plan_or_400(tasks: List[Task], day_start: str, day_end: str) -> SchedulePlan:
    try:
        return generate_plan(tasks, day_start, day_end, planner_config)
    except SchedulingError as exc:
        logger.warning(f"Rejected day window {day_start}-{day_end}: {exc}")
        raise HTTPException(status_code=400, detail=str(exc))


def _build_plan(tasks: List[Task], day_start: str, day_end: str, cache: Optional[PlanCache]) -> PlanResponse:
    """Generate (or fetch from cache) the plan for a task list and window."""
    plan_hash = None
    if cache is not None:
        open_tasks = [TaskDTO.from_domain(t).model_dump(mode="json") for t in tasks if not t.done]
        plan_hash = PlanCache.hash_inputs(open_tasks, day_start, day_end)
        cached_plan = cache.get(plan_hash)
        if cached_plan:
            logger.info("Cache hit")
            return PlanResponse(**{**cached_plan, "cached": True})

    plan = _plan_or_400(tasks, day_start, day_end)
    response = PlanResponse.from_domain(plan)
    logger.info(
        f"Plan generated: {len(plan.items)} items, focus={plan.focus_minutes} min, "
        f"buffer={plan.buffer_minutes} min, finish={plan.finish_time}"
    )

    if cache is not None:
        cache.set(plan_hash, response.model_dump(mode="json"))
    return response


def _load_state(db: Session) -> DayState:
    day_start, day_end = DayWindowRepository(db).get()
    return DayState(tasks=TaskRepository(db).list_all(), day_start=day_start, day_end=day_end)


@router.post("/plan/generate", response_model=PlanResponse, summary="Generate a day plan")
def generate(req: GenerateRequest, cache: Optional[PlanCache] = Depends(get_cache)):
    """
    Build a plan for the tasks and window in the request body, without
    touching stored state.

    **Ordering**: must-do first, then priority, then earliest due time, then
    preferred slot for the current part of the day, then request order.

    **Error Handling:**
    - 400: malformed HH:MM bound or a window that does not end after it starts
    - 422: invalid task payload
    """
    logger.info(f"Generate request: {len(req.tasks)} tasks, window {req.day_start}-{req.day_end}")
    tasks = [t.to_task() for t in req.tasks]
    return _build_plan(tasks, req.day_start, req.day_end, cache)


@router.get("/day", response_model=DayStateResponse, summary="Stored tasks and day window")
def get_day(db: Session = Depends(get_db)):
    state = _load_state(db)
    return {"tasks": [TaskDTO.from_domain(t) for t in state.tasks], "day_start": state.day_start, "day_end": state.day_end}


@router.put("/day/window", response_model=WindowDTO, summary="Move the day window")
def update_window(req: WindowUpdateRequest, db: Session = Depends(get_db)):
    """
    Update day start and/or end.

    Moving the start at or past the end pushes the end to start + 8h
    (no later than 23:00).
    """
    repo = DayWindowRepository(db)
    day_start, day_end = repo.get()
    try:
        day_start, day_end = adjust_window(day_start, day_end, req.day_start, req.day_end)
    except SchedulingError as exc:
        logger.warning(f"Rejected window update: {exc}")
        raise HTTPException(status_code=400, detail=str(exc))
    repo.save(day_start, day_end)
    logger.info(f"Day window set to {day_start}-{day_end}")
    return {"day_start": day_start, "day_end": day_end}


@router.post("/day/clear-completed", response_model=ClearCompletedResponse, summary="Remove done tasks")
def clear_completed(db: Session = Depends(get_db)):
    removed = TaskRepository(db).delete_done()
    logger.info(f"Cleared {removed} completed tasks")
    return {"removed": removed}


@router.get("/day/plan", response_model=PlanResponse, summary="Plan for the stored day")
def day_plan(db: Session = Depends(get_db), cache: Optional[PlanCache] = Depends(get_cache)):
    state = _load_state(db)
    return _build_plan(state.tasks, state.day_start, state.day_end, cache)


@router.get("/day/insights", response_model=InsightsResponse, summary="Day summary and tips")
def insights(
    db: Session = Depends(get_db),
    seed: Optional[int] = Query(None, description="Fixes the motivational message choice"),
):
    """
    Metrics of the stored day's plan, counts over open tasks, dominant
    energy/priority tips and per-category completion.
    """
    state = _load_state(db)
    plan = _plan_or_400(state.tasks, state.day_start, state.day_end)
    summary = day_insights(plan, state.tasks, seed=seed)
    categories = {
        name: CategoryStatsDTO(total=stats.total, done=stats.done)
        for name, stats in category_stats(state.tasks).items()
    }
    return InsightsResponse(**asdict(summary), categories=categories)


@router.post("/tasks", response_model=TaskDTO, status_code=status.HTTP_201_CREATED, summary="Add a task")
def create_task(req: TaskCreateDTO, db: Session = Depends(get_db)):
    task = req.to_domain(uuid.uuid4().hex)
    TaskRepository(db).save(task)
    logger.info(f"Task {task.id} created: {task.title!r} ({task.duration} min)")
    return TaskDTO.from_domain(task)


@router.post("/tasks/{task_id}/toggle", response_model=TaskDTO, summary="Flip a task's done flag")
def toggle_task(task_id: str, db: Session = Depends(get_db)):
    repo = TaskRepository(db)
    task = repo.get_by_id(task_id)
    if task is None:
        logger.warning(f"Toggle for unknown task {task_id}")
        raise HTTPException(status_code=404, detail=f"Unknown task {task_id}")
    task = replace(task, done=not task.done)
    repo.save(task)
    return TaskDTO.from_domain(task)


@router.delete("/tasks/{task_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Remove a task")
def delete_task(task_id: str, db: Session = Depends(get_db)):
    if not TaskRepository(db).delete(task_id):
        logger.warning(f"Delete for unknown task {task_id}")
        raise HTTPException(status_code=404, detail=f"Unknown task {task_id}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
