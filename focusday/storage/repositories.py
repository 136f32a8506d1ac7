from typing import List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session

from focusday.config.settings import get_settings
from focusday.models.entities import Energy, Priority, Slot, Task
from focusday.storage.database import DayWindowModel, TaskModel

WINDOW_ROW_ID = 1


class TaskRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, task_id: str) -> Optional[Task]:
        model = self.db.query(TaskModel).filter(TaskModel.id == task_id).first()
        if not model:
            return None
        return self._model_to_task(model)

    def list_all(self) -> List[Task]:
        models = self.db.query(TaskModel).order_by(TaskModel.position).all()
        return [self._model_to_task(m) for m in models]

    def save(self, task: Task) -> None:
        existing = self.db.query(TaskModel).filter(TaskModel.id == task.id).first()
        if existing:
            existing.title = task.title
            existing.duration = task.duration
            existing.priority = Priority(task.priority).value
            existing.energy = Energy(task.energy).value
            existing.category = task.category
            existing.due_time = task.due_time
            existing.must_do = task.must_do
            existing.notes = task.notes
            existing.preferred_slot = Slot(task.preferred_slot).value if task.preferred_slot else None
            existing.done = task.done
        else:
            last = self.db.query(func.max(TaskModel.position)).scalar()
            model = TaskModel(
                id=task.id,
                position=0 if last is None else last + 1,
                title=task.title,
                duration=task.duration,
                priority=Priority(task.priority).value,
                energy=Energy(task.energy).value,
                category=task.category,
                due_time=task.due_time,
                must_do=task.must_do,
                notes=task.notes,
                preferred_slot=Slot(task.preferred_slot).value if task.preferred_slot else None,
                done=task.done,
            )
            self.db.add(model)
        self.db.commit()

    def delete(self, task_id: str) -> bool:
        deleted = self.db.query(TaskModel).filter(TaskModel.id == task_id).delete()
        self.db.commit()
        return deleted > 0

    def delete_done(self) -> int:
        deleted = self.db.query(TaskModel).filter(TaskModel.done.is_(True)).delete()
        self.db.commit()
        return deleted

    @staticmethod
    def _model_to_task(model: TaskModel) -> Task:
        return Task(
            id=model.id,
            title=model.title,
            duration=model.duration,
            priority=Priority(model.priority),
            energy=Energy(model.energy),
            category=model.category,
            due_time=model.due_time,
            must_do=model.must_do,
            notes=model.notes,
            preferred_slot=Slot(model.preferred_slot) if model.preferred_slot else None,
            done=model.done,
        )


class DayWindowRepository:
    """Single-row store for the day window bounds."""

    def __init__(self, db: Session):
        self.db = db

    def get(self) -> Tuple[str, str]:
        model = self.db.query(DayWindowModel).filter(DayWindowModel.id == WINDOW_ROW_ID).first()
        if not model:
            settings = get_settings()
            return settings.default_day_start, settings.default_day_end
        return model.day_start, model.day_end

    def save(self, day_start: str, day_end: str) -> None:
        existing = self.db.query(DayWindowModel).filter(DayWindowModel.id == WINDOW_ROW_ID).first()
        if existing:
            existing.day_start = day_start
            existing.day_end = day_end
        else:
            self.db.add(DayWindowModel(id=WINDOW_ROW_ID, day_start=day_start, day_end=day_end))
        self.db.commit()
