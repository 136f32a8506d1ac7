import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from focusday.main import app
from focusday.models.entities import Energy, Priority, Slot, Task
from focusday.storage.cache import PlanCache, get_cache
from focusday.storage.database import Base, get_db


def make_task(task_id: str, duration: int = 60, **kwargs) -> Task:
    """Task with sensible defaults; override any field by keyword."""
    kwargs.setdefault("title", f"Task {task_id}")
    return Task(id=task_id, duration=duration, **kwargs)


@pytest.fixture
def single_must_do_task():
    """One high-priority must-do hour."""
    return make_task("report", duration=60, must_do=True, priority=Priority.HIGH)


@pytest.fixture
def three_hour_tasks():
    """Three 60 minute tasks without due times."""
    return [make_task(f"t{i}", duration=60) for i in range(1, 4)]


@pytest.fixture
def mixed_day():
    """A realistic day: deadlines, must-dos, slots, a done task."""
    return [
        make_task("email", duration=30, priority=Priority.LOW, energy=Energy.LOW, category="Work"),
        make_task("deck", duration=90, priority=Priority.HIGH, must_do=True, due_time=12 * 60, category="Work"),
        make_task("gym", duration=60, preferred_slot=Slot.EVENING, category="Health"),
        make_task("review", duration=45, priority=Priority.HIGH, due_time=15 * 60, category="Work"),
        make_task("groceries", duration=40, preferred_slot=Slot.AFTERNOON, category="Home"),
        make_task("reading", duration=50, priority=Priority.LOW, preferred_slot=Slot.MORNING, category="Learning"),
        make_task("call-bank", duration=20, priority=Priority.MEDIUM, done=True, category="Home"),
        make_task("plan-trip", duration=75, priority=Priority.MEDIUM, must_do=True, category="Home"),
        make_task("code", duration=120, priority=Priority.HIGH, energy=Energy.HIGH, category="Work"),
    ]


class InMemoryRedis:
    """Stands in for a redis client: only the calls PlanCache makes."""

    def __init__(self):
        self.store = {}

    def get(self, key):
        return self.store.get(key)

    def setex(self, key, ttl, value):
        self.store[key] = value

    def ping(self):
        return True


@pytest.fixture
def plan_cache():
    cache = PlanCache("redis://localhost:6379/0")
    cache.redis_client = InMemoryRedis()
    return cache


@pytest.fixture
def db_session():
    """Session on a private in-memory SQLite database."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def client(db_session):
    """API client with the database isolated and the plan cache disabled."""
    app.dependency_overrides[get_db] = lambda: db_session
    app.dependency_overrides[get_cache] = lambda: None
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def cached_client(db_session, plan_cache):
    app.dependency_overrides[get_db] = lambda: db_session
    app.dependency_overrides[get_cache] = lambda: plan_cache
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
