from conftest import make_task

from focusday.engine.planner import generate_plan
from focusday.models.entities import Energy, Priority
from focusday.utils.insights import (
    ENERGY_TIPS,
    MOTIVATION_POOL,
    PRIORITY_TIPS,
    CategoryStats,
    category_stats,
    day_insights,
)


class TestCategoryStats:
    """Per-category completion counts."""

    def test_counts_in_first_seen_order(self, mixed_day):
        stats = category_stats(mixed_day)

        assert list(stats) == ["Work", "Health", "Home", "Learning"]
        assert stats["Work"] == CategoryStats(total=4, done=0)
        assert stats["Home"] == CategoryStats(total=3, done=1)

    def test_empty(self):
        assert category_stats([]) == {}


class TestDayInsights:
    """Summary shown next to the plan."""

    def test_counts_open_tasks_only(self, mixed_day):
        plan = generate_plan(mixed_day, "08:00", "18:00")
        summary = day_insights(plan, mixed_day, seed=1)

        assert summary.must_do_count == 2
        assert summary.remaining_minutes == sum(t.duration for t in mixed_day if not t.done)
        assert summary.focus_minutes == plan.focus_minutes
        assert summary.finish_time == plan.finish_time

    def test_dominant_levels(self):
        tasks = [
            make_task("a", energy=Energy.LOW, priority=Priority.LOW),
            make_task("b", energy=Energy.LOW, priority=Priority.HIGH),
            make_task("c", energy=Energy.HIGH, priority=Priority.LOW),
        ]
        summary = day_insights(generate_plan(tasks, "08:00", "18:00"), tasks, seed=0)

        assert summary.dominant_energy == Energy.LOW
        assert summary.dominant_priority == Priority.LOW
        assert summary.energy_tip == ENERGY_TIPS[Energy.LOW]
        assert summary.priority_tip == PRIORITY_TIPS[Priority.LOW]

    def test_tie_prefers_higher_level(self):
        tasks = [make_task("a", energy=Energy.MEDIUM), make_task("b", energy=Energy.HIGH)]
        summary = day_insights(generate_plan(tasks, "08:00", "18:00"), tasks)
        assert summary.dominant_energy == Energy.HIGH

    def test_no_open_tasks(self):
        tasks = [make_task("a", done=True)]
        summary = day_insights(generate_plan(tasks, "08:00", "18:00"), tasks, seed=3)

        assert summary.dominant_energy is None
        assert summary.dominant_priority is None
        assert summary.energy_tip is None
        assert summary.must_do_count == 0
        assert summary.remaining_minutes == 0

    def test_seeded_motivation_is_deterministic(self, mixed_day):
        plan = generate_plan(mixed_day, "08:00", "18:00")
        first = day_insights(plan, mixed_day, seed=42).motivation

        assert first in MOTIVATION_POOL
        assert all(day_insights(plan, mixed_day, seed=42).motivation == first for _ in range(5))
