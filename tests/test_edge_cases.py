import pytest
from conftest import make_task

from focusday.engine.errors import InvalidTimeFormat
from focusday.engine.planner import PlannerConfig, generate_plan
from focusday.engine.window import adjust_window


class TestPlannerConfig:
    """Validation of break and slot tuning."""

    @pytest.mark.parametrize("minutes", [9, 16, 0])
    def test_break_length_bounds(self, minutes):
        with pytest.raises(ValueError):
            PlannerConfig(break_minutes=minutes)

    def test_break_threshold_positive(self):
        with pytest.raises(ValueError):
            PlannerConfig(break_after_minutes=0)

    @pytest.mark.parametrize("bounds", [(0.5, 0.5), (0.7, 0.3), (0.0, 0.5), (0.5, 1.0)])
    def test_slot_boundaries(self, bounds):
        with pytest.raises(ValueError):
            PlannerConfig(slot_boundaries=bounds)


class TestEdgeCases:
    """Boundary conditions of placement."""

    def test_task_exactly_fills_window(self):
        plan = generate_plan([make_task("all-day", duration=600)], "08:00", "18:00")
        assert (plan.items[0].start, plan.items[0].end) == (480, 1080)
        assert plan.buffer_minutes == 0

    def test_nothing_fits(self):
        plan = generate_plan([make_task("huge", duration=700)], "08:00", "18:00")
        assert plan.items == ()
        assert plan.finish_time == "08:00"
        assert plan.buffer_minutes == 600

    def test_smaller_task_fills_gap_after_overflow(self):
        tasks = [make_task("big", duration=120, must_do=True), make_task("small", duration=30)]
        plan = generate_plan(tasks, "08:00", "09:00")
        assert [i.task.id for i in plan.items] == ["small"]
        assert plan.buffer_minutes == 30

    def test_all_done(self):
        plan = generate_plan([make_task("a", done=True)], "08:00", "18:00")
        assert plan.items == ()
        assert plan.focus_minutes == 0

    def test_one_minute_window(self):
        plan = generate_plan([make_task("a", duration=10)], "23:58", "23:59")
        assert plan.items == ()
        assert plan.buffer_minutes == 1

    def test_many_tasks_stop_at_day_end(self):
        tasks = [make_task(f"t{i}", duration=10) for i in range(200)]
        plan = generate_plan(tasks, "08:00", "10:00")
        assert plan.items[-1].end <= 600
        assert [i.kind for i in plan.items].count("break") == 1
        assert plan.focus_minutes == 100
        assert plan.buffer_minutes == 5


class TestAdjustWindow:
    """Collaborator-side window normalization."""

    def test_start_before_end_kept(self):
        assert adjust_window("08:00", "18:00", new_start="10:00") == ("10:00", "18:00")

    def test_start_past_end_pushes_end(self):
        assert adjust_window("08:00", "12:00", new_start="13:00") == ("13:00", "21:00")

    def test_start_equal_end_pushes_end(self):
        assert adjust_window("08:00", "12:00", new_start="12:00") == ("12:00", "20:00")

    def test_pushed_end_capped_at_23(self):
        assert adjust_window("08:00", "18:00", new_start="19:00") == ("19:00", "23:00")

    def test_late_start_leaves_invalid_window(self):
        assert adjust_window("08:00", "18:00", new_start="23:30") == ("23:30", "23:00")

    def test_end_taken_as_given(self):
        assert adjust_window("08:00", "18:00", new_end="07:00") == ("08:00", "07:00")

    def test_both_and_normalized(self):
        assert adjust_window("08:00", "18:00", new_start="5:00", new_end="12:00") == ("05:00", "12:00")

    def test_no_change(self):
        assert adjust_window("08:00", "18:00") == ("08:00", "18:00")

    def test_malformed(self):
        with pytest.raises(InvalidTimeFormat):
            adjust_window("08:00", "18:00", new_start="noon")
