"""
Example: planning a day directly with the core planner

Shows how a caller builds tasks, tunes breaks, and reads the plan back
without going through the HTTP service.
"""

from focusday.engine.planner import PlannerConfig, generate_plan
from focusday.models.entities import Energy, Priority, Slot, Task
from focusday.utils.clock import minutes_to_time, time_to_minutes
from focusday.utils.insights import day_insights


tasks = [
    Task(id="1", title="Quarterly deck", duration=90, priority=Priority.HIGH, must_do=True,
         due_time=time_to_minutes("12:00"), category="Work"),
    Task(id="2", title="Inbox zero", duration=30, priority=Priority.LOW, energy=Energy.LOW, category="Work"),
    Task(id="3", title="Run", duration=45, preferred_slot=Slot.EVENING, category="Health"),
    Task(id="4", title="Code review", duration=60, priority=Priority.HIGH, category="Work"),
]

# Shorter breaks, but after every hour of focus
config = PlannerConfig(break_minutes=10, break_after_minutes=60)
plan = generate_plan(tasks, "08:30", "17:00", config)

for item in plan.items:
    what = item.task.title if item.kind == "task" else item.label
    print(f"{minutes_to_time(item.start)}-{minutes_to_time(item.end)}  {what}")

print(f"focus {plan.focus_minutes} min, buffer {plan.buffer_minutes} min, done by {plan.finish_time}")
print(day_insights(plan, tasks, seed=1).motivation)
