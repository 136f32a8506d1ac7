from typing import Optional, Tuple

from focusday.utils.clock import minutes_to_time, time_to_minutes

DEFAULT_WORKDAY_MINUTES = 8 * 60
LATEST_PUSHED_END = 23 * 60


def adjust_window(
    day_start: str,
    day_end: str,
    new_start: Optional[str] = None,
    new_end: Optional[str] = None,
) -> Tuple[str, str]:
    """
    Apply a window edit and return the normalized (start, end) pair.

    Moving the start at or past the end pushes the end to start + 8h, capped
    at 23:00. Moving the end is taken as given; generate_plan rejects a
    window that ends before it starts.
    """
    start, end = day_start, day_end
    if new_end is not None:
        end = minutes_to_time(time_to_minutes(new_end))
    if new_start is not None:
        start_min = time_to_minutes(new_start)
        if time_to_minutes(end) <= start_min:
            end = minutes_to_time(min(start_min + DEFAULT_WORKDAY_MINUTES, LATEST_PUSHED_END))
        start = minutes_to_time(start_min)
    return start, end
