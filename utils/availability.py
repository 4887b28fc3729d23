import pandas as pd
from typing import Dict, List, Tuple
import logging

logger = logging.getLogger(__name__)

"""
Helpers for teacher availability grids: defaults, resizing after a configuration
change, stale-grid detection and the per-teacher availability overview.
"""


def day_key(day: int) -> str:
    """Availability grids are keyed by the day index as a string, matching the JSON contract."""
    return str(day)


def default_teacher_availability(configuration) -> Dict[str, List[bool]]:
    """Every configured hour of every day marked free."""
    return {
        day_key(d): [True] * configuration.get_hours_for_day(d)
        for d in range(configuration.total_days)
    }


def recompute_availability_for_new_configuration(
    old_configuration,
    new_configuration,
    existing: Dict[str, Dict[str, List[bool]]],
) -> Dict[str, Dict[str, List[bool]]]:
    """
    Resize availability grids after the daily hour counts change.

    Pure function: `existing` is left untouched and a new mapping is returned.
    For each teacher and day, hours that still exist keep their flag, new hours
    are free, and days without a grid become fully free.

    Args:
        old_configuration: Configuration the grids were created for (only used for logging).
        new_configuration: Configuration to resize to.
        existing: teacher -> day key -> list of flags.

    Returns:
        dict: teacher -> day key -> list of flags sized to `new_configuration`.
    """
    resized = {}
    for teacher, days in existing.items():
        updated = {}
        for d in range(new_configuration.total_days):
            new_len = new_configuration.get_hours_for_day(d)
            key = day_key(d)
            current = days.get(key)
            if current is None:
                updated[key] = [True] * new_len
            else:
                updated[key] = [
                    bool(current[h]) if h < len(current) else True
                    for h in range(new_len)
                ]
        resized[teacher] = updated

    changed_days = [
        d
        for d in range(new_configuration.total_days)
        if old_configuration.get_hours_for_day(d) != new_configuration.get_hours_for_day(d)
    ]
    if changed_days:
        logger.info(
            f"🔄 Resized availability for {len(resized)} teachers (changed days: {changed_days})"
        )
    return resized


def stale_days(school_data) -> List[Tuple[str, int]]:
    """Return (teacher, day) pairs whose grid length differs from the configured hours."""
    stale = []
    for teacher, days in school_data.constraints.items():
        for d in range(school_data.configuration.total_days):
            grid = days.get(day_key(d))
            if grid is not None and len(grid) != school_data.get_hours_for_day(d):
                stale.append((teacher, d))
    return stale


def teacher_total_hours(school_data, teacher: str) -> int:
    return sum(
        a.total_hours
        for assignments in school_data.assignments.values()
        for a in assignments
        if a.teacher == teacher
    )


def count_availability(school_data, teacher: str) -> Tuple[int, int]:
    """Return (available, blocked) hour counts; missing days and hours count as available."""
    grid = school_data.get_constraints_for_teacher(teacher)
    available = blocked = 0
    for d in range(school_data.configuration.total_days):
        hours = school_data.get_hours_for_day(d)
        day_grid = grid.get(day_key(d)) if grid is not None else None
        if day_grid is None:
            available += hours
            continue
        for h in range(hours):
            if h >= len(day_grid) or day_grid[h]:
                available += 1
            else:
                blocked += 1
    return available, blocked


def availability_summary(school_data) -> pd.DataFrame:
    """
    Per-teacher overview of assigned load against free hours.

    Columns: teacher, total_hours, available_hours, blocked_hours, spare_hours.
    A negative `spare_hours` means the teacher cannot possibly fit their load.
    """
    rows = []
    for teacher in sorted(school_data.definitions.teachers):
        total = teacher_total_hours(school_data, teacher)
        available, blocked = count_availability(school_data, teacher)
        rows.append(
            {
                "teacher": teacher,
                "total_hours": total,
                "available_hours": available,
                "blocked_hours": blocked,
                "spare_hours": available - total,
            }
        )
    return pd.DataFrame(
        rows,
        columns=["teacher", "total_hours", "available_hours", "blocked_hours", "spare_hours"],
    )
