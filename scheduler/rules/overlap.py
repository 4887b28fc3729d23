from core.state import ScheduleState

"""
This module contains the resource rules. Intervals live on one absolute time
axis (day * max_hours_per_day + start), so a single no-overlap per resource
covers the whole week.
"""

__all__ = ["class_no_overlap_rule", "teacher_no_overlap_rule"]


def class_no_overlap_rule(model, state: ScheduleState):
    """A class attends at most one block at a time."""
    for intervals in state.intervals_by("class_name").values():
        if len(intervals) > 1:
            model.AddNoOverlap(intervals)


def teacher_no_overlap_rule(model, state: ScheduleState):
    """A teacher teaches at most one block at a time."""
    for intervals in state.intervals_by("teacher").values():
        if len(intervals) > 1:
            model.AddNoOverlap(intervals)
