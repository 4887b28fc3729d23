"""Shared factories for the lesson scheduler tests."""

import pytest

from core.models import Definitions, LessonAssignment, SchoolConfiguration, SchoolData
from utils.availability import day_key, default_teacher_availability


# ─── Helpers ──────────────────────────────────────────────────────────────────

def build_school(assignments, daily_hours=None, availability=None, extra_teachers=()):
    """
    Build SchoolData from a compact description.

    assignments: {class: [(lesson, teacher, total_hours, "2,2,1"), ...]}
    daily_hours: {day: hours}; defaults to 7 hours on every day.
    availability: {teacher: {day: [bool, ...]}}; days not given stay fully free.
    """
    configuration = SchoolConfiguration() if daily_hours is None else SchoolConfiguration(daily_hours=daily_hours)

    lessons, teachers = [], list(extra_teachers)
    parsed = {}
    for class_name, items in assignments.items():
        parsed[class_name] = []
        for lesson, teacher, total, blocks in items:
            parsed[class_name].append(LessonAssignment(lesson, teacher, total, blocks))
            if lesson not in lessons:
                lessons.append(lesson)
            if teacher not in teachers:
                teachers.append(teacher)

    constraints = {t: default_teacher_availability(configuration) for t in teachers}
    for teacher, days in (availability or {}).items():
        for day, flags in days.items():
            constraints.setdefault(teacher, {})[day_key(day)] = list(flags)

    return SchoolData(
        definitions=Definitions(lessons=lessons, teachers=teachers, classes=list(assignments)),
        assignments=parsed,
        constraints=constraints,
        configuration=configuration,
    )


def only_free(configuration, free):
    """Availability grid where only the (day, hour) pairs in `free` are available."""
    return {
        d: [(d, h) in free for h in range(configuration.get_hours_for_day(d))]
        for d in range(configuration.total_days)
    }


# ─── Fixtures ─────────────────────────────────────────────────────────────────

@pytest.fixture
def make_school():
    return build_school


@pytest.fixture
def free_grid():
    return only_free


@pytest.fixture
def small_school():
    """Two classes sharing a maths teacher, one lesson each with a different teacher."""
    return build_school(
        {
            "9A": [("Matematik", "Ayşe", 4, "2,2"), ("Türkçe", "Mehmet", 3, "2,1")],
            "9B": [("Matematik", "Ayşe", 4, "2,2"), ("Müzik", "Zeynep", 2, "1,1")],
        }
    )


@pytest.fixture
def events():
    """A list and a sink that appends SolverProgress events to it."""
    received = []
    return received, received.append
