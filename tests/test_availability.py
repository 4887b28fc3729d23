"""Tests for teacher availability helpers."""

from core.models import SchoolConfiguration
from utils.availability import (
    availability_summary,
    default_teacher_availability,
    recompute_availability_for_new_configuration,
    stale_days,
)


def test_default_availability_matches_configuration():
    config = SchoolConfiguration(daily_hours={0: 6, 1: 7, 2: 8, 3: 7, 4: 5})
    grid = default_teacher_availability(config)
    assert [len(grid[str(d)]) for d in range(5)] == [6, 7, 8, 7, 5]


def test_recompute_keeps_flags_and_pads_with_free_hours():
    old = SchoolConfiguration()
    new = SchoolConfiguration(daily_hours={0: 9, 1: 3, 2: 7, 3: 7, 4: 7})
    existing = {"Ayşe": {"0": [False] * 7, "1": [True, False, True, False, True, True, True]}}

    resized = recompute_availability_for_new_configuration(old, new, existing)

    assert resized["Ayşe"]["0"] == [False] * 7 + [True, True]
    assert resized["Ayşe"]["1"] == [True, False, True]
    assert resized["Ayşe"]["4"] == [True] * 7
    # input untouched
    assert len(existing["Ayşe"]["0"]) == 7
    assert "4" not in existing["Ayşe"]


def test_stale_days_reports_mismatched_grids(make_school):
    data = make_school({"9A": [("Matematik", "Ayşe", 1, "1")]})
    data.constraints["Ayşe"]["3"] = [True] * 4
    assert stale_days(data) == [("Ayşe", 3)]


def test_availability_summary(make_school, free_grid):
    data = make_school(
        {
            "9A": [("Matematik", "Ayşe", 4, "2,2")],
            "9B": [("Matematik", "Ayşe", 4, "2,2"), ("Müzik", "Zeynep", 2, "1,1")],
        }
    )
    data.constraints["Zeynep"] = {
        str(d): flags for d, flags in free_grid(data.configuration, {(0, 0)}).items()
    }

    summary = availability_summary(data)

    assert list(summary.columns) == [
        "teacher", "total_hours", "available_hours", "blocked_hours", "spare_hours",
    ]
    rows = summary.set_index("teacher")
    assert rows.loc["Ayşe", "total_hours"] == 8
    assert rows.loc["Ayşe", "available_hours"] == 35
    assert rows.loc["Ayşe", "spare_hours"] == 27
    assert rows.loc["Zeynep", "available_hours"] == 1
    assert rows.loc["Zeynep", "blocked_hours"] == 34
    assert rows.loc["Zeynep", "spare_hours"] == -1
