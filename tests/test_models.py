"""Tests for the domain records and school data validation."""

import pytest

from core.models import (
    LessonAssignment,
    SchoolConfiguration,
    SchoolData,
    ScheduleBlock,
    parse_block_structure,
)
from exceptions.custom_errors import DataValidationError


# ─── Block structure ──────────────────────────────────────────────────────────

def test_parse_block_structure_skips_non_numeric_parts():
    assert parse_block_structure("2, 2,x,1") == [2, 2, 1]
    assert parse_block_structure("") == []
    assert parse_block_structure([3, 2]) == [3, 2]


def test_assignment_block_sum_must_match_total_hours():
    with pytest.raises(DataValidationError, match="does not match total hours"):
        LessonAssignment("Matematik", "Ayşe", 4, "2,2,1")


def test_assignment_total_hours_must_be_positive():
    with pytest.raises(DataValidationError, match="must be positive"):
        LessonAssignment("Matematik", "Ayşe", 0, "")


def test_assignment_accepts_list_block_structure():
    a = LessonAssignment("Matematik", "Ayşe", 5, [2, 2, 1])
    assert a.block_structure == "2,2,1"
    assert a.get_block_structure() == [2, 2, 1]
    assert a.is_block_structure_valid()


# ─── Configuration ────────────────────────────────────────────────────────────

def test_configuration_defaults():
    config = SchoolConfiguration.create_default()
    assert config.total_days == 5
    assert all(config.get_hours_for_day(d) == 7 for d in range(5))
    assert config.get_total_weekly_hours() == 35
    config.validate()


def test_configuration_string_keys_and_fallback():
    config = SchoolConfiguration(daily_hours={"0": 8, "1": 6})
    assert config.get_hours_for_day(0) == 8
    assert config.get_hours_for_day(4) == 7
    assert config.get_max_hours_per_day() == 8


@pytest.mark.parametrize("hours", [0, 11])
def test_configuration_rejects_out_of_range_hours(hours):
    config = SchoolConfiguration(daily_hours={d: 7 for d in range(5)})
    config.daily_hours[2] = hours
    with pytest.raises(DataValidationError, match="day 3"):
        config.validate()


def test_configuration_rejects_empty_school_name():
    with pytest.raises(DataValidationError):
        SchoolConfiguration(school_name="  ").validate()


def test_update_daily_hours_ignores_invalid_entries():
    config = SchoolConfiguration()
    config.update_daily_hours({0: 8, 1: 42, 9: 5})
    assert config.daily_hours[0] == 8
    assert config.daily_hours[1] == 7
    assert 9 not in config.daily_hours


# ─── SchoolData ───────────────────────────────────────────────────────────────

def test_add_teacher_creates_free_grid():
    data = SchoolData.create_empty()
    data.add_teacher("Ayşe")
    grid = data.get_constraints_for_teacher("Ayşe")
    assert set(grid) == {"0", "1", "2", "3", "4"}
    assert all(len(day) == 7 and all(day) for day in grid.values())


def test_configuration_change_resizes_grids_and_drops_solution(make_school):
    data = make_school({"9A": [("Matematik", "Ayşe", 2, "2")]})
    data.constraints["Ayşe"]["0"][6] = False
    data.solution = object()

    previous = data.configuration.copy()
    data.configuration.update_daily_hours({0: 8, 1: 5})
    data.on_configuration_changed(previous)

    grid = data.get_constraints_for_teacher("Ayşe")
    assert grid["0"] == [True] * 6 + [False, True]
    assert grid["1"] == [True] * 5
    assert data.solution is None


def test_validate_data_accepts_consistent_school(small_school):
    small_school.validate_data()


def test_validate_data_rejects_unknown_teacher(small_school):
    small_school.assignments["9A"].append(LessonAssignment("Matematik", "Nobody", 1, "1"))
    with pytest.raises(DataValidationError, match="Nobody"):
        small_school.validate_data()


def test_validate_data_rejects_duplicate_classes(small_school):
    small_school.definitions.classes.append("9A")
    with pytest.raises(DataValidationError, match="Duplicate class"):
        small_school.validate_data()


def test_validate_data_rejects_wrong_grid_length(small_school):
    small_school.constraints["Ayşe"]["2"] = [True] * 5
    with pytest.raises(DataValidationError, match="day 3 must have 7 hours"):
        small_school.validate_data()


def test_schedule_block_placement_helpers():
    block = ScheduleBlock("9A", "Ayşe", "Matematik", 2, 1)
    assert not block.is_placed
    assert block.end is None
    block.day, block.start = 3, 4
    assert block.is_placed
    assert block.end == 6


def test_partial_daily_hours_count_missing_days_at_default_length():
    config = SchoolConfiguration(daily_hours={0: 2})
    config.validate()
    assert config.get_max_hours_per_day() == 7
    assert config.get_total_weekly_hours() == 2 + 4 * 7


def test_longest_day_missing_from_map():
    config = SchoolConfiguration(daily_hours={0: 5, 1: 6, 2: 8})
    assert config.get_max_hours_per_day() == 8
    config = SchoolConfiguration(daily_hours={0: 5, 1: 6})
    assert config.get_max_hours_per_day() == 7
