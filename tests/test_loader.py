"""Tests for loading school data from the JSON document."""

import io
import json

import pytest

from exceptions.custom_errors import DataValidationError, FileContentError, FileReadingError
from utils.loader import load_school_data


def school_document(**overrides):
    doc = {
        "definitions": {
            "lessons": ["Matematik", "Müzik"],
            "teachers": ["Ayşe", "Zeynep"],
            "classes": ["9A", "9B"],
        },
        "assignments": {
            "9A": [
                {"ders": "Matematik", "ogretmen": "Ayşe", "toplam_saat": 5, "blok_yapisi": "2,2,1"},
                {"ders": "Müzik", "ogretmen": "Zeynep", "toplam_saat": 1, "blok_yapisi": "1"},
            ]
        },
        "constraints": {
            "Ayşe": {str(d): [True] * 7 for d in range(5)},
        },
        "configuration": {
            "school_name": "Atatürk Ortaokulu",
            "principal_name": "Fatma Yılmaz",
            "daily_hours": {str(d): 7 for d in range(5)},
            "total_days": 5,
        },
    }
    doc.update(overrides)
    return doc


def test_load_from_file(tmp_path):
    path = tmp_path / "school.json"
    path.write_text(json.dumps(school_document(), ensure_ascii=False), encoding="utf-8")

    data = load_school_data(path)

    assert data.configuration.school_name == "Atatürk Ortaokulu"
    assert data.configuration.daily_hours == {d: 7 for d in range(5)}
    maths = data.get_assignments_for_class("9A")[0]
    assert (maths.lesson, maths.teacher, maths.total_hours) == ("Matematik", "Ayşe", 5)
    assert maths.get_block_structure() == [2, 2, 1]
    # class without assignments and teacher without a grid are filled in
    assert data.get_assignments_for_class("9B") == []
    assert all(data.get_constraints_for_teacher("Zeynep")["0"])
    assert data.solution is None


def test_load_from_buffer_without_configuration():
    doc = school_document()
    del doc["configuration"]
    data = load_school_data(io.BytesIO(json.dumps(doc).encode("utf-8")))
    assert data.configuration.school_name == "School Name"
    assert data.configuration.get_total_weekly_hours() == 35


def test_stale_grids_are_resized_on_load(tmp_path):
    doc = school_document()
    doc["constraints"]["Ayşe"]["2"] = [False] * 5
    data = load_school_data(json.dumps(doc).encode("utf-8"))
    assert data.get_constraints_for_teacher("Ayşe")["2"] == [False] * 5 + [True, True]


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileReadingError):
        load_school_data(tmp_path / "missing.json")


def test_empty_file_raises(tmp_path):
    path = tmp_path / "empty.json"
    path.write_text("   ", encoding="utf-8")
    with pytest.raises(FileContentError, match="empty"):
        load_school_data(path)


def test_invalid_json_raises():
    with pytest.raises(FileContentError, match="JSON format error"):
        load_school_data(b"{not json")


def test_assignment_missing_field_raises():
    doc = school_document()
    del doc["assignments"]["9A"][0]["toplam_saat"]
    with pytest.raises(FileContentError, match="toplam_saat"):
        load_school_data(json.dumps(doc).encode("utf-8"))


def test_block_structure_mismatch_raises():
    doc = school_document()
    doc["assignments"]["9A"][0]["blok_yapisi"] = "2,2"
    with pytest.raises(DataValidationError, match="does not match total hours"):
        load_school_data(json.dumps(doc).encode("utf-8"))


def test_unknown_lesson_raises():
    doc = school_document()
    doc["assignments"]["9A"][0]["ders"] = "Kimya"
    with pytest.raises(DataValidationError, match="Kimya"):
        load_school_data(json.dumps(doc).encode("utf-8"))
