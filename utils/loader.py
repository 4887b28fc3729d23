import json
from pathlib import Path
from typing import IO, Any, Dict, Union
import logging
from config.paths import DATA_DIR
from core.models import Definitions, LessonAssignment, SchoolConfiguration, SchoolData
from exceptions.custom_errors import FileContentError, FileReadingError

logger = logging.getLogger(__name__)


def _read_json(path_or_buffer: Union[str, Path, bytes, IO]) -> Any:
    try:
        if isinstance(path_or_buffer, bytes):
            text = path_or_buffer.decode("utf-8-sig")
        elif hasattr(path_or_buffer, "read"):
            text = path_or_buffer.read()
            if isinstance(text, bytes):
                text = text.decode("utf-8-sig")
        else:
            text = Path(path_or_buffer).read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        raise FileReadingError(f"Error reading school data: {e}")

    if not text or not text.strip():
        raise FileContentError("School data file is empty.")

    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise FileContentError(f"JSON format error: {e}")


def _parse_assignment(raw: Dict[str, Any]) -> LessonAssignment:
    try:
        return LessonAssignment(
            lesson=str(raw["ders"]),
            teacher=str(raw["ogretmen"]),
            total_hours=int(raw["toplam_saat"]),
            block_structure=raw.get("blok_yapisi", ""),
        )
    except KeyError as e:
        raise FileContentError(f"Lesson assignment is missing the {e} field.")
    except (TypeError, ValueError) as e:
        raise FileContentError(f"Invalid lesson assignment {raw!r}: {e}")


def parse_school_data(payload: Dict[str, Any]) -> SchoolData:
    """
    Build SchoolData from the decoded JSON document.

    A document without a `configuration` section gets the default
    configuration. Every defined class gets an assignment list, every
    defined teacher gets an availability grid sized to the configuration, and
    then the whole aggregate is validated.
    """
    if not isinstance(payload, dict):
        raise FileContentError("School data must be a JSON object.")

    raw_defs = payload.get("definitions") or {}
    definitions = Definitions(
        lessons=list(raw_defs.get("lessons", [])),
        teachers=list(raw_defs.get("teachers", [])),
        classes=list(raw_defs.get("classes", [])),
    )

    assignments = {
        class_name: [_parse_assignment(a) for a in items or []]
        for class_name, items in (payload.get("assignments") or {}).items()
    }

    constraints = {
        teacher: {str(day): [bool(h) for h in hours] for day, hours in (days or {}).items()}
        for teacher, days in (payload.get("constraints") or {}).items()
    }

    raw_config = payload.get("configuration")
    if raw_config is None:
        logger.info("ℹ️ No configuration section found; using the default configuration")
        configuration = SchoolConfiguration.create_default()
    else:
        try:
            configuration = SchoolConfiguration(
                school_name=raw_config.get("school_name", ""),
                principal_name=raw_config.get("principal_name", ""),
                daily_hours=raw_config.get("daily_hours") or {},
                total_days=int(raw_config.get("total_days", 0)),
            )
        except (AttributeError, TypeError, ValueError) as e:
            raise FileContentError(f"Invalid configuration section: {e}")

    school_data = SchoolData(
        definitions=definitions,
        assignments=assignments,
        constraints=constraints,
        configuration=configuration,
    )
    for class_name in definitions.classes:
        school_data.assignments.setdefault(class_name, [])
    school_data.update_constraints_for_new_schedule()

    school_data.validate_data()
    return school_data


def load_school_data(path_or_buffer: Union[str, Path, bytes, IO, None] = None) -> SchoolData:
    """
    Load school data from a JSON file.

    Parameters:
        path_or_buffer: Path, raw bytes or file-like object. Defaults to 'data/school_data.json'.

    Returns:
        Validated SchoolData. Any stored solution is ignored.

    Raises:
        FileReadingError: If the file cannot be read.
        FileContentError: If the content is not the expected JSON document.
        DataValidationError: If the content is well formed but inconsistent.
    """
    if path_or_buffer is None:
        path_or_buffer = DATA_DIR / "school_data.json"

    school_data = parse_school_data(_read_json(path_or_buffer))
    logger.info(
        f"📂 Loaded {len(school_data.definitions.classes)} classes, "
        f"{len(school_data.definitions.teachers)} teachers, "
        f"{sum(len(a) for a in school_data.assignments.values())} assignments"
    )
    return school_data
