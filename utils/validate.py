from exceptions.custom_errors import DataValidationError
from utils.availability import day_key


def validate_school_data(school_data):
    """
    Validate the whole school data aggregate.

    Runs the configuration, definitions, assignments and availability checks in
    that order and stops at the first problem.

    Args:
        school_data (SchoolData): The aggregate to check.

    Raises:
        DataValidationError: With a message naming the offending item.
    """
    validate_configuration(school_data.configuration)
    validate_definitions(school_data.definitions)
    validate_assignments(school_data)
    validate_constraints(school_data)


def validate_configuration(configuration):
    if configuration is None:
        raise DataValidationError("Configuration cannot be empty.")
    configuration.validate()


def _duplicates(values):
    seen, dupes = set(), []
    for v in values:
        if v in seen and v not in dupes:
            dupes.append(v)
        seen.add(v)
    return dupes


def validate_definitions(definitions):
    """Each catalogue must be non-empty and free of duplicates."""
    for label, values in (
        ("lesson", definitions.lessons),
        ("teacher", definitions.teachers),
        ("class", definitions.classes),
    ):
        if not values:
            raise DataValidationError(f"At least one {label} must be defined.")
        dupes = _duplicates(values)
        if dupes:
            raise DataValidationError(
                f"Duplicate {label} names found: {', '.join(map(str, dupes))}."
            )


def validate_assignments(school_data):
    definitions = school_data.definitions
    for class_name, assignments in school_data.assignments.items():
        if class_name not in definitions.classes:
            raise DataValidationError(f"Class '{class_name}' is not in the definitions.")

        for a in assignments:
            if a.lesson not in definitions.lessons:
                raise DataValidationError(f"Lesson '{a.lesson}' is not in the definitions.")
            if a.teacher not in definitions.teachers:
                raise DataValidationError(f"Teacher '{a.teacher}' is not in the definitions.")
            if not a.is_block_structure_valid():
                raise DataValidationError(
                    f"Invalid block structure for lesson '{a.lesson}' in class '{class_name}'. "
                    f"Block total ({sum(a.get_block_structure())}) does not match total hours ({a.total_hours})."
                )
            if a.total_hours <= 0:
                raise DataValidationError(
                    f"Total hours for lesson '{a.lesson}' in class '{class_name}' must be positive."
                )


def validate_constraints(school_data):
    """Availability grids must belong to defined teachers and match the configured day lengths."""
    configuration = school_data.configuration
    for teacher, days in school_data.constraints.items():
        if teacher not in school_data.definitions.teachers:
            raise DataValidationError(f"Teacher '{teacher}' is not in the definitions.")

        for d in range(configuration.total_days):
            grid = days.get(day_key(d))
            if grid is None:
                continue
            expected = configuration.get_hours_for_day(d)
            if len(grid) != expected:
                raise DataValidationError(
                    f"Availability for teacher '{teacher}' on day {d + 1} must have {expected} hours."
                )
