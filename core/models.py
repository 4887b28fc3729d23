from dataclasses import dataclass, field
from typing import Dict, List, Optional
from exceptions.custom_errors import DataValidationError
from utils.availability import default_teacher_availability, recompute_availability_for_new_configuration
from utils.constants import (
    TOTAL_DAYS,
    DEFAULT_HOURS_PER_DAY,
    MIN_HOURS_PER_DAY,
    MAX_HOURS_PER_DAY,
    MAX_NAME_LENGTH,
    DEFAULT_SCHOOL_NAME,
    DEFAULT_PRINCIPAL_NAME,
)
from utils.validate import validate_school_data

"""
This module contains the domain records shared by the loader, the solver and the API:
lesson assignments, the school configuration, teacher availability and schedule blocks.
"""

# teacher -> day key ("0".."4") -> one bool per hour (True = free)
Availability = Dict[str, Dict[str, List[bool]]]


def parse_block_structure(raw) -> List[int]:
    """Parse a block structure such as "2,2,1" into [2, 2, 1]. Non numeric fragments are ignored."""
    if raw is None:
        return []
    if isinstance(raw, (list, tuple)):
        return [int(b) for b in raw]

    blocks = []
    for part in str(raw).split(","):
        part = part.strip()
        try:
            blocks.append(int(part))
        except ValueError:
            continue
    return blocks


@dataclass
class LessonAssignment:
    """
    One lesson taught to one class by one teacher.

    The block structure splits the weekly hours into contiguous sessions,
    e.g. total_hours=5 with block_structure="2,2,1". The record validates
    itself on construction.
    """

    lesson: str
    """Lesson name (must exist in the definitions)."""
    teacher: str
    """Teacher name (must exist in the definitions)."""
    total_hours: int
    """Weekly hours for this lesson in this class."""
    block_structure: str
    """Comma separated block lengths whose sum must equal total_hours."""

    def __post_init__(self):
        if isinstance(self.block_structure, (list, tuple)):
            self.block_structure = ",".join(str(b) for b in self.block_structure)
        self.validate()

    def get_block_structure(self) -> List[int]:
        return parse_block_structure(self.block_structure)

    def is_block_structure_valid(self) -> bool:
        blocks = self.get_block_structure()
        return sum(blocks) == self.total_hours and all(b > 0 for b in blocks)

    def validate(self):
        if self.total_hours <= 0:
            raise DataValidationError(
                f"Total hours for lesson '{self.lesson}' must be positive."
            )
        if not self.is_block_structure_valid():
            raise DataValidationError(
                f"Invalid block structure '{self.block_structure}' for lesson '{self.lesson}'. "
                f"Block total ({sum(self.get_block_structure())}) does not match total hours ({self.total_hours})."
            )


def _default_daily_hours() -> Dict[int, int]:
    return {day: DEFAULT_HOURS_PER_DAY for day in range(TOTAL_DAYS)}


@dataclass
class SchoolConfiguration:
    """School-wide settings: names and the number of lesson hours on each weekday."""

    school_name: str = DEFAULT_SCHOOL_NAME
    principal_name: str = DEFAULT_PRINCIPAL_NAME
    daily_hours: Dict[int, int] = field(default_factory=_default_daily_hours)
    total_days: int = TOTAL_DAYS

    def __post_init__(self):
        # JSON object keys arrive as strings
        self.daily_hours = {int(d): int(h) for d, h in self.daily_hours.items()}

    def get_hours_for_day(self, day: int) -> int:
        """Return the hour count for a day, falling back to the default for unknown days."""
        return self.daily_hours.get(day, DEFAULT_HOURS_PER_DAY)

    def get_max_hours_per_day(self) -> int:
        """Longest day of the week, counting days missing from `daily_hours` at the default length."""
        hours = [self.get_hours_for_day(d) for d in range(self.total_days)]
        return max(hours) if hours else DEFAULT_HOURS_PER_DAY

    def get_total_weekly_hours(self) -> int:
        return sum(self.get_hours_for_day(d) for d in range(self.total_days))

    def validate(self):
        """Raise DataValidationError if names, day count or hour counts are out of range."""
        if not self.school_name or not self.school_name.strip():
            raise DataValidationError("School name cannot be empty.")
        if len(self.school_name) > MAX_NAME_LENGTH:
            raise DataValidationError(
                f"School name cannot be longer than {MAX_NAME_LENGTH} characters."
            )
        if not self.principal_name or not self.principal_name.strip():
            raise DataValidationError("Principal name cannot be empty.")
        if len(self.principal_name) > MAX_NAME_LENGTH:
            raise DataValidationError(
                f"Principal name cannot be longer than {MAX_NAME_LENGTH} characters."
            )
        if self.total_days != TOTAL_DAYS:
            raise DataValidationError(f"Total days must be {TOTAL_DAYS}.")

        for day in range(self.total_days):
            hours = self.get_hours_for_day(day)
            if hours < MIN_HOURS_PER_DAY or hours > MAX_HOURS_PER_DAY:
                raise DataValidationError(
                    f"Hours for day {day + 1} must be between {MIN_HOURS_PER_DAY} and {MAX_HOURS_PER_DAY}."
                )

    def update_daily_hours(self, new_hours: Dict[int, int]):
        """Apply new hour counts; entries with an unknown day or an out-of-range value are ignored."""
        for day, hours in new_hours.items():
            day, hours = int(day), int(hours)
            if 0 <= day < self.total_days and MIN_HOURS_PER_DAY <= hours <= MAX_HOURS_PER_DAY:
                self.daily_hours[day] = hours

    def copy(self) -> "SchoolConfiguration":
        return SchoolConfiguration(
            school_name=self.school_name,
            principal_name=self.principal_name,
            daily_hours=dict(self.daily_hours),
            total_days=self.total_days,
        )

    @classmethod
    def create_default(cls) -> "SchoolConfiguration":
        return cls()


@dataclass
class Definitions:
    lessons: List[str] = field(default_factory=list)
    teachers: List[str] = field(default_factory=list)
    classes: List[str] = field(default_factory=list)


@dataclass
class ScheduleBlock:
    """
    An atomic, contiguous run of hours for one lesson, class and teacher.

    Blocks are created fresh for each solve. `day` and `start` stay None
    until a solution is read back.
    """

    class_name: str
    teacher: str
    lesson: str
    length: int
    priority: int
    day: Optional[int] = None
    start: Optional[int] = None

    @property
    def is_placed(self) -> bool:
        return self.day is not None and self.start is not None

    @property
    def end(self) -> Optional[int]:
        """Exclusive end hour on its day, once placed."""
        return self.start + self.length if self.start is not None else None

    def describe(self) -> str:
        return f"{self.class_name} / {self.lesson} / {self.teacher} ({self.length}h)"


@dataclass
class SolutionData:
    blocks: Dict[int, ScheduleBlock] = field(default_factory=dict)
    """Placed blocks keyed by their index in search order."""
    message: str = ""
    """Human-readable outcome message."""
    solution_time: float = 0.0
    """Wall-clock seconds spent in the solve call."""


@dataclass
class SchoolData:
    """
    The aggregate that owns definitions, assignments, availability, configuration
    and the current solution. The solver only reads it.
    """

    definitions: Definitions = field(default_factory=Definitions)
    assignments: Dict[str, List[LessonAssignment]] = field(default_factory=dict)
    """class name -> lesson assignments for that class."""
    constraints: Availability = field(default_factory=dict)
    """teacher -> day key -> free/blocked flag per hour."""
    configuration: SchoolConfiguration = field(default_factory=SchoolConfiguration)
    solution: Optional[SolutionData] = None

    def get_assignments_for_class(self, class_name: str) -> List[LessonAssignment]:
        return self.assignments.get(class_name, [])

    def get_constraints_for_teacher(self, teacher: str) -> Optional[Dict[str, List[bool]]]:
        return self.constraints.get(teacher)

    def add_class(self, class_name: str):
        if class_name not in self.definitions.classes:
            self.definitions.classes.append(class_name)
        self.assignments.setdefault(class_name, [])

    def add_teacher(self, teacher: str):
        """Register a teacher with every configured hour marked free."""
        if teacher not in self.definitions.teachers:
            self.definitions.teachers.append(teacher)
        if teacher not in self.constraints:
            self.constraints[teacher] = default_teacher_availability(self.configuration)

    def get_hours_for_day(self, day: int) -> int:
        return self.configuration.get_hours_for_day(day)

    def get_max_hours_per_day(self) -> int:
        return self.configuration.get_max_hours_per_day()

    def update_constraints_for_new_schedule(self, previous_configuration: Optional[SchoolConfiguration] = None):
        """Resize every defined teacher's availability grid to the current configuration."""
        known = {t: self.constraints[t] for t in self.definitions.teachers if t in self.constraints}
        resized = recompute_availability_for_new_configuration(
            previous_configuration or self.configuration, self.configuration, known
        )
        for teacher in self.definitions.teachers:
            if teacher in resized:
                self.constraints[teacher] = resized[teacher]
            else:
                self.add_teacher(teacher)

    def on_configuration_changed(self, previous_configuration: Optional[SchoolConfiguration] = None):
        """Cascade a configuration change: resize availability and drop the stale solution."""
        self.update_constraints_for_new_schedule(previous_configuration)
        self.solution = None

    def validate_data(self):
        validate_school_data(self)

    @classmethod
    def create_empty(cls) -> "SchoolData":
        return cls(configuration=SchoolConfiguration.create_default())
