from ortools.sat.python import cp_model
from typing import Dict, List, Mapping, Optional, Tuple
import logging
from core.models import ScheduleBlock, SchoolData
from core.state import ScheduleState
from utils.availability import day_key
from utils.constants import DEFAULT_PRIORITY, LESSON_PRIORITIES, TIME_LIMIT_TIERS, TIME_LIMIT_MAX

logger = logging.getLogger(__name__)

# class -> teacher -> lesson -> (total_hours, block_structure)
ClassTeacherLessons = Dict[str, Dict[str, Dict[str, Tuple[int, List[int]]]]]


def build_class_teacher_lessons(school_data: SchoolData) -> ClassTeacherLessons:
    """Regroup the per-class assignment lists as class -> teacher -> lesson -> (hours, blocks)."""
    result: ClassTeacherLessons = {}
    for class_name, assignments in school_data.assignments.items():
        for a in assignments:
            result.setdefault(class_name, {}).setdefault(a.teacher, {})[a.lesson] = (
                a.total_hours,
                a.get_block_structure(),
            )
    return result


def build_teacher_availability(school_data: SchoolData) -> Dict[str, Dict[str, List[bool]]]:
    """
    Availability grid for every defined teacher.

    Teachers without a grid get one with every configured hour free. Existing
    grids are passed through as-is (stale lengths are handled by the feasibility step).
    """
    configuration = school_data.configuration
    result = {}
    for teacher in school_data.definitions.teachers:
        grid = school_data.get_constraints_for_teacher(teacher)
        if grid is not None:
            result[teacher] = grid
        else:
            result[teacher] = {
                day_key(d): [True] * configuration.get_hours_for_day(d)
                for d in range(configuration.total_days)
            }
    return result


def resolve_priority(lesson: str, priorities: Optional[Mapping[str, int]] = None) -> int:
    table = LESSON_PRIORITIES if priorities is None else priorities
    return table.get(lesson, DEFAULT_PRIORITY)


def expand_blocks(
    class_teacher_lessons: ClassTeacherLessons,
    priorities: Optional[Mapping[str, int]] = None,
) -> List[ScheduleBlock]:
    """
    Derive the atomic schedulable blocks.

    One block per positive entry of each assignment's block structure; entries
    <= 0 are skipped. Priority comes from the lesson priority table, with
    DEFAULT_PRIORITY for lessons not in it.

    Args:
        class_teacher_lessons: Output of `build_class_teacher_lessons`.
        priorities: Optional lesson -> priority override for the configured table.

    Returns:
        list[ScheduleBlock]: Unplaced blocks in assignment order.
    """
    blocks = []
    for class_name, teachers in class_teacher_lessons.items():
        for teacher, lessons in teachers.items():
            for lesson, (_total_hours, block_structure) in lessons.items():
                priority = resolve_priority(lesson, priorities)
                for length in block_structure:
                    if length <= 0:
                        continue
                    blocks.append(ScheduleBlock(class_name, teacher, lesson, length, priority))
    return blocks


def select_time_limit(num_blocks: int) -> float:
    """Search budget in seconds, tiered by block count (<=30: 15s, <=60: 30s, <=100: 60s, else 90s)."""
    for max_blocks, seconds in TIME_LIMIT_TIERS:
        if num_blocks <= max_blocks:
            return float(seconds)
    return float(TIME_LIMIT_MAX)


def make_model():
    """Creates a new CP-SAT model instance."""
    model = cp_model.CpModel()
    return model


def build_block_variables(model: cp_model.CpModel, state: ScheduleState, i: int):
    """Create day, start, absolute start and interval variables for block i."""
    block = state.blocks[i]
    stride = state.max_hours_per_day

    state.day_vars[i] = model.NewIntVar(0, state.total_days - 1, f"d_{i}")
    state.start_vars[i] = model.NewIntVar(0, stride - 1, f"s_{i}")

    state.abs_vars[i] = model.NewIntVar(0, stride * state.total_days, f"abs_{i}")
    model.Add(state.abs_vars[i] == state.day_vars[i] * stride + state.start_vars[i])

    state.interval_vars[i] = model.NewFixedSizeIntervalVar(
        state.abs_vars[i], block.length, f"i_{i}"
    )


def get_model_size(model: cp_model.CpModel) -> Tuple[int, int]:
    """Get the number of constraints and variables in the model."""
    proto = model.Proto()
    num_constraints = len(proto.constraints)
    num_vars = len(proto.variables)
    return num_constraints, num_vars
