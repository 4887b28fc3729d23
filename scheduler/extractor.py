import pandas as pd
from typing import Dict, List, Tuple
import logging
from core.models import ScheduleBlock, SchoolData, SolutionData
from core.state import ScheduleState
from .solver import SolverResult
from utils.constants import DAY_LABELS

logger = logging.getLogger(__name__)


def extract_solution(state: ScheduleState, result: SolverResult, elapsed: float) -> SolutionData:
    """
    Read the chosen day and start of every block back from the solver.

    The values are stamped onto the blocks held by `state` (created for this
    solve only) and collected in a SolutionData keyed by search-order index.
    """
    blocks: Dict[int, ScheduleBlock] = {}
    for i, block in enumerate(state.blocks):
        block.day = int(result.solver.Value(state.day_vars[i]))
        block.start = int(result.solver.Value(state.start_vars[i]))
        blocks[i] = block

    message = f"✅ Solution found in {elapsed:.1f}s! ({len(blocks)} blocks placed)"
    logger.info(message)
    return SolutionData(blocks=blocks, message=message, solution_time=elapsed)


def build_timetable_grid(school_data: SchoolData, solution: SolutionData, mode: str, name: str) -> pd.DataFrame:
    """
    Weekly grid for one class or one teacher.

    Rows are hour labels ("1".."max hours"), columns are day labels. A cell holds
    "Lesson (Teacher)" in class mode or "Lesson (Class)" in teacher mode, "" for a
    free hour and "-" for an hour that does not exist on that day.

    Args:
        school_data (SchoolData): Supplies the day lengths.
        solution (SolutionData): The placed blocks.
        mode (str): "class" or "teacher".
        name (str): The class or teacher to show.
    """
    if mode not in ("class", "teacher"):
        raise ValueError(f"mode must be 'class' or 'teacher', got {mode!r}")

    configuration = school_data.configuration
    max_hours = configuration.get_max_hours_per_day()
    days = DAY_LABELS[: configuration.total_days]

    grid = [
        ["" if h < configuration.get_hours_for_day(d) else "-" for d in range(len(days))]
        for h in range(max_hours)
    ]

    for block in solution.blocks.values():
        owner = block.class_name if mode == "class" else block.teacher
        if owner != name:
            continue
        other = block.teacher if mode == "class" else block.class_name
        for offset in range(block.length):
            hour = block.start + offset
            if hour < max_hours:
                grid[hour][block.day] = f"{block.lesson} ({other})"

    return pd.DataFrame(grid, index=[str(h + 1) for h in range(max_hours)], columns=days)


def build_all_timetables(school_data: SchoolData, solution: SolutionData, mode: str) -> Dict[str, pd.DataFrame]:
    names = school_data.definitions.classes if mode == "class" else school_data.definitions.teachers
    return {n: build_timetable_grid(school_data, solution, mode, n) for n in sorted(names)}


def solution_to_records(solution: SolutionData) -> List[dict]:
    """Flat, JSON friendly list of the placed blocks in search order."""
    return [
        {
            "index": i,
            "className": b.class_name,
            "teacher": b.teacher,
            "lesson": b.lesson,
            "length": b.length,
            "priority": b.priority,
            "day": b.day,
            "start": b.start,
        }
        for i, b in sorted(solution.blocks.items())
    ]


def find_conflicts(solution: SolutionData) -> List[Tuple[str, ScheduleBlock, ScheduleBlock]]:
    """Return (resource, block_a, block_b) for every pair of overlapping blocks sharing a class or teacher."""
    conflicts = []
    placed = [b for b in solution.blocks.values() if b.is_placed]
    for i, a in enumerate(placed):
        for b in placed[i + 1 :]:
            if a.day != b.day or a.start >= b.end or b.start >= a.end:
                continue
            if a.class_name == b.class_name:
                conflicts.append((f"class {a.class_name}", a, b))
            if a.teacher == b.teacher:
                conflicts.append((f"teacher {a.teacher}", a, b))
    return conflicts


def verify_solution(school_data: SchoolData, solution: SolutionData) -> List[str]:
    """Human readable problems with a solution; an empty list means it is valid."""
    problems = []
    for block in solution.blocks.values():
        if not block.is_placed:
            problems.append(f"{block.describe()} is not placed")
            continue
        hours = school_data.get_hours_for_day(block.day)
        if block.start < 0 or block.end > hours:
            problems.append(f"{block.describe()} runs outside day {block.day + 1} ({hours}h)")
    for resource, a, b in find_conflicts(solution):
        problems.append(f"Overlap for {resource}: {a.describe()} and {b.describe()}")
    return problems
