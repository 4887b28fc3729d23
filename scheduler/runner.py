from ortools.sat.python import cp_model
from typing import Mapping, Optional
import logging
import threading
from core.constraint_manager import ConstraintManager
from core.models import SchoolData, SolutionData
from core.state import ScheduleState
from exceptions.custom_errors import NoBlocksToScheduleError, SolveCancelledError
from scheduler.feasibility import check_feasibility, compute_feasible_slots, order_blocks
from scheduler.progress import ANALYSIS_STATUS, PREPARE_STATUS, ProgressReporter
from scheduler.rules import allowed_slots_rule, class_no_overlap_rule, teacher_no_overlap_rule
from scheduler.setup import (
    build_block_variables,
    build_class_teacher_lessons,
    build_teacher_availability,
    expand_blocks,
    get_model_size,
    make_model,
    select_time_limit,
)
from .extractor import extract_solution
from .solver import CANCELLED_MESSAGE, raise_for_status, run_search
from utils.availability import stale_days
from utils.constants import MODEL_PROGRESS_EVERY

logger = logging.getLogger(__name__)

NO_BLOCKS_MESSAGE = "No lessons to schedule."


def _check_cancelled(cancel_event: Optional[threading.Event]):
    if cancel_event is not None and cancel_event.is_set():
        logger.info("🛑 Solve cancelled before search")
        raise SolveCancelledError(CANCELLED_MESSAGE)


def prepare_state(
    school_data: SchoolData,
    reporter: ProgressReporter,
    time_limit: Optional[float] = None,
    priorities: Optional[Mapping[str, int]] = None,
) -> ScheduleState:
    """
    Expand, pre-check and order the blocks for one solve.

    Args:
        school_data (SchoolData): Read-only input.
        reporter (ProgressReporter): Receives the analysis and preparation reports.
        time_limit (float, optional): Overrides the tiered search budget.
        priorities (Mapping[str, int], optional): Overrides the configured lesson priorities.

    Returns:
        ScheduleState: Sorted blocks and their feasible slots, with no variables yet.

    Raises:
        NoBlocksToScheduleError: If the assignments yield no blocks.
        BlockInfeasibleError: If a block fits nowhere in its teacher's week.
    """
    configuration = school_data.configuration
    blocks = expand_blocks(build_class_teacher_lessons(school_data), priorities)
    if not blocks:
        raise NoBlocksToScheduleError(NO_BLOCKS_MESSAGE)

    reporter.total_blocks = len(blocks)
    logger.info(f"📋 {len(blocks)} blocks to place")
    reporter.report(0, *ANALYSIS_STATUS)

    for teacher, day in stale_days(school_data):
        logger.warning(
            f"⚠️ Availability for '{teacher}' on day {day + 1} does not match the configured "
            f"{school_data.get_hours_for_day(day)} hours; that day will be skipped for this teacher."
        )

    availability = build_teacher_availability(school_data)
    slots = compute_feasible_slots(blocks, availability, configuration)
    check_feasibility(blocks, slots)

    blocks, slots = order_blocks(blocks, slots)
    reporter.report(0, *PREPARE_STATUS)

    budget = time_limit if time_limit is not None else select_time_limit(len(blocks))
    return ScheduleState(
        blocks=blocks,
        feasible_slots=dict(enumerate(slots)),
        total_days=configuration.total_days,
        max_hours_per_day=configuration.get_max_hours_per_day(),
        time_limit=budget,
    )


def build_model(
    state: ScheduleState,
    reporter: ProgressReporter,
    cancel_event: Optional[threading.Event] = None,
) -> cp_model.CpModel:
    """
    Create the CP-SAT model: variables per block in search order, then the rules.

    Cancellation is checked before each block's variables are created.
    """
    model = make_model()
    for i in range(state.num_blocks):
        _check_cancelled(cancel_event)
        if i % MODEL_PROGRESS_EVERY == 0 or i == state.num_blocks - 1:
            reporter.report_model_step(i)
        build_block_variables(model, state, i)

    cm = ConstraintManager(model, state)
    cm.add_rule(allowed_slots_rule)
    cm.add_rule(class_no_overlap_rule)
    cm.add_rule(teacher_no_overlap_rule)
    cm.apply_all()

    # Branch on the most constrained blocks first
    model.AddDecisionStrategy(
        [state.day_vars[i] for i in range(state.num_blocks)],
        cp_model.CHOOSE_FIRST,
        cp_model.SELECT_MIN_VALUE,
    )

    num_constraints, num_vars = get_model_size(model)
    logger.info(f"→ #constraints = {num_constraints},  #vars = {num_vars}")
    return model


def solve_schedule(
    school_data: SchoolData,
    reporter: ProgressReporter,
    cancel_event: Optional[threading.Event] = None,
    time_limit: Optional[float] = None,
    priorities: Optional[Mapping[str, int]] = None,
) -> SolutionData:
    """
    Solve the lesson scheduling problem.

    Builds the blocks, fails fast on blocks with no feasible slot, orders them
    most-constrained-first, builds the model and searches within the budget.

    Returns:
        SolutionData: Every block placed, with the success message and elapsed time.

    Raises:
        NoBlocksToScheduleError, BlockInfeasibleError, SolveCancelledError,
        SearchInfeasibleError, SearchTimedOutError, ModelInvalidError, SolverError.
    """
    state = prepare_state(school_data, reporter, time_limit, priorities)
    model = build_model(state, reporter, cancel_event)

    _check_cancelled(cancel_event)
    result = run_search(model, state, reporter, cancel_event)
    raise_for_status(result, state.time_limit)

    solution = extract_solution(state, result, reporter.elapsed())
    logger.info("📁 Timetable generated.")
    return solution
