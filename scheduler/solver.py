from concurrent.futures import ThreadPoolExecutor, TimeoutError as FuturesTimeoutError
from dataclasses import dataclass
from ortools.sat.python import cp_model
import logging
import threading
from typing import Any, Optional
from core.state import ScheduleState
from scheduler.progress import ProgressReporter, SearchTicker
from exceptions.custom_errors import (
    ModelInvalidError,
    SearchInfeasibleError,
    SearchTimedOutError,
    SolveCancelledError,
    SolverError,
)
from utils.constants import NUM_SEARCH_WORKERS, CP_MODEL_PRESOLVE, PROGRESS_INTERVAL_SECONDS

logger = logging.getLogger(__name__)

CANCELLED_MESSAGE = "Solve cancelled."


@dataclass
class SolverResult:
    """
    Outcome of one CP-SAT search.

    Attributes:
        solver (cp_model.CpSolver): The solver used; holds the variable values on success.
        status (Any): The CP-SAT status returned by the search.
        wall_time (float): Seconds spent inside the search itself.
    """

    solver: cp_model.CpSolver
    status: Any
    wall_time: float

    @property
    def is_solution(self) -> bool:
        return self.status in (cp_model.OPTIMAL, cp_model.FEASIBLE)

    @property
    def status_name(self) -> str:
        return self.solver.StatusName(self.status)


def configure_solver(timeout: float, num_workers: int = NUM_SEARCH_WORKERS, seed: Optional[int] = None) -> cp_model.CpSolver:
    """Configure the CP solver."""
    solver = cp_model.CpSolver()
    solver.parameters.max_time_in_seconds = timeout
    solver.parameters.num_search_workers = num_workers
    solver.parameters.cp_model_presolve = CP_MODEL_PRESOLVE
    solver.parameters.log_search_progress = False
    if seed is not None:
        solver.parameters.random_seed = seed
    return solver


def run_search(
    model: cp_model.CpModel,
    state: ScheduleState,
    reporter: ProgressReporter,
    cancel_event: Optional[threading.Event] = None,
    poll_interval: float = PROGRESS_INTERVAL_SECONDS,
) -> SolverResult:
    """
    Run the search on a worker thread while ticking simulated progress.

    The calling thread waits on the search in `poll_interval` slices. Between
    slices it emits a progress report and checks `cancel_event`. On cancellation
    the search is asked to stop and the caller is released at once, without
    waiting for the worker to finish. When the search finishes a final 100%
    report is emitted.

    Raises:
        SolveCancelledError: If `cancel_event` is set before the search returns.
    """
    solver = configure_solver(state.time_limit)
    ticker = SearchTicker(reporter, state.time_limit)

    logger.info(f"🚀 Searching: {state.num_blocks} blocks, budget {state.time_limit:g}s, {NUM_SEARCH_WORKERS} workers")
    executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="cp-sat")
    future = executor.submit(solver.Solve, model)
    try:
        while True:
            if cancel_event is not None and cancel_event.is_set():
                solver.StopSearch()
                logger.info("🛑 Search cancelled by caller")
                raise SolveCancelledError(CANCELLED_MESSAGE)

            ticker.tick()
            try:
                status = future.result(timeout=poll_interval)
                break
            except FuturesTimeoutError:
                continue
    finally:
        executor.shutdown(wait=False)

    reporter.report_final()
    result = SolverResult(solver, status, solver.WallTime())
    logger.info(f"⏱ Solve time: {result.wall_time:.2f} seconds ({result.status_name})")
    return result


def raise_for_status(result: SolverResult, time_limit: float):
    """
    Translate a search without a solution into the matching error.

    Infeasible (proven impossible) and Unknown (budget ran out) are kept
    strictly apart.
    """
    if result.is_solution:
        return
    if result.status == cp_model.INFEASIBLE:
        raise SearchInfeasibleError(
            "❌ No mathematically valid timetable exists. Check teacher availability."
        )
    if result.status == cp_model.UNKNOWN:
        raise SearchTimedOutError(
            f"⏱️ No solution found within {time_limit:g}s. Try relaxing teacher availability constraints."
        )
    if result.status == cp_model.MODEL_INVALID:
        raise ModelInvalidError("⚠️ Model error. There is a problem with the input data.")
    raise SolverError(f"❓ Unknown solver status: {result.status_name}")
