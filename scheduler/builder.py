import asyncio
import logging
import threading
from typing import Mapping, Optional, Tuple
from core.models import SchoolData, SolutionData
from exceptions.custom_errors import ScheduleError
from scheduler.progress import ProgressReporter, ProgressSink
from scheduler.runner import solve_schedule

logger = logging.getLogger(__name__)


# == Solve Schedule ==
def solve(
    school_data: SchoolData,
    progress: Optional[ProgressSink] = None,
    cancel_event: Optional[threading.Event] = None,
    time_limit: Optional[float] = None,
    priorities: Optional[Mapping[str, int]] = None,
) -> Tuple[Optional[SolutionData], str]:
    """
    Build a weekly timetable for `school_data`.

    This is the public entry point. It never raises for expected outcomes:
    every failure (no blocks, an impossible block, proven infeasibility, time
    out, invalid model, cancellation, or any unexpected error) comes back as
    `(None, message)`.

    Args:
        school_data (SchoolData): Read-only input; it is never mutated.
        progress (callable, optional): Receives SolverProgress events.
        cancel_event (threading.Event, optional): Set it to cancel the solve.
        time_limit (float, optional): Search budget in seconds; tiered by block count when omitted.
        priorities (Mapping[str, int], optional): Lesson -> priority override.

    Returns:
        tuple: `(solution, message)` on success, `(None, message)` otherwise.
    """
    reporter = ProgressReporter(progress)
    try:
        solution = solve_schedule(school_data, reporter, cancel_event, time_limit, priorities)
    except ScheduleError as e:
        logger.info(f"⚠️ No timetable: {e}")
        return None, str(e)
    except Exception as e:
        logger.exception("Unexpected solver failure")
        return None, f"Solver error: {e}"

    return solution, solution.message


async def solve_async(
    school_data: SchoolData,
    progress: Optional[ProgressSink] = None,
    cancel_event: Optional[threading.Event] = None,
    time_limit: Optional[float] = None,
    priorities: Optional[Mapping[str, int]] = None,
) -> Tuple[Optional[SolutionData], str]:
    """
    Coroutine wrapper around `solve`, run on a worker thread.

    If the awaiting task is cancelled, `cancel_event` (created here when not
    given) is set so the worker stops at its next check.
    """
    if cancel_event is None:
        cancel_event = threading.Event()
    try:
        return await asyncio.to_thread(
            solve, school_data, progress, cancel_event, time_limit, priorities
        )
    except asyncio.CancelledError:
        cancel_event.set()
        raise
