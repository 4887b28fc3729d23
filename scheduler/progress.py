from dataclasses import dataclass
from typing import Callable, Optional
import logging
import time
from utils.constants import SEARCH_PROGRESS_CAP

logger = logging.getLogger(__name__)

"""
Simulated progress reporting.

CP-SAT does not expose how many blocks it has placed, so progress during search
is estimated from elapsed time against the time budget and a static table of
phase messages. Nothing in the solver depends on these reports.
"""


@dataclass
class SolverProgress:
    total_blocks: int
    placed_blocks: int
    status: str
    tip: str = ""
    elapsed_seconds: float = 0.0
    remaining_seconds: float = 0.0

    @property
    def percent(self) -> float:
        if self.total_blocks <= 0:
            return 0.0
        return self.placed_blocks / self.total_blocks * 100


ProgressSink = Callable[[SolverProgress], None]

ANALYSIS_STATUS = ("Analysing timetable...", "Starting the search engine")
PREPARE_STATUS = ("Preparing optimisation model...", "Looking for the best timetable")

MODEL_PHASES = [
    ("Preparing lesson blocks...", "Most constrained lessons go first"),
    ("Checking teacher timetables...", "Checking teacher availability"),
    ("Analysing time clashes...", "Preventing class clashes"),
    ("Arranging class timetables...", "Balancing the timetable"),
    ("Building optimisation model...", "Final optimisations"),
]

SEARCH_PHASES = [
    ("🔍 Analysing lesson blocks...", "Placing priority content"),
    ("📚 Planning core lessons...", "Setting up core hours"),
    ("🧪 Working out practical modules...", "Checking resource usage"),
    ("🌍 Updating the overall plan...", "Resolving class clashes"),
    ("🗣️ Optimising language lessons...", "Checking teacher availability"),
    ("🎨 Adding creative activities...", "Arranging shared hours"),
    ("⚽ Planning active lessons...", "Balancing facility use"),
    ("🎵 Arranging music lessons...", "Optimising the day layout"),
    ("💻 Adding technology lessons...", "Planning device usage"),
    ("📖 Optimising extra lessons...", "Arranging flexible hours"),
    ("🔧 Resolving clashes...", "Optimising all constraints"),
    ("⚡ Final adjustments...", "Computing the best solution"),
    ("🎯 Verifying the plan...", "Checking every criterion"),
]

FINAL_STATUS = ("✅ Solution complete!", "Preparing results")


class ProgressReporter:
    """
    Sends SolverProgress events to an optional sink.

    Elapsed time is measured from construction and every event carries a
    strictly larger `elapsed_seconds` than the one before. A failing sink is
    logged and otherwise ignored.
    """

    def __init__(self, sink: Optional[ProgressSink], total_blocks: int = 0, clock=time.perf_counter):
        self.sink = sink
        self.total_blocks = total_blocks
        self._clock = clock
        self._started = clock()
        self._last_elapsed = -1.0
        self.events_sent = 0

    def elapsed(self) -> float:
        return self._clock() - self._started

    def report(self, placed_blocks: int, status: str, tip: str = "", remaining_seconds: float = 0.0):
        elapsed = self.elapsed()
        if elapsed <= self._last_elapsed:
            elapsed = self._last_elapsed + 1e-6
        self._last_elapsed = elapsed

        if self.sink is None:
            return
        event = SolverProgress(
            total_blocks=self.total_blocks,
            placed_blocks=placed_blocks,
            status=status,
            tip=tip,
            elapsed_seconds=elapsed,
            remaining_seconds=max(0.0, remaining_seconds),
        )
        try:
            self.sink(event)
            self.events_sent += 1
        except Exception as e:
            logger.warning(f"⚠️ Progress sink failed: {e}")

    def report_model_step(self, i: int):
        """Progress while creating variables for block i."""
        n = max(self.total_blocks, 1)
        status, tip = MODEL_PHASES[min(i * len(MODEL_PHASES) // n, len(MODEL_PHASES) - 1)]
        per_block = self.elapsed() / max(i, 1)
        self.report(i, status, tip, per_block * (self.total_blocks - i))

    def report_final(self):
        self.report(self.total_blocks, *FINAL_STATUS, remaining_seconds=0.0)


class SearchTicker:
    """
    Steps through SEARCH_PHASES in proportion to elapsed search time.

    The phase index only moves forward, one phase per tick at most, and the
    reported percentage is capped at SEARCH_PROGRESS_CAP until the search ends.
    """

    def __init__(self, reporter: ProgressReporter, time_limit: float):
        self.reporter = reporter
        self.time_limit = time_limit
        self.phase_index = 0
        self._search_started = reporter.elapsed()

    def percent(self, elapsed: float) -> float:
        if self.time_limit <= 0:
            return SEARCH_PROGRESS_CAP
        return min(SEARCH_PROGRESS_CAP, elapsed / self.time_limit * 100)

    def tick(self):
        elapsed = self.reporter.elapsed() - self._search_started
        step = self.time_limit / len(SEARCH_PHASES)
        if elapsed > (self.phase_index + 1) * step and self.phase_index < len(SEARCH_PHASES) - 1:
            self.phase_index += 1

        status, tip = SEARCH_PHASES[self.phase_index]
        percent = self.percent(elapsed)
        self.reporter.report(
            int(self.reporter.total_blocks * percent / 100),
            status,
            tip,
            self.time_limit - elapsed,
        )
