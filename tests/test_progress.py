"""Tests for simulated progress reporting and cancellation."""

import threading

import pytest
from ortools.sat.python import cp_model

import scheduler.solver as solver_module
from scheduler.builder import solve
from scheduler.progress import (
    FINAL_STATUS,
    SEARCH_PHASES,
    ProgressReporter,
    SearchTicker,
    SolverProgress,
)


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


class SlowSolver:
    """Stands in for CpSolver: Solve blocks until StopSearch is called."""

    def __init__(self):
        self.stopped = threading.Event()

    def Solve(self, model):
        self.stopped.wait(timeout=10)
        return cp_model.UNKNOWN

    def StopSearch(self):
        self.stopped.set()

    def WallTime(self):
        return 0.0

    def StatusName(self, status):
        return "UNKNOWN"


# ─── Reporter ─────────────────────────────────────────────────────────────────

def test_progress_percent():
    assert SolverProgress(8, 2, "x").percent == 25.0
    assert SolverProgress(0, 0, "x").percent == 0.0


def test_elapsed_is_strictly_increasing_even_with_a_frozen_clock():
    received = []
    reporter = ProgressReporter(received.append, total_blocks=4, clock=FakeClock())
    for _ in range(3):
        reporter.report(0, "status")
    elapsed = [e.elapsed_seconds for e in received]
    assert elapsed[0] < elapsed[1] < elapsed[2]


def test_failing_sink_is_ignored():
    def broken(event):
        raise ValueError("sink down")

    reporter = ProgressReporter(broken, total_blocks=1)
    reporter.report(0, "status")
    reporter.report_final()
    assert reporter.events_sent == 0


def test_search_ticker_advances_and_caps():
    clock = FakeClock()
    received = []
    reporter = ProgressReporter(received.append, total_blocks=100, clock=clock)
    ticker = SearchTicker(reporter, time_limit=13.0)

    ticker.tick()
    assert received[-1].status == SEARCH_PHASES[0][0]
    assert received[-1].remaining_seconds == pytest.approx(13.0)

    clock.now = 1.5
    ticker.tick()
    assert ticker.phase_index == 1
    assert received[-1].placed_blocks == 11

    # at most one phase per tick
    clock.now = 12.5
    ticker.tick()
    assert ticker.phase_index == 2

    clock.now = 100.0
    for _ in range(20):
        ticker.tick()
    assert ticker.phase_index == len(SEARCH_PHASES) - 1
    assert received[-1].placed_blocks == 95
    assert received[-1].remaining_seconds == 0.0


# ─── During a solve ───────────────────────────────────────────────────────────

def test_progress_events_during_successful_solve(small_school, events):
    received, sink = events
    solution, _ = solve(small_school, progress=sink, time_limit=10)

    assert solution is not None
    assert len(received) >= 4
    elapsed = [e.elapsed_seconds for e in received]
    assert all(a < b for a, b in zip(elapsed, elapsed[1:]))
    assert all(e.total_blocks == 8 for e in received)

    last = received[-1]
    assert (last.status, last.tip) == FINAL_STATUS
    assert last.percent == 100.0
    assert all(e.percent <= 95.0 for e in received[:-1])


def test_solve_survives_a_broken_sink(small_school):
    def broken(event):
        raise RuntimeError("ui closed")

    solution, _ = solve(small_school, progress=broken, time_limit=10)
    assert solution is not None


def test_cancel_before_solve(small_school, events):
    received, sink = events
    cancel = threading.Event()
    cancel.set()

    solution, message = solve(small_school, progress=sink, cancel_event=cancel, time_limit=10)

    assert (solution, message) == (None, "Solve cancelled.")
    assert all(e.status != FINAL_STATUS[0] for e in received)


def test_cancel_during_search(small_school, monkeypatch):
    fake = SlowSolver()
    monkeypatch.setattr(solver_module, "configure_solver", lambda timeout: fake)
    cancel = threading.Event()
    search_statuses = {status for status, _ in SEARCH_PHASES}
    received = []

    def sink(event):
        received.append(event)
        if event.status in search_statuses:
            cancel.set()

    solution, message = solve(small_school, progress=sink, cancel_event=cancel, time_limit=10)

    assert (solution, message) == (None, "Solve cancelled.")
    assert fake.stopped.is_set()
    assert received[-1].status in search_statuses
