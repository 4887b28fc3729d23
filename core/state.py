from dataclasses import dataclass, field
from ortools.sat.python import cp_model
from typing import Dict, List, Tuple
from core.models import ScheduleBlock


@dataclass
class ScheduleState:
    """
    A dataclass to hold all the state relevant to creating and solving one
    lesson scheduling problem.
    """

    # model inputs
    blocks: List[ScheduleBlock]
    """The blocks to place, already sorted most-constrained-first."""
    feasible_slots: Dict[int, List[Tuple[int, int]]]
    """A dictionary mapping each block index to its allowed `(day, start)`
    pairs, derived from teacher availability and day length only.
    """

    # model params
    total_days: int
    """The number of school days in the week."""
    max_hours_per_day: int
    """The longest configured day; used as the stride of the absolute time axis."""
    time_limit: float
    """The search budget in seconds."""

    # collections to fill
    day_vars: Dict[int, cp_model.IntVar] = field(default_factory=dict)
    """A dictionary with block index keys and the chosen day variable as values."""
    start_vars: Dict[int, cp_model.IntVar] = field(default_factory=dict)
    """A dictionary with block index keys and the start hour variable as values."""
    abs_vars: Dict[int, cp_model.IntVar] = field(default_factory=dict)
    """A dictionary with block index keys and `day * max_hours_per_day + start`
    as values.
    """
    interval_vars: Dict[int, cp_model.IntervalVar] = field(default_factory=dict)
    """A dictionary with block index keys and the fixed-length interval anchored
    at the absolute start.
    """

    @property
    def num_blocks(self) -> int:
        return len(self.blocks)

    def intervals_by(self, attr: str) -> Dict[str, List[cp_model.IntervalVar]]:
        """Group the interval variables by a block attribute such as `class_name` or `teacher`."""
        groups: Dict[str, List[cp_model.IntervalVar]] = {}
        for i, block in enumerate(self.blocks):
            groups.setdefault(getattr(block, attr), []).append(self.interval_vars[i])
        return groups
