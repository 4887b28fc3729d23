from typing import Dict, List, Sequence, Tuple
import logging
from core.models import ScheduleBlock, SchoolConfiguration
from exceptions.custom_errors import BlockInfeasibleError
from utils.availability import day_key

logger = logging.getLogger(__name__)

"""
This module works out where each block could go on its own (teacher availability
and day length only), detects blocks that fit nowhere, and orders blocks
most-constrained-first.
"""

Slot = Tuple[int, int]


def get_feasible_slots(
    block: ScheduleBlock,
    teacher_availability: Dict[str, Dict[str, List[bool]]],
    configuration: SchoolConfiguration,
) -> List[Slot]:
    """
    Return every (day, start) where `block` fits inside its teacher's free hours.

    - A teacher with no grid at all has no feasible slot.
    - A day missing from the teacher's grid is treated as fully free.
    - A day whose grid length differs from the configured hours is skipped.

    Slots are returned ordered by day, then start.
    """
    feasible: List[Slot] = []
    schedule = teacher_availability.get(block.teacher)
    if schedule is None:
        return feasible

    for d in range(configuration.total_days):
        hours = configuration.get_hours_for_day(d)
        day_schedule = schedule.get(day_key(d))
        if day_schedule is None:
            day_schedule = [True] * hours

        if len(day_schedule) != hours:
            continue

        for s in range(hours - block.length + 1):
            if all(day_schedule[s : s + block.length]):
                feasible.append((d, s))

    return feasible


def compute_feasible_slots(
    blocks: Sequence[ScheduleBlock],
    teacher_availability: Dict[str, Dict[str, List[bool]]],
    configuration: SchoolConfiguration,
) -> List[List[Slot]]:
    """Feasible slots for each block, aligned with `blocks`."""
    return [get_feasible_slots(b, teacher_availability, configuration) for b in blocks]


def find_impossible_blocks(
    blocks: Sequence[ScheduleBlock], slots: Sequence[List[Slot]]
) -> List[ScheduleBlock]:
    return [b for b, s in zip(blocks, slots) if not s]


def check_feasibility(blocks: Sequence[ScheduleBlock], slots: Sequence[List[Slot]]):
    """
    Fail fast before search.

    Raises:
        BlockInfeasibleError: For the first block with no feasible slot.
    """
    impossible = find_impossible_blocks(blocks, slots)
    if impossible:
        logger.info(f"❌ {len(impossible)} block(s) have no feasible slot")
        for b in impossible:
            logger.info(f"    • {b.describe()}")
        raise BlockInfeasibleError(impossible[0])


def order_blocks(
    blocks: Sequence[ScheduleBlock], slots: Sequence[List[Slot]]
) -> Tuple[List[ScheduleBlock], List[List[Slot]]]:
    """
    Most-constrained-first ordering.

    Ascending by feasible slot count, then ascending priority, then longer
    blocks first. The sort is stable, so equal blocks keep their input order.
    """
    order = sorted(
        range(len(blocks)),
        key=lambda i: (len(slots[i]), blocks[i].priority, -blocks[i].length),
    )
    return [blocks[i] for i in order], [slots[i] for i in order]
