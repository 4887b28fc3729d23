from core.state import ScheduleState

"""
This module contains the placement rule tying each block's day and start to the
precomputed feasible slots.
"""

__all__ = ["allowed_slots_rule"]


def allowed_slots_rule(model, state: ScheduleState):
    """Restrict (day_i, start_i) jointly to block i's feasible slots."""
    for i in range(state.num_blocks):
        model.AddAllowedAssignments(
            [state.day_vars[i], state.start_vars[i]],
            state.feasible_slots[i],
        )
