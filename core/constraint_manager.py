from typing import Callable, List
import logging
from ortools.sat.python import cp_model
from core.state import ScheduleState

logger = logging.getLogger(__name__)

Rule = Callable[[cp_model.CpModel, ScheduleState], None]


class ConstraintManager:
    def __init__(self, model: cp_model.CpModel, state: ScheduleState):
        self.model = model
        self.state = state
        self.rules: List[Rule] = []

    def add_rule(self, rule_func: Rule, condition: bool = True):
        """Register a rule with optional enablement condition."""
        if condition:
            self.rules.append(rule_func)

    def apply_all(self):
        """Apply all registered rules in order."""
        for rule in self.rules:
            logger.debug(f"Applying rule {rule.__name__}")
            rule(self.model, self.state)
