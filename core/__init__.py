"""
core
----

Core scheduling engine components:

- models:
  Domain records (LessonAssignment, SchoolConfiguration, SchoolData,
  ScheduleBlock, SolutionData) shared by the loader, solver and API.

- ScheduleState:
  Encapsulate the sorted blocks, their feasible slots and the CP-SAT
  variables created for one solve.

- ConstraintManager:
  Register and apply constraint functions in a controlled sequence.
"""
