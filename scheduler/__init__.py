"""
scheduler
---------

Main scheduling module. Initializes key components:

- `setup`: Block expansion, search budget and model variables.
- `feasibility`: Feasible slots per block, fail-fast check and ordering.
- `runner`: Model construction and the solve pipeline.
- `builder`: The public `solve` / `solve_async` entry points.

Provides high-level access to core scheduling functionality.
"""
from . import builder, runner
from .builder import solve, solve_async
