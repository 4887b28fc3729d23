"""
scheduler.rules
---------------

Exposes all scheduling constraints by importing from:

- `placement`: Restrict each block's (day, start) pair to its feasible slots.
- `overlap`: No two blocks of the same class or the same teacher may overlap.

Allows unified access to all rule definitions via wildcard imports.
"""
from .placement import *
from .overlap import *
