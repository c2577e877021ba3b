"""staticsched: static schedule synthesis for periodic real-time tasks.

This package builds a table-driven schedule covering one hyperperiod for a
set of strictly periodic, non-preemptive tasks with release offsets and
relative deadlines, using earliest-deadline-first backtracking search.
"""

from staticsched.models import Idle, Task, Workload
from staticsched.scheduler import get_choices, hyperperiod, make_schedule, replay
from staticsched.render import render_schedule
from staticsched.verify import Violation, verify_schedule

__version__ = "0.1.0"
__all__ = [
    "Task",
    "Idle",
    "Workload",
    "hyperperiod",
    "get_choices",
    "make_schedule",
    "replay",
    "render_schedule",
    "verify_schedule",
    "Violation",
]
