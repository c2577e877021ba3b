"""Independent check of a produced schedule.

The verifier replays the schedule from time 0 and checks each task on its
own terms, without looking at the scheduler's launch bookkeeping:

    - every launch starts at or after the task's delay within its period,
    - every launch finishes by the task's deadline within its period,
    - the task runs exactly once in each of its periods in the hyperperiod.
"""

from dataclasses import dataclass
from typing import List, Sequence

from staticsched.models import Entry, Task, Workload
from staticsched.scheduler import hyperperiod, replay


@dataclass(frozen=True)
class Violation:
    """A single problem found in a schedule.

    Attributes:
        workload: Name of the workload.
        task: Name of the offending task.
        kind: One of ``"early"``, ``"deadline"`` or ``"count"``.
        time: Launch time for ``early``/``deadline``; period index for ``count``.
        runs: Number of runs in the period (``count`` only).
    """
    workload: str
    task: str
    kind: str
    time: int
    runs: int = 0

    def __str__(self) -> str:
        prefix = f"{self.workload}: task {self.task}"
        if self.kind == "early":
            return f"{prefix} launched too early at {self.time}"
        if self.kind == "deadline":
            return f"{prefix} launched at {self.time} missed deadline"
        return f"{prefix} ran {self.runs} times in period {self.time}"


def _check_task(workload: Workload, task: Task, schedule: Sequence[Entry], length: int) -> List[Violation]:
    violations: List[Violation] = []
    runs = [0] * (length // task.period)

    for now, entry in replay(schedule):
        if entry is not task:
            continue
        period_index, offset = divmod(now, task.period)
        if offset < task.delay:
            violations.append(Violation(workload.name, task.name, "early", now))
        if offset + task.duration > task.deadline:
            violations.append(Violation(workload.name, task.name, "deadline", now))
        if period_index < len(runs):
            runs[period_index] += 1

    for index, count in enumerate(runs):
        if count != 1:
            violations.append(Violation(workload.name, task.name, "count", index, count))
    return violations


def verify_schedule(workload: Workload, schedule: Sequence[Entry]) -> List[Violation]:
    """Return every violation in ``schedule``; an empty list means it is valid."""
    tasks = workload.tasks()
    if not tasks:
        return []

    length = hyperperiod(tasks)
    violations: List[Violation] = []
    for task in tasks:
        violations.extend(_check_task(workload, task, schedule, length))
    return violations
