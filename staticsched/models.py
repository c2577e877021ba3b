"""Data models for periodic tasks and workloads."""

import math
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple, Union


@dataclass(eq=False)
class Task:
    """A strictly periodic, non-preemptive task.

    Each instance must start no earlier than ``delay`` and finish no later
    than ``deadline``, both measured from the start of its period.

    Attributes:
        name: Task identifier, used for display only.
        period: Period P; the task runs exactly once in every window of length P.
        duration: Execution time C, consumed atomically once launched.
        delay: Release offset within each period (defaults to 0).
        deadline: Relative deadline within each period (defaults to the period,
                  may not exceed it).
        last_launch: Absolute time of the most recent launch. Starts at
                     ``-period`` so the first period behaves as if a launch
                     happened one full period before time zero.
    """
    name: str
    period: int
    duration: int
    delay: int = 0
    deadline: Optional[int] = None
    last_launch: int = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Validate task parameters."""
        if self.period <= 0:
            raise ValueError(f"Task {self.name}: period must be positive, got {self.period}")
        if self.duration <= 0:
            raise ValueError(f"Task {self.name}: duration must be positive, got {self.duration}")
        if self.delay < 0:
            raise ValueError(f"Task {self.name}: delay cannot be negative, got {self.delay}")

        if self.deadline is None:
            self.deadline = self.period
        elif self.deadline < 0:
            raise ValueError(f"Task {self.name}: deadline cannot be negative, got {self.deadline}")
        elif self.deadline > self.period:
            raise ValueError(f"Task {self.name}: deadline ({self.deadline}) cannot exceed period ({self.period})")

        self.last_launch = -self.period

    @property
    def utilization(self) -> float:
        """Return the utilization of this task (C/P)."""
        return self.duration / self.period

    def next_deadline(self) -> int:
        """Absolute deadline of the next instance still to be serviced."""
        period_index = (self.last_launch + self.period) // self.period
        return period_index * self.period + self.deadline

    def launch(self, now: int) -> int:
        """Record a launch at ``now`` and return the previous launch time.

        Passing the returned value back to ``launch`` undoes the launch.
        """
        previous = self.last_launch
        self.last_launch = now
        return previous

    def must_wait(self, now: int) -> int:
        """Time from ``now`` until this task may legally launch (0 = eligible).

        If the task has already run in the current period's window, the
        earliest launch moves to the next period.
        """
        period_start = (now // self.period) * self.period
        earliest_launch = period_start + self.delay
        if self.last_launch >= earliest_launch:
            earliest_launch += self.period
        return max(0, earliest_launch - now)

    def reset(self) -> None:
        """Forget any recorded launch."""
        self.last_launch = -self.period

    def __str__(self) -> str:
        return (
            f"Task({self.name}: P={self.period}, C={self.duration}, "
            f"delay={self.delay}, deadline={self.deadline}, launch={self.last_launch})"
        )


@dataclass(frozen=True)
class Idle:
    """Filler entry for a stretch of time in which no task is eligible."""
    duration: int
    name: str = field(default="Idle", init=False)

    def next_deadline(self) -> float:
        # Idle never drives urgency.
        return math.inf

    def launch(self, now: Optional[int]) -> None:
        return None


Entry = Union[Task, Idle]


@dataclass
class Workload:
    """A named, ordered collection of tasks to be scheduled together.

    The workload owns its tasks. Scheduling mutates their launch state in
    place, so one workload must not be searched by two schedulers at once.

    Attributes:
        name: Display name.
        task_list: Tasks in insertion order.
        _cache: Snapshot returned by ``tasks()``; cleared by ``add()``.
    """
    name: str = ""
    task_list: List[Task] = field(default_factory=list)
    _cache: Optional[Tuple[Task, ...]] = field(default=None, init=False, repr=False, compare=False)

    def add(self, task: Task) -> None:
        """Append a task and invalidate the cached snapshot."""
        self.task_list.append(task)
        self._cache = None

    def tasks(self) -> Tuple[Task, ...]:
        """Return a stable, ordered snapshot of the tasks."""
        if self._cache is None:
            self._cache = tuple(self.task_list)
        return self._cache

    def reset(self) -> None:
        """Reset the launch state of every task."""
        for task in self.task_list:
            task.reset()

    @property
    def total_utilization(self) -> float:
        """Return the total utilization of all tasks."""
        return sum(t.utilization for t in self.task_list)

    def __len__(self) -> int:
        return len(self.task_list)

    def __iter__(self) -> Iterator[Task]:
        return iter(self.tasks())

    def __getitem__(self, index: int) -> Task:
        return self.task_list[index]
