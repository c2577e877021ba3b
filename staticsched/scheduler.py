"""Static schedule synthesis for periodic, non-preemptive tasks.

This module builds one hyperperiod of a static (table-driven) schedule by
depth-first backtracking over the tasks eligible at each point in time.

Choice enumeration at simulated time ``now``:
    1. For each task compute ``wait = must_wait(now)``, keeping the minimum.
    2. A task is a choice iff ``wait == 0`` and ``now + C <= next_deadline()``.
    3. If no task is ready at all (minimum wait > 0), the only choice is an
       ``Idle`` entry lasting that minimum wait.
    4. Choices are tried earliest-deadline-first (stable on ties).

Search:
    Each choice is appended to the schedule and launched at ``now``; its
    previous launch time is kept as an undo token. If it finishes at or after
    the end of the hyperperiod, and every task has run in its last period,
    the schedule is complete. If it finishes earlier the search descends to
    its finish time. When a subtree is exhausted, or a final leaf leaves some
    task unserviced, the choice is popped, its launch time is restored from the token and the next choice is
    tried. The first complete schedule wins.

The search walks an explicit stack of frames rather than recursing, so the
schedule length is not limited by the interpreter's recursion limit.

A ``None`` result means no schedule was found under this choice policy. It is
not a proof that no legal ordering exists at all: idle insertion and the EDF
ordering prune some orderings.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

from staticsched.mathutils import lcm_all
from staticsched.models import Entry, Idle, Task, Workload

logger = logging.getLogger(__name__)


def hyperperiod(tasks: Sequence[Task]) -> int:
    """Return the least common multiple of all task periods.

    Raises:
        ValueError: If ``tasks`` is empty.
    """
    if not tasks:
        raise ValueError("Hyperperiod is undefined for an empty task set")
    return lcm_all(t.period for t in tasks)


def get_choices(tasks: Iterable[Task], now: int) -> List[Entry]:
    """Return the entries that may be launched at ``now``, EDF first.

    If no task is ready, a single ``Idle`` entry covering the shortest wait
    is returned. If tasks are ready but every one of them would miss its
    deadline, the result is empty and the branch is a dead end.
    """
    choices: List[Entry] = []
    min_wait = None

    for task in tasks:
        wait = task.must_wait(now)
        if min_wait is None or wait < min_wait:
            min_wait = wait
        # Eligible now, but useless if it cannot finish by its deadline.
        if wait == 0 and now + task.duration <= task.next_deadline():
            choices.append(task)

    if min_wait is not None and min_wait > 0:
        choices.append(Idle(min_wait))

    choices.sort(key=lambda entry: entry.next_deadline())
    return choices


@dataclass
class _Frame:
    """One node of the search: the choices at ``now`` and how far we got."""
    now: int
    choices: List[Entry]
    index: int = 0
    undo: Optional[int] = None


def _retreat(frame: _Frame, schedule: List[Entry]) -> None:
    """Undo the frame's current choice and move on to the next one."""
    choice = frame.choices[frame.index]
    schedule.pop()
    choice.launch(frame.undo)
    frame.undo = None
    frame.index += 1


def _serviced_last_periods(tasks: Sequence[Task], end: int) -> bool:
    # With deadline <= period (enforced by Task), a task that skips a period
    # can never launch again: its next deadline stays in the past. So running
    # in the last period implies it ran once in every period.
    return all(t.last_launch >= end - t.period for t in tasks)


def make_schedule(workload: Workload) -> Optional[List[Entry]]:
    """Build a static schedule covering one hyperperiod of ``workload``.

    Launch state of every task is reset before the search starts, so repeated
    calls on the same workload return the same schedule.

    Args:
        workload: The tasks to schedule. Their ``last_launch`` fields are
                  mutated during the search.

    Returns:
        The launches in execution order (tasks and ``Idle`` fillers), an
        empty list for an empty workload, or None if no schedule was found.
    """
    tasks = workload.tasks()
    if not tasks:
        return []

    workload.reset()
    end = hyperperiod(tasks)
    logger.info("Scheduling %s: %d tasks, hyperperiod %d", workload.name or "workload", len(tasks), end)

    schedule: List[Entry] = []
    stack = [_Frame(now=0, choices=get_choices(tasks, 0))]
    nodes = 1
    backtracks = 0

    while stack:
        frame = stack[-1]

        if frame.index == len(frame.choices):
            # Every choice at this node failed; give up on the parent's choice too.
            stack.pop()
            if stack:
                parent = stack[-1]
                backtracks += 1
                logger.debug(
                    "Backtracking at t=%d: %s",
                    parent.now,
                    parent.choices[parent.index].name,
                )
                _retreat(parent, schedule)
            continue

        choice = frame.choices[frame.index]
        schedule.append(choice)
        frame.undo = choice.launch(frame.now)
        finish = frame.now + choice.duration

        if finish >= end:
            if not _serviced_last_periods(tasks, end):
                # Some task let its final window lapse; this leaf is not a schedule.
                _retreat(frame, schedule)
                continue
            logger.info(
                "Schedule found for %s: %d launches, %d nodes, %d backtracks",
                workload.name or "workload", len(schedule), nodes, backtracks,
            )
            return schedule

        stack.append(_Frame(now=finish, choices=get_choices(tasks, finish)))
        nodes += 1

    logger.info(
        "No schedule found for %s after %d nodes, %d backtracks",
        workload.name or "workload", nodes, backtracks,
    )
    return None


def replay(schedule: Iterable[Entry]) -> Iterator[Tuple[int, Entry]]:
    """Yield ``(start_time, entry)`` for each launch, replayed from time 0."""
    now = 0
    for entry in schedule:
        yield now, entry
        now += entry.duration
