"""Fixed-width ASCII timeline of a schedule.

Example (one task per line, ``x`` marks the slots the task occupies)::

    Schedule for Workload 1
    10.2.0.10a  |xx   |     |xx   |     |xx   |     |xx   |     |...
    10.2.0.10b  |  xx |     |  xx |     |  xx |     |  xx |     |...
                0     5     10    15    20    25    30    35    ...
"""

from typing import List, Sequence

from staticsched.models import Entry, Task, Workload
from staticsched.scheduler import hyperperiod

COLUMN_WIDTH = 5


def _timeline(task: Task, schedule: Sequence[Entry], length: int) -> str:
    slots = []
    for entry in schedule:
        slots.extend(["x" if entry is task else " "] * entry.duration)
    # Trailing idle may run past the hyperperiod; a short schedule is padded.
    slots = slots[:length] + [" "] * (length - len(slots))

    chars: List[str] = []
    for pos, mark in enumerate(slots):
        if pos % COLUMN_WIDTH == 0:
            chars.append("|")
        chars.append(mark)
    chars.append("|")
    return "".join(chars)


def render_schedule(workload: Workload, schedule: Sequence[Entry]) -> str:
    """Render ``schedule`` as one timeline per task plus a time ruler.

    Args:
        workload: The workload the schedule was built for.
        schedule: Launches in execution order, as returned by ``make_schedule``.

    Returns:
        The rendered text, ending with a blank line.
    """
    tasks = workload.tasks()
    lines = [f"Schedule for {workload.name}"]
    if not tasks:
        lines.append("")
        return "\n".join(lines) + "\n"

    length = hyperperiod(tasks)
    width = max(len(t.name) for t in tasks)

    for task in tasks:
        lines.append(f"{task.name:<{width}} {_timeline(task, schedule, length)}")

    num_labels = (length + COLUMN_WIDTH - 1) // COLUMN_WIDTH + 1
    ruler = "".join(f"{COLUMN_WIDTH * i:<6d}" for i in range(num_labels))
    lines.append(f"{'':<{width}} {ruler}")
    lines.append("")
    return "\n".join(lines) + "\n"
