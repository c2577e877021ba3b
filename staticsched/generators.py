"""Random workload generators for testing and experiments."""

import random
from typing import List, Optional, Sequence

from staticsched.models import Task, Workload

DEFAULT_PERIODS = (10, 20, 40, 80)


def uunifast(n: int, u_total: float, seed: Optional[int] = None) -> List[float]:
    """Generate task utilizations using the UUniFast algorithm.

    UUniFast generates uniformly distributed task utilizations that sum to
    the target total utilization.

    Reference:
    Bini, E., & Buttazzo, G. C. (2005). Measuring the performance of schedulability tests.
    Real-Time Systems, 30(1-2), 129-154.

    Args:
        n: Number of tasks.
        u_total: Target total utilization (should be <= 1 for a single processor).
        seed: Optional random seed for reproducibility.

    Returns:
        List of n utilization values that sum to approximately u_total.

    Raises:
        ValueError: If n <= 0 or u_total < 0.
    """
    if n <= 0:
        raise ValueError("Number of tasks must be positive")
    if u_total < 0:
        raise ValueError("Target utilization must be non-negative")

    rng = random.Random(seed)

    utilizations = []
    sum_u = u_total

    for i in range(1, n):
        next_sum_u = sum_u * (rng.random() ** (1.0 / (n - i)))
        utilizations.append(sum_u - next_sum_u)
        sum_u = next_sum_u

    # Last utilization is whatever remains
    utilizations.append(sum_u)

    return utilizations


def generate_workload(
    n: int,
    target_utilization: float,
    periods: Sequence[int] = DEFAULT_PERIODS,
    delay_factor_max: float = 0.0,
    deadline_factor_min: float = 1.0,
    seed: Optional[int] = None,
    name: str = "",
) -> Workload:
    """Generate a random integer workload with UUniFast utilizations.

    Periods are drawn from ``periods`` (a harmonic menu by default, which
    keeps the hyperperiod equal to the largest period). Durations are rounded
    to whole time units, so the achieved utilization only approximates the
    target. Every task satisfies ``delay + duration <= deadline <= period``.

    Args:
        n: Number of tasks to generate.
        target_utilization: Target total utilization.
        periods: Candidate periods, all positive integers.
        delay_factor_max: Maximum release offset as a fraction of the slack
                          ``period - duration`` (0.0 means no offsets).
        deadline_factor_min: Minimum deadline as a fraction of the period
                             (1.0 means deadline = period).
        seed: Random seed for reproducibility.
        name: Workload display name.

    Returns:
        A Workload with n tasks.

    Raises:
        ValueError: If parameters are invalid.
    """
    if not periods or any(p <= 0 for p in periods):
        raise ValueError("Periods must be a non-empty set of positive integers")
    if not 0.0 <= delay_factor_max <= 1.0:
        raise ValueError("Delay factor must lie in [0, 1]")
    if not 0.0 < deadline_factor_min <= 1.0:
        raise ValueError("Deadline factor must lie in (0, 1]")

    rng = random.Random(seed)
    utilizations = uunifast(n, target_utilization, seed=seed)

    workload = Workload(name or f"Random U={target_utilization:.2f}")
    for i, u in enumerate(utilizations):
        period = rng.choice(list(periods))
        duration = min(period, max(1, round(u * period)))

        slack = period - duration
        delay = int(rng.uniform(0.0, delay_factor_max) * slack)

        # Deadline somewhere in [max(delay + C, factor * P), P]
        lowest = max(delay + duration, int(deadline_factor_min * period))
        deadline = rng.randint(lowest, period)

        workload.add(Task(
            name=f"τ{i+1}",
            period=period,
            duration=duration,
            delay=delay,
            deadline=deadline,
        ))

    return workload
