"""Feasibility vs Utilisation Experiment.

Generates random integer workloads at various utilisation levels using
UUniFast, runs the backtracking scheduler on each, and plots the fraction for
which a static schedule was found as a function of utilisation.
"""

from pathlib import Path

try:
    import matplotlib
    matplotlib.use('Agg')  # Non-interactive backend
    import matplotlib.pyplot as plt
    MATPLOTLIB_AVAILABLE = True
except ImportError:
    MATPLOTLIB_AVAILABLE = False

from staticsched.generators import DEFAULT_PERIODS, generate_workload
from staticsched.scheduler import make_schedule
from staticsched.verify import verify_schedule


def check_schedule(workload, schedule) -> None:
    """Raise RuntimeError listing every violation if ``schedule`` is invalid."""
    violations = verify_schedule(workload, schedule)
    if violations:
        raise RuntimeError("\n".join(str(v) for v in violations))


def run_feasibility_experiment(
    utilisation_points: list,
    num_workloads_per_point: int = 50,
    num_tasks: int = 5,
    periods: tuple = DEFAULT_PERIODS,
    delay_factor_max: float = 0.5,
    deadline_factor_min: float = 0.8,
    seed: int = 42,
) -> dict:
    """Run the feasibility experiment across utilisation levels.

    Args:
        utilisation_points: Utilisation values to test (e.g. [0.1, 0.2, ..., 0.9]).
        num_workloads_per_point: Number of random workloads per utilisation.
        num_tasks: Number of tasks per workload.
        periods: Candidate task periods.
        delay_factor_max: Maximum release offset as a fraction of slack.
        deadline_factor_min: Minimum deadline as a fraction of the period.
        seed: Base random seed (varied per workload).

    Returns:
        Dictionary mapping utilisation -> feasibility ratio.

    Raises:
        RuntimeError: If a produced schedule fails verification.
    """
    results = {}

    for u_total in utilisation_points:
        feasible_count = 0

        for i in range(num_workloads_per_point):
            workload = generate_workload(
                n=num_tasks,
                target_utilization=u_total,
                periods=periods,
                delay_factor_max=delay_factor_max,
                deadline_factor_min=deadline_factor_min,
                seed=seed + int(u_total * 1000) + i,
            )

            schedule = make_schedule(workload)
            if schedule is not None:
                check_schedule(workload, schedule)
                feasible_count += 1

        results[u_total] = feasible_count / num_workloads_per_point

    return results


def plot_feasibility_vs_utilisation(
    results: dict,
    output_path: str = "results/feasibility_vs_utilisation.png",
) -> None:
    """Plot feasibility ratio vs utilisation.

    Args:
        results: Dictionary mapping utilisation -> feasibility ratio.
        output_path: Path to save the plot.
    """
    if not MATPLOTLIB_AVAILABLE:
        raise ImportError("matplotlib is required for plotting")

    output_dir = Path(output_path).parent
    output_dir.mkdir(parents=True, exist_ok=True)

    utilisations = sorted(results.keys())
    ratios = [results[u] for u in utilisations]

    plt.figure(figsize=(10, 6))
    plt.plot(utilisations, ratios, 'bo-', linewidth=2, markersize=8)
    plt.xlabel('Total Utilisation', fontsize=12)
    plt.ylabel('Fraction Scheduled', fontsize=12)
    plt.title('Static Schedule Feasibility vs Utilisation (EDF backtracking)', fontsize=14)
    plt.grid(True, alpha=0.3)
    plt.xlim(0, 1.0)
    plt.ylim(0, 1.05)

    plt.savefig(output_path, dpi=150, bbox_inches='tight')
    plt.close()

    print(f"Plot saved to {output_path}")


def main():
    """Run the full feasibility vs utilisation experiment."""
    print("Running feasibility vs utilisation experiment...")

    utilisation_points = [u / 10.0 for u in range(1, 10)]

    results = run_feasibility_experiment(
        utilisation_points=utilisation_points,
        num_workloads_per_point=100,
        num_tasks=5,
        seed=42,
    )

    print("\nResults:")
    for u, ratio in sorted(results.items()):
        print(f"  U = {u:.1f}: {ratio:.3f} scheduled")

    plot_feasibility_vs_utilisation(results)

    print("\nExperiment complete!")


if __name__ == "__main__":
    main()
