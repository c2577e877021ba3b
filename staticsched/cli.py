"""Command line entry point: schedule, render and verify configured workloads."""

import argparse
import logging
import sys
from typing import List, Optional

from staticsched.config import load_config, load_workloads
from staticsched.logging_config import setup_logging
from staticsched.render import render_schedule
from staticsched.scheduler import make_schedule
from staticsched.verify import verify_schedule

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="staticsched",
        description="Build static schedules for periodic non-preemptive task sets.",
    )
    parser.add_argument(
        "config",
        nargs="?",
        default=None,
        help="YAML file with workloads (defaults to the bundled samples)",
    )
    parser.add_argument("--log-level", default=None, help="override the configured log level")
    parser.add_argument("--no-render", action="store_true", help="do not print timelines")
    parser.add_argument("--no-verify", action="store_true", help="skip schedule verification")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    config = load_config(args.config)
    setup_logging(args.log_level or config["log_level"])

    render = config["render"] and not args.no_render
    verify = config["verify"] and not args.no_verify

    ok = True
    for workload in load_workloads(config):
        schedule = make_schedule(workload)
        if schedule is None:
            print(f"{workload.name}: Schedule is not feasible")
            ok = False
            continue

        if render:
            print(render_schedule(workload, schedule))
        if verify:
            violations = verify_schedule(workload, schedule)
            for violation in violations:
                print(violation)
            if violations:
                logger.warning("%s: %d violations", workload.name, len(violations))
                ok = False

    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
