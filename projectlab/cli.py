from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from projectlab.config import DEFAULT_RUNS
from projectlab.executors import BatchExecutor, SerialExecutor, ThreadedExecutor
from projectlab.io import load_model, write_samples_csv, write_summary_json, write_tasks_csv
from projectlab.metrics import summarize
from projectlab.sim import simulate_project
from projectlab.validate import ModelValidationError, validate_model

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="projectlab", description="Project duration and cost Monte Carlo"
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    sim = sub.add_parser("simulate", help="Run simulations for a project model")
    sim.add_argument("--model", required=True, type=Path)
    sim.add_argument("--runs", required=False, type=int, default=DEFAULT_RUNS)
    sim.add_argument("--seed", required=False, type=int, default=None)
    sim.add_argument("--out-summary", required=True, type=Path)
    sim.add_argument("--out-samples", required=False, type=Path)
    sim.add_argument(
        "--out-tasks",
        required=False,
        type=Path,
        help="Per-draw task durations (one column per task)",
    )
    mode = sim.add_mutually_exclusive_group()
    mode.add_argument(
        "--parallel",
        dest="executor",
        action="store_const",
        const="parallel",
        help="Sample task batches on a thread pool",
    )
    mode.add_argument(
        "--serial", dest="executor", action="store_const", const="serial"
    )
    sim.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    return p


def _executor(choice: str | None) -> BatchExecutor | None:
    if choice == "parallel":
        return ThreadedExecutor()
    if choice == "serial":
        return SerialExecutor()
    return None


def main(argv: list[str] | None = None) -> int:
    p = _build_parser()
    args = p.parse_args(argv)

    if args.cmd == "simulate":
        logging.basicConfig(
            level=getattr(logging, args.log_level),
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        )

        try:
            model = load_model(args.model)
        except (OSError, ValueError, TypeError, KeyError) as e:
            sys.stderr.write(f"projectlab: cannot load model {args.model}: {e}\n")
            return 2

        try:
            validate_model(model)
            result = simulate_project(
                model,
                args.runs,
                seed=args.seed,
                executor=_executor(args.executor),
            )
        except ModelValidationError as e:
            sys.stderr.write(f"projectlab: {type(e).__name__}: {e}\n")
            return 2

        summary = summarize(result)
        logger.info(
            "duration p50=%.1f p90=%.1f days; cost p50=%.2f p90=%.2f",
            summary["duration_days"]["p50"],
            summary["duration_days"]["p90"],
            summary["cost"]["p50"],
            summary["cost"]["p90"],
        )

        write_summary_json(args.out_summary, summary)
        if args.out_samples:
            write_samples_csv(args.out_samples, result)
        if args.out_tasks:
            write_tasks_csv(args.out_tasks, result)

        return 0

    raise AssertionError(f"Unhandled command: {args.cmd}")
