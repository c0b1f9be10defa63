"""Command line interface to replay an arrival trace for several teller counts."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

import pandas as pd
from tqdm import tqdm

try:
    from banksim import (
        ArrivalEvent,
        InvalidConfigurationError,
        MAX_SERVERS,
        MIN_SERVERS,
        RunController,
        RunSummary,
        ServerBounds,
        SimulationResult,
        get_trace,
        list_traces,
        load_trace,
        recommend_server_count,
        replay_trace,
        staffing_score,
        summarize_run,
    )
except ModuleNotFoundError:  # pragma: no cover - fallback when executed as package
    from .banksim import (
        ArrivalEvent,
        InvalidConfigurationError,
        MAX_SERVERS,
        MIN_SERVERS,
        RunController,
        RunSummary,
        ServerBounds,
        SimulationResult,
        get_trace,
        list_traces,
        load_trace,
        recommend_server_count,
        replay_trace,
        staffing_score,
        summarize_run,
    )

logger = logging.getLogger(__name__)


def parse_server_list(spec: str) -> List[int]:
    values = []
    for chunk in spec.split(","):
        chunk = chunk.strip()
        if not chunk:
            continue
        try:
            values.append(int(chunk))
        except ValueError as exc:
            raise argparse.ArgumentTypeError(f"Invalid server count '{chunk}'.") from exc
    if not values:
        raise argparse.ArgumentTypeError("Provide at least one server count via --servers.")
    return sorted(set(values))


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Replay an arrival trace with different numbers of tellers."
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--trace",
        type=str,
        choices=list(list_traces()),
        default="reference",
        help="Named built-in trace.",
    )
    source.add_argument(
        "--input",
        type=Path,
        help="CSV trace with arrival_time and transaction_time columns.",
    )
    parser.add_argument(
        "--servers",
        type=parse_server_list,
        help='Comma-separated server counts (e.g. "1,2,3"). Defaults to every count within bounds.',
    )
    parser.add_argument(
        "--min-servers", type=int, default=MIN_SERVERS, help="Smallest allowed server count."
    )
    parser.add_argument(
        "--max-servers", type=int, default=MAX_SERVERS, help="Largest allowed server count."
    )
    parser.add_argument(
        "--c-server",
        type=float,
        default=1.0,
        dest="c_server",
        help="Cost per teller used for the recommendation.",
    )
    parser.add_argument(
        "--c-wait",
        type=float,
        default=1.0,
        dest="c_wait",
        help="Cost per unit of mean customer wait used for the recommendation.",
    )
    parser.add_argument(
        "--cross-check",
        action="store_true",
        help="Replay every run on SimPy and fail if the busy totals disagree.",
    )
    parser.add_argument(
        "--outputs",
        type=Path,
        default=Path("outputs/results.csv"),
        help="Path where the CSV summary will be written.",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity.",
    )
    return parser.parse_args(argv)


def resolve_trace(args: argparse.Namespace) -> Tuple[ArrivalEvent, ...]:
    if args.input is not None:
        try:
            return load_trace(args.input)
        except (FileNotFoundError, ValueError) as exc:
            raise SystemExit(str(exc)) from exc
    return get_trace(args.trace)


def resolve_bounds(args: argparse.Namespace) -> ServerBounds:
    try:
        return ServerBounds(min_servers=args.min_servers, max_servers=args.max_servers)
    except InvalidConfigurationError as exc:
        raise SystemExit(str(exc)) from exc


def run_sweep(controller: RunController, counts: Sequence[int]) -> List[SimulationResult]:
    """Run the controller once per server count."""
    results = []
    for count in tqdm(counts, desc="Simulating", unit="run"):
        results.append(controller.run(count))
    return results


def cross_check(
    trace: Sequence[ArrivalEvent], results: Sequence[SimulationResult], bounds: ServerBounds
) -> List[str]:
    """Return a description of every run whose SimPy replay disagrees on busy totals."""
    expected_total = sum(event.transaction_time for event in trace)
    problems = []
    for result in results:
        replayed = replay_trace(trace, result.server_count, bounds=bounds)
        if result.total_busy_time() != expected_total:
            problems.append(
                f"{result.server_count} server(s): engine busy total {result.total_busy_time()} "
                f"!= transaction total {expected_total}"
            )
        if replayed.total_busy_time() != result.total_busy_time():
            problems.append(
                f"{result.server_count} server(s): replay busy total {replayed.total_busy_time()} "
                f"!= engine busy total {result.total_busy_time()}"
            )
    return problems


def summarize(summaries: Sequence[RunSummary], c_server: float, c_wait: float) -> pd.DataFrame:
    df = pd.DataFrame([summary.as_dict() for summary in summaries])
    if df.empty:
        return df
    df["score"] = [staffing_score(s, c_server=c_server, c_wait=c_wait) for s in summaries]
    return df.sort_values("servers").reset_index(drop=True)


def ensure_parent(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    trace = resolve_trace(args)
    bounds = resolve_bounds(args)
    counts = args.servers if args.servers is not None else bounds.counts()
    for count in counts:
        try:
            bounds.validate(count)
        except InvalidConfigurationError as exc:
            raise SystemExit(str(exc)) from exc

    controller = RunController(trace, bounds=bounds)
    results = run_sweep(controller, counts)
    summaries = [summarize_run(result) for result in results]

    if args.cross_check:
        problems = cross_check(trace, results, bounds)
        for problem in problems:
            logger.error("Cross-check failed: %s", problem)
        if problems:
            raise SystemExit("SimPy replay disagrees with the event engine.")

    df = summarize(summaries, c_server=args.c_server, c_wait=args.c_wait)
    ensure_parent(args.outputs)
    df.to_csv(args.outputs, index=False)

    print(f"\nTrace: {len(trace)} arrivals")
    for summary in summaries:
        label = "server" if summary.servers == 1 else "servers"
        print(f"  Peak busy time with {summary.servers} {label}: {summary.peak_busy_time}")

    print("\nWaiting:")
    for summary in summaries:
        print(
            f"  {summary.servers} -> waited {summary.customers_waited:>3d}, "
            f"mean wait {summary.mean_wait:>8.3f}, max line {summary.max_line_length:>3d}"
        )

    best = recommend_server_count(summaries, c_server=args.c_server, c_wait=args.c_wait)
    if best is not None:
        print(f"\nRecommended tellers (c_server={args.c_server}, c_wait={args.c_wait}): {best}")

    print(f"\nResults written to {args.outputs.resolve()}")


if __name__ == "__main__":
    main()
