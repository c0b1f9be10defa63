"""Generate figures from a server-count sweep produced by run_sim."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Optional, Sequence

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import pandas as pd  # noqa: E402

REQUIRED_COLUMNS = ("servers", "peak_busy_time", "mean_wait", "max_wait", "utilization")


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate plots from sweep results.")
    parser.add_argument(
        "--results",
        type=Path,
        default=Path("outputs/results.csv"),
        help="CSV produced by src.run_sim.",
    )
    parser.add_argument(
        "--reports-dir",
        type=Path,
        default=Path("reports"),
        help="Directory where PNG files will be saved.",
    )
    return parser.parse_args(argv)


def load_results(path: Path) -> pd.DataFrame:
    if not path.exists():
        raise FileNotFoundError(f"Results file not found: {path}")
    df = pd.read_csv(path)
    if df.empty:
        raise ValueError("Results file is empty. Run the simulation first.")
    missing = [column for column in REQUIRED_COLUMNS if column not in df.columns]
    if missing:
        raise ValueError(f"Results file is missing column(s): {', '.join(missing)}")
    return df.sort_values("servers").reset_index(drop=True)


def plot_peak_busy(df: pd.DataFrame, out: Path) -> None:
    servers = df["servers"].astype(int).tolist()
    fig, ax = plt.subplots(figsize=(8, 4))
    ax.bar(servers, df["peak_busy_time"], color="#4c72b0")
    ax2 = ax.twinx()
    ax2.plot(servers, df["utilization"], color="black", marker="o", label="Utilization")
    ax2.set_ylim(0, 1.05)
    ax.set_xticks(servers)
    ax.set_xlabel("Tellers")
    ax.set_ylabel("Peak busy time")
    ax2.set_ylabel("Mean utilization")
    ax.set_title("Peak busy time vs. number of tellers")
    ax2.legend(loc="upper right")
    fig.tight_layout()
    fig.savefig(out, dpi=150)
    plt.close(fig)


def plot_waits(df: pd.DataFrame, out: Path) -> None:
    servers = df["servers"].astype(int).tolist()
    fig, ax = plt.subplots(figsize=(8, 4))
    ax.plot(servers, df["mean_wait"], marker="o", label="Mean wait")
    ax.plot(servers, df["max_wait"], linestyle="--", marker="x", label="Max wait")
    ax.set_xticks(servers)
    ax.set_xlabel("Tellers")
    ax.set_ylabel("Wait (time units)")
    ax.set_title("Customer wait vs. number of tellers")
    ax.legend()
    fig.tight_layout()
    fig.savefig(out, dpi=150)
    plt.close(fig)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)
    try:
        df = load_results(args.results)
    except (FileNotFoundError, ValueError) as exc:
        raise SystemExit(str(exc)) from exc

    args.reports_dir.mkdir(parents=True, exist_ok=True)
    plot_peak_busy(df, args.reports_dir / "peak_busy_vs_servers.png")
    plot_waits(df, args.reports_dir / "wait_vs_servers.png")

    print(f"Figures written to {args.reports_dir.resolve()}")


if __name__ == "__main__":
    main()
