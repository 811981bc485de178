"""
Experiment runner: times the synchronous facade and traces the engine for a
set of algorithms over growing input sizes, driven by a YAML config.

Usage (from repo root):
    python -m sortscope.bench.runner experiments/configs/01_trace_all.yaml

Outputs in a new run directory:
    - config_resolved.yaml    # the config we actually used
    - meta.json               # environment info (python, numpy, cpu/ram, git commit)
    - results.jsonl           # timing samples and one trace record per (algo, n)
    - summary.csv             # median + IQR of facade timings, event counts per (algo, n)
    - (console) rich/tqdm summaries

Design notes:
- For each size n, ONE dataset is generated and given to every algorithm.
- The engine runs with the config's `engine` block; set pacing_seconds: 0
  for benchmarking, since pacing is a visualization cadence.
- On timeout, error or a failed validation, larger sizes are skipped for
  that algorithm.
"""

from __future__ import annotations

import argparse
import datetime as _dt
import json
import logging
import os
import platform
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import numpy as np
import pandas as pd
import psutil
import yaml
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from tqdm import tqdm

from sortscope.algorithms import PLAIN, Algorithm, resolve
from sortscope.bench.measure import time_sort_call
from sortscope.bench.trace import trace_run
from sortscope.config import EngineConfig
from sortscope.datasets import make_dataset
from sortscope.engine import SortEngine
from sortscope.validate import equals_oracle

logger = logging.getLogger("sortscope.bench.runner")
_console = Console()

REQUIRED_KEYS = (
    "experiment_name",
    "output_dir",
    "seed",
    "repeats",
    "warmup",
    "disable_gc",
    "timeout_seconds",
    "dataset",
    "sizes",
    "algorithms",
)
SUMMARY_COLUMNS = ["algo", "n", "samples_ok", "median_ns", "iqr_ns", "min_ns", "max_ns", "events", "exchanges"]


# ------------------------- data structures ------------------------- #

@dataclass(frozen=True)
class ExperimentConfig:
    experiment_name: str
    output_dir: Path
    seed: int
    repeats: int
    warmup: bool
    disable_gc: bool
    timeout_seconds: float
    dataset: Dict[str, Any]
    sizes: List[int]
    algorithms: List[Algorithm]
    engine: EngineConfig

    @classmethod
    def from_mapping(cls, cfg: Dict[str, Any]) -> "ExperimentConfig":
        if not isinstance(cfg, dict):
            raise ValueError("experiment config must be a mapping")
        missing = [k for k in REQUIRED_KEYS if k not in cfg]
        if missing:
            raise ValueError(f"Missing required config keys: {missing}")
        sizes = [int(n) for n in cfg["sizes"]]
        if not sizes or any(n < 0 for n in sizes):
            raise ValueError("Config 'sizes' must be a non-empty list of nonnegative integers")
        return cls(
            experiment_name=str(cfg["experiment_name"]),
            output_dir=Path(cfg["output_dir"]),
            seed=int(cfg["seed"]),
            repeats=int(cfg["repeats"]),
            warmup=bool(cfg["warmup"]),
            disable_gc=bool(cfg["disable_gc"]),
            timeout_seconds=float(cfg["timeout_seconds"]),
            dataset=dict(cfg["dataset"]),
            sizes=sizes,
            algorithms=_resolve_algorithms(cfg["algorithms"]),
            engine=EngineConfig.from_mapping(cfg.get("engine")),
        )


# ------------------------- helpers: IO & meta ------------------------- #

def _load_yaml(path: Path) -> Dict[str, Any]:
    with path.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f)


def _write_yaml(obj: Dict[str, Any], path: Path) -> None:
    with path.open("w", encoding="utf-8") as f:
        yaml.safe_dump(obj, f, sort_keys=False)


def _append_jsonl(obj: Dict[str, Any], path: Path) -> None:
    with path.open("a", encoding="utf-8") as f:
        f.write(json.dumps(obj, separators=(",", ":"), ensure_ascii=False))
        f.write("\n")


def _ensure_run_dir(base_dir: Path, experiment_name: str) -> Path:
    base_dir.mkdir(parents=True, exist_ok=True)
    stamp = _dt.datetime.now().strftime("%Y%m%d_%H%M%S")
    run_dir = base_dir / f"{stamp}_{experiment_name}"
    run_dir.mkdir(parents=False, exist_ok=False)
    return run_dir


def _git_commit_short() -> Optional[str]:
    try:
        out = subprocess.check_output(["git", "rev-parse", "--short", "HEAD"], stderr=subprocess.DEVNULL)
    except (OSError, subprocess.CalledProcessError):
        return None
    return out.decode("utf-8").strip()


def _gather_meta() -> Dict[str, Any]:
    return {
        "python": platform.python_version(),
        "numpy": np.__version__,
        "pandas": pd.__version__,
        "psutil": psutil.__version__,
        "git_commit": _git_commit_short(),
        "machine": {
            "cpu": platform.processor() or platform.machine(),
            "cores_logical": psutil.cpu_count(logical=True),
            "cores_physical": psutil.cpu_count(logical=False),
            "ram_gb": round(psutil.virtual_memory().total / (1024**3), 2),
            "platform": platform.platform(),
        },
        "start_time": _dt.datetime.now().isoformat(timespec="seconds"),
        "pid": os.getpid(),
        "cwd": str(Path.cwd()),
    }


def _resolve_algorithms(entries: List[Any]) -> List[Algorithm]:
    """Accept plain names or {"name": ...} entries; reject duplicates."""
    if not entries:
        raise ValueError("Config 'algorithms' must list at least one algorithm")
    algos: List[Algorithm] = []
    for entry in entries:
        name = entry.get("name") if isinstance(entry, dict) else entry
        if not isinstance(name, str):
            raise ValueError(f"Each algorithm must be a name or have a string 'name' field; got {entry!r}")
        algo = resolve(name)
        if algo in algos:
            raise ValueError(f"Duplicate algorithm name in config: {name}")
        algos.append(algo)
    return algos


# ------------------------- aggregation ------------------------- #

def _aggregate_summary(jsonl_path: Path) -> pd.DataFrame:
    if not jsonl_path.exists():
        return pd.DataFrame(columns=SUMMARY_COLUMNS)
    df = pd.read_json(jsonl_path, lines=True)
    if df.empty or "kind" not in df:
        return pd.DataFrame(columns=SUMMARY_COLUMNS)

    samples = df[df["kind"] == "sample"]
    traces = df[df["kind"] == "trace"]
    if samples.empty:
        return pd.DataFrame(columns=SUMMARY_COLUMNS)

    grouped = samples.groupby(["algo", "n"])["time_ns"]
    agg = grouped.agg(samples_ok="count", median_ns="median", min_ns="min", max_ns="max").reset_index()
    iqr = (grouped.quantile(0.75) - grouped.quantile(0.25)).rename("iqr_ns").reset_index()
    out = agg.merge(iqr, on=["algo", "n"], how="left")
    if not traces.empty:
        out = out.merge(traces[["algo", "n", "events", "exchanges"]], on=["algo", "n"], how="left")
    else:
        out["events"] = pd.NA
        out["exchanges"] = pd.NA
    for col in ("median_ns", "min_ns", "max_ns", "iqr_ns"):
        out[col] = out[col].astype("int64")
    return out[SUMMARY_COLUMNS].sort_values(["algo", "n"], ignore_index=True)


def _print_rich_summary(summary: pd.DataFrame, sizes: List[int]) -> None:
    table = Table(title="Facade timings (median ± IQR in ms) / engine events")
    table.add_column("Algorithm", style="bold")
    picks: List[Tuple[str, int]] = []
    for n in dict.fromkeys([sizes[0], sizes[len(sizes) // 2], sizes[-1]]):
        picks.append((f"n={n}", n))
        table.add_column(f"n={n}", justify="right")

    for algo in summary["algo"].unique():
        row = [f"[bold]{algo}[/]"]
        for _, npick in picks:
            s = summary[(summary["algo"] == algo) & (summary["n"] == npick)]
            if s.empty:
                row.append("—")
                continue
            median_ms = int(s["median_ns"].values[0]) / 1e6
            iqr_ms = int(s["iqr_ns"].values[0]) / 1e6
            events = s["events"].values[0]
            ev = "?" if pd.isna(events) else str(int(events))
            row.append(f"{median_ms:.2f} ± {iqr_ms:.2f} / {ev}")
        table.add_row(*row)
    _console.print()
    _console.print(table)
    _console.print()


# ------------------------- core runner ------------------------- #

def _run_one(cfg: ExperimentConfig, engine: SortEngine, algo: Algorithm, n: int,
             base_a: List[int], results_path: Path) -> bool:
    """Time and trace one (algo, n); return False when larger sizes should be skipped."""
    res = time_sort_call(
        algo_name=algo.value,
        sort_fn=PLAIN[algo],
        a=base_a,
        repeats=cfg.repeats,
        warmup=cfg.warmup,
        disable_gc=cfg.disable_gc,
        timeout_seconds=cfg.timeout_seconds,
    )
    for trial, t_ns in enumerate(res["samples_ns"]):
        _append_jsonl(
            {"kind": "sample", "algo": algo.value, "n": n, "dataset": cfg.dataset, "trial": trial, "time_ns": int(t_ns)},
            results_path,
        )
    if res["status"] != "ok":
        logger.warning("%s at n=%d: facade %s %s", algo.value, n, res["status"], res["error"] or "")
        _append_jsonl({"kind": "status", "algo": algo.value, "n": n, "status": res["status"], "error": res["error"]},
                      results_path)
        return False

    tr = trace_run(engine, algo, base_a, cfg.timeout_seconds)
    facade_ok = res["output"] is None or equals_oracle(base_a, res["output"])
    engine_ok = tr["status"] == "completed" and equals_oracle(base_a, tr["output"])
    valid = facade_ok and engine_ok and tr["replay_ok"] and tr["trace_ok"]
    record = {k: v for k, v in tr.items() if k != "output"}
    record.update({"kind": "trace", "algo": algo.value, "n": n, "valid": valid})
    _append_jsonl(record, results_path)
    if not valid:
        logger.error(
            "%s at n=%d failed validation (facade_ok=%s, engine=%s, replay_ok=%s, trace_ok=%s)",
            algo.value, n, facade_ok, tr["status"], tr["replay_ok"], tr["trace_ok"],
        )
        return False
    return True


def run_experiment(config_path: Path) -> Path:
    raw = _load_yaml(config_path)
    cfg = ExperimentConfig.from_mapping(raw)

    run_dir = _ensure_run_dir(cfg.output_dir, cfg.experiment_name)
    results_path = run_dir / "results.jsonl"
    summary_path = run_dir / "summary.csv"
    meta_path = run_dir / "meta.json"
    cfg_resolved_path = run_dir / "config_resolved.yaml"

    _write_yaml(raw, cfg_resolved_path)
    with meta_path.open("w", encoding="utf-8") as f:
        json.dump(_gather_meta(), f, indent=2)

    engine = SortEngine(cfg.engine)
    rng = np.random.default_rng(cfg.seed)
    skip = {a: False for a in cfg.algorithms}

    _console.print(f"[bold green]Run directory:[/bold green] {run_dir}")
    _console.print(f"[bold]Experiment:[/bold] {cfg.experiment_name}")
    _console.print(f"[bold]Algorithms:[/bold] {', '.join(a.display_name for a in cfg.algorithms)}")
    _console.print()

    for n in tqdm(cfg.sizes, desc="Sizes", unit="n"):
        base_a = make_dataset(n, cfg.dataset, rng)
        for algo in cfg.algorithms:
            if skip[algo]:
                continue
            if not _run_one(cfg, engine, algo, n, base_a, results_path):
                skip[algo] = True

    summary_df = _aggregate_summary(results_path)
    summary_df.to_csv(summary_path, index=False)
    _print_rich_summary(summary_df, cfg.sizes)

    _console.print("[bold green]Done.[/bold green] Wrote:")
    for p in (results_path, summary_path, meta_path, cfg_resolved_path):
        _console.print(f" - {p}")
    return run_dir


# ------------------------- CLI ------------------------- #

def _parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Time and trace sorting algorithms from a YAML config.")
    p.add_argument("config", type=str, help="Path to YAML experiment config")
    p.add_argument("--log-level", default="INFO", help="Logging level (default INFO)")
    return p.parse_args()


def main() -> None:
    args = _parse_args()
    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=_console, rich_tracebacks=True)],
    )
    config_path = Path(args.config).resolve()
    if not config_path.exists():
        raise SystemExit(f"Config file not found: {config_path}")
    try:
        run_experiment(config_path)
    except Exception as e:
        _console.print(f"[bold red]Runner failed:[/bold red] {e!r}")
        raise


if __name__ == "__main__":
    main()
