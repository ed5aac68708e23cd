"""
Experiment runner: sweeps permkit operations over input sizes from a YAML config.

Usage (from repo root):
    permkit-bench experiments/reorder_variants.yaml
    python -m permkit.bench.runner experiments/reorder_variants.yaml

Config keys:
    experiment_name: str
    output_dir: str
    seed: int
    repeats: int
    warmup: bool
    disable_gc: bool
    timeout_seconds: float
    keys: {dist: ..., params: {...}}         # see permkit.datasets.make_keys
    permutation: random | identity | reversed | single_cycle
    sizes: [int, ...]
    operations:
      - name: reorder
        config: {validate: false}            # optional kwargs
    validate: bool                           # optional; compare against oracles

Outputs in a new run directory:
    - config_resolved.yaml    # the config we actually used
    - meta.json               # environment info (python, numpy, cpu/ram, git commit)
    - results.jsonl           # one JSON line per timing sample / failure
    - summary.csv             # median + IQR per (op, n)

Design notes:
- For each size n, we generate ONE workload (keys, permutation, values) and
  give the same input to every operation.
- On timeout/error for an operation at size n, we skip larger sizes for it.
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
from typing import Any, Callable, Dict, List, Optional, Tuple

import numpy as np
import pandas as pd
import psutil
import yaml
from rich.console import Console
from rich.table import Table
from tqdm import tqdm

from permkit.bench.measure import time_operation_call
from permkit.bench.operations import Operation, Workload, get_operation
from permkit.datasets import make_keys, make_permutation
from permkit.logs import configure_logging

logger = logging.getLogger(__name__)
_console = Console()

REQUIRED_KEYS = (
    "experiment_name",
    "output_dir",
    "seed",
    "repeats",
    "warmup",
    "disable_gc",
    "timeout_seconds",
    "keys",
    "permutation",
    "sizes",
    "operations",
)
SUMMARY_COLUMNS = ["op", "n", "samples_ok", "median_ns", "iqr_ns", "min_ns", "max_ns"]


# ------------------------- data structures ------------------------- #

@dataclass(frozen=True)
class OpSpec:
    op: Operation
    config: Dict[str, Any]

    @property
    def name(self) -> str:
        return self.op.name


# ------------------------- helpers: IO & meta ------------------------- #

def _load_yaml(path: Path) -> Dict[str, Any]:
    with path.open("r", encoding="utf-8") as f:
        cfg = yaml.safe_load(f)
    if not isinstance(cfg, dict):
        raise ValueError(f"Config {path} must be a YAML mapping")
    return cfg


def _write_yaml(obj: Dict[str, Any], path: Path) -> None:
    with path.open("w", encoding="utf-8") as f:
        yaml.safe_dump(obj, f, sort_keys=False)


def _append_jsonl(obj: Dict[str, Any], path: Path) -> None:
    with path.open("a", encoding="utf-8") as f:
        f.write(json.dumps(obj, separators=(",", ":"), ensure_ascii=False))
        f.write("\n")


def _ensure_run_dir(base_dir: Path, experiment_name: str) -> Path:
    base_dir.mkdir(parents=True, exist_ok=True)
    stamp = _dt.datetime.now().strftime("%Y%m%d_%H%M%S_%f")
    run_dir = base_dir / f"{stamp}_{experiment_name}"
    run_dir.mkdir(parents=False, exist_ok=False)
    return run_dir


def _git_commit_short() -> Optional[str]:
    try:
        out = subprocess.check_output(
            ["git", "rev-parse", "--short", "HEAD"], stderr=subprocess.DEVNULL
        )
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


def _resolve_operations(cfg_ops: List[Any]) -> List[OpSpec]:
    specs: List[OpSpec] = []
    seen = set()
    for entry in cfg_ops:
        if isinstance(entry, str):
            entry = {"name": entry}
        if not isinstance(entry, dict):
            raise ValueError(f"Each operation must be a name or a mapping; got {entry!r}")
        name = entry.get("name")
        if not name or not isinstance(name, str):
            raise ValueError("Each operation must have a string 'name' field")
        if name in seen:
            raise ValueError(f"Duplicate operation name in config: {name}")
        seen.add(name)

        op = get_operation(name)
        config = entry.get("config") or {}
        if not isinstance(config, dict):
            raise ValueError(f"Operation '{name}': 'config' must be a dict if provided")
        op.check_config(config)
        specs.append(OpSpec(op=op, config=config))
    return specs


def _make_workload(n: int, keys_spec: Dict[str, Any], perm_kind: str, rng: np.random.Generator) -> Workload:
    keys = make_keys(n, keys_spec, rng)
    order = make_permutation(n, perm_kind, rng)
    values = [f"item{i}" for i in range(n)]
    return Workload(keys=keys, order=order, values=values)


def _oracle_check(op: Operation, workload: Workload) -> Callable[[Tuple[Any, ...], Any], bool]:
    expected = list(op.expected(workload))

    def check(args: Tuple[Any, ...], out: Any) -> bool:
        return list(op.observe(args, out)) == expected

    return check


def _iqr_ns(s: pd.Series) -> int:
    return int(s.quantile(0.75) - s.quantile(0.25))


def aggregate_summary(jsonl_path: Path) -> pd.DataFrame:
    """Median/IQR/min/max of successful samples per (op, n)."""
    if not jsonl_path.exists() or jsonl_path.stat().st_size == 0:
        return pd.DataFrame(columns=SUMMARY_COLUMNS)
    df = pd.read_json(jsonl_path, lines=True)
    if "time_ns" not in df.columns:
        return pd.DataFrame(columns=SUMMARY_COLUMNS)
    df = df[df["time_ns"].notna()]
    if df.empty:
        return pd.DataFrame(columns=SUMMARY_COLUMNS)

    out = (
        df.groupby(["op", "n"], as_index=False)
        .agg(
            samples_ok=("time_ns", "count"),
            median_ns=("time_ns", "median"),
            iqr_ns=("time_ns", _iqr_ns),
            min_ns=("time_ns", "min"),
            max_ns=("time_ns", "max"),
        )
    )
    out[["median_ns", "iqr_ns", "min_ns", "max_ns"]] = out[
        ["median_ns", "iqr_ns", "min_ns", "max_ns"]
    ].astype("int64")
    return out[SUMMARY_COLUMNS].sort_values(["op", "n"], ignore_index=True)


def _print_summary(summary: pd.DataFrame, sizes: List[int]) -> None:
    table = Table(title="Benchmark Summary (median ± IQR in ms)")
    table.add_column("Operation", style="bold")
    picks: List[Tuple[str, int]] = []
    for npick in dict.fromkeys([sizes[0], sizes[len(sizes) // 2], sizes[-1]]):
        picks.append((f"n={npick}", npick))
        table.add_column(f"n={npick}", justify="right")

    for op in summary["op"].unique():
        row = [str(op)]
        for _, npick in picks:
            s = summary[(summary["op"] == op) & (summary["n"] == npick)]
            if s.empty:
                row.append("—")
            else:
                median_ms = int(s["median_ns"].values[0]) / 1e6
                iqr_ms = int(s["iqr_ns"].values[0]) / 1e6
                row.append(f"{median_ms:.3f} ± {iqr_ms:.3f}")
        table.add_row(*row)
    _console.print()
    _console.print(table)
    _console.print()


# ------------------------- core runner ------------------------- #

def run_experiment(config_path: Path, *, show_progress: bool = True) -> Path:
    cfg = _load_yaml(config_path)

    missing = [k for k in REQUIRED_KEYS if k not in cfg]
    if missing:
        raise ValueError(f"Missing required config keys: {missing}")

    experiment_name = str(cfg["experiment_name"])
    output_dir = Path(cfg["output_dir"])
    if not output_dir.is_absolute():
        output_dir = config_path.parent / output_dir
    sizes: List[int] = [int(n) for n in cfg["sizes"]]
    repeats = int(cfg["repeats"])
    warmup = bool(cfg["warmup"])
    disable_gc = bool(cfg["disable_gc"])
    timeout_seconds = float(cfg["timeout_seconds"])
    keys_spec: Dict[str, Any] = dict(cfg["keys"])
    perm_kind = str(cfg["permutation"])
    validate = bool(cfg.get("validate", False))

    if not sizes or any(n < 0 for n in sizes):
        raise ValueError("Config 'sizes' must be a non-empty list of nonnegative integers")

    ops = _resolve_operations(list(cfg["operations"]))

    run_dir = _ensure_run_dir(output_dir, experiment_name)
    results_path = run_dir / "results.jsonl"
    summary_path = run_dir / "summary.csv"
    meta_path = run_dir / "meta.json"
    cfg_resolved_path = run_dir / "config_resolved.yaml"

    _write_yaml(cfg, cfg_resolved_path)
    with meta_path.open("w", encoding="utf-8") as f:
        json.dump(_gather_meta(), f, indent=2)

    rng = np.random.default_rng(int(cfg["seed"]))
    skipped = {spec.name: False for spec in ops}

    logger.info("Run directory: %s", run_dir)
    logger.info("Operations: %s", ", ".join(spec.name for spec in ops))

    for n in tqdm(sizes, desc="Sizes", unit="n", disable=not show_progress):
        workload = _make_workload(n, keys_spec, perm_kind, rng)

        for spec in ops:
            if skipped[spec.name]:
                continue
            op = spec.op

            check = _oracle_check(op, workload) if validate else None
            res = time_operation_call(
                op_name=spec.name,
                run=op.run,
                prepare=lambda _op=op: _op.prepare(workload),
                config=spec.config,
                repeats=repeats,
                warmup=warmup,
                disable_gc=disable_gc,
                timeout_seconds=timeout_seconds,
                check=check,
            )

            for trial_idx, t_ns in enumerate(res["samples_ns"]):
                _append_jsonl(
                    {
                        "op": spec.name,
                        "n": n,
                        "keys": keys_spec,
                        "permutation": perm_kind,
                        "trial": trial_idx,
                        "time_ns": int(t_ns),
                        "config": spec.config,
                    },
                    results_path,
                )

            status = res["status"]
            if status != "ok":
                skipped[spec.name] = True
                logger.warning("%s stopped at n=%d: %s", spec.name, n, res["error"] or status)
                _append_jsonl(
                    {
                        "op": spec.name,
                        "n": n,
                        "status": status,
                        "error": res["error"],
                        "timed_out_on_repeat": res["timed_out_on_repeat"],
                        "config": spec.config,
                    },
                    results_path,
                )

    summary_df = aggregate_summary(results_path)
    summary_df.to_csv(summary_path, index=False)

    _print_summary(summary_df, sizes)
    logger.info("Wrote %s, %s, %s, %s", results_path, summary_path, meta_path, cfg_resolved_path)
    return run_dir


# ------------------------- CLI ------------------------- #

def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Run a permkit benchmark experiment from a YAML config.")
    p.add_argument("config", type=str, help="Path to YAML experiment config")
    p.add_argument("--no-progress", action="store_true", help="Hide the tqdm progress bar")
    return p.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = _parse_args(argv)
    configure_logging()
    config_path = Path(args.config).resolve()
    if not config_path.exists():
        raise SystemExit(f"Config file not found: {config_path}")
    try:
        run_experiment(config_path, show_progress=not args.no_progress)
    except Exception as e:
        _console.print(f"[bold red]Runner failed:[/bold red] {e!r}")
        raise


if __name__ == "__main__":
    main()
