"""
I/O utilities for trial runs.

Responsibilities:
- write_csv:      one row per greedy trial, with guess/pattern columns.
- write_rankings: opening-guess ranking as (rank, guess, score) rows.
- write_manifest: dump a JSON manifest with config, hashes, and metadata.
- timestamp_id:   stable UTC run ID string.
- git_commit_or_unknown: best-effort short commit hash for reproducibility.

Notes:
- Patterns are prefixed with an apostrophe to keep Excel from interpreting
  strings like "-GYY-" as formulas (which would display as #NAME?).
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Sequence, Tuple
import csv
import json
import subprocess
import datetime as dt

from packages.solvers.greedy import TrialResult


def _excel_safe_pattern(patt: str) -> str:
    """
    Prefix with an apostrophe so spreadsheet apps treat it as text.
    Example: "-GYY-" -> "'-GYY-"
    """
    return "'" + patt if patt else patt


def write_csv(results: Sequence[TrialResult], path: str) -> str:
    """
    Serialize a batch of trial results to CSV.

    Schema (columns):
      answer, rounds, time_ms, guess_1, patt_1, left_1, ..., guess_K, patt_K, left_K
    where K is the longest trial in the batch and left_i is the feasible-set
    size after guess i.

    Returns:
      The path written (string).
    """
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)

    width = max((r.rounds for r in results), default=0)
    fields = ["answer", "rounds", "time_ms"]
    for i in range(1, width + 1):
        fields += [f"guess_{i}", f"patt_{i}", f"left_{i}"]

    with p.open("w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=fields)
        w.writeheader()

        for r in results:
            row = {
                "answer": r.answer,
                "rounds": r.rounds,
                "time_ms": round(float(r.time_ms), 3),
            }
            hist = r.history
            for i in range(1, width + 1):
                if i <= len(hist):
                    g, patt = hist[i - 1]
                    row[f"guess_{i}"] = g
                    row[f"patt_{i}"] = _excel_safe_pattern(patt)
                    row[f"left_{i}"] = r.remaining[i - 1]
                else:
                    row[f"guess_{i}"] = row[f"patt_{i}"] = row[f"left_{i}"] = ""
            w.writerow(row)

    return str(p)


def write_rankings(rankings: List[Tuple[str, int]], path: str) -> str:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    with p.open("w", newline="", encoding="utf-8") as f:
        w = csv.writer(f)
        w.writerow(["rank", "guess", "score"])
        for rank, (guess, score) in enumerate(rankings):
            w.writerow([rank, guess, score])
    return str(p)


def write_manifest(manifest: Dict, path: str) -> str:
    """
    Write a JSON manifest with run configuration and dataset validation summary.

    Typical keys:
      - run_id, git_commit
      - config: CLI args (paths, opener, trials, workers, outdir)
      - wordlists: output of datasets.validate_wordlists(...)
      - num_cases, average_rounds
    """
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    with p.open("w", encoding="utf-8") as f:
        json.dump(manifest, f, indent=2)
    return str(p)


def timestamp_id() -> str:
    """
    Return a compact UTC timestamp suitable for filenames, e.g. 20250820T024121Z.
    """
    return dt.datetime.now(dt.timezone.utc).strftime("%Y%m%dT%H%M%SZ")


def git_commit_or_unknown() -> str:
    """
    Best-effort short git hash of the current repo state.
    Returns 'unknown' if git is not available or the call fails.
    """
    try:
        return (
            subprocess.check_output(
                ["git", "rev-parse", "--short", "HEAD"],
                stderr=subprocess.DEVNULL,
            )
            .decode()
            .strip()
        )
    except (OSError, subprocess.CalledProcessError):
        return "unknown"
