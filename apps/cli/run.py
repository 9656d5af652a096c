# apps/cli/run.py
"""
CLI entry point for greedy trial runs.

This script:
  1) Validates the wordlists (prints counts + SHA, skipped lines).
  2) Loads the lists and builds the guess dictionary (answers first).
  3) Optionally replays one answer with a full debug trace.
  4) Runs greedy trials over evenly spaced answers (or all of them) with a
     live progress indicator, prints each round count and the average, and
     writes:
       - CSV:  per-trial results + guess/pattern/left history columns
       - JSON: manifest with config, wordlist hashes, git commit, etc.

Usage:
    python -m apps.cli.run --answers data/wordle-answers-alphabetical.txt \
        --allowed data/wordle-allowed-guesses.txt --trace-index 445
"""

from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path

from tqdm import tqdm

from packages.datasets import load_word_list, pretty_summary, validate_wordlists
from packages.harness import DEFAULT_NUM_TRIALS, evenly_spaced_indices, iter_trials
from packages.harness.io import git_commit_or_unknown, timestamp_id, write_csv, write_manifest
from packages.solvers import DEFAULT_OPENER, GreedySolver, build_dictionary
from packages.engine import WORD_LENGTH

# Answer replayed with a full debug trace before the batch.
DEFAULT_DEBUG_ANSWER_INDEX = 445


def _progress_mode(mode: str) -> str:
    if mode == "auto":
        return "bar" if sys.stderr.isatty() else "plain"
    return mode


def main(argv=None):
    """
    Parse CLI args, validate datasets, run the trials with progress, and write outputs.
    """
    ap = argparse.ArgumentParser(description="greedy wordle trials")
    ap.add_argument("--answers", default="data/wordle-answers-alphabetical.txt",
                    help="path to answers list (candidate pool)")
    ap.add_argument("--allowed", default="data/wordle-allowed-guesses.txt",
                    help="path to extra allowed guesses")
    ap.add_argument("--opener", default=DEFAULT_OPENER,
                    help="fixed first guess; pass an empty string to compute it greedily")
    ap.add_argument("--trials", type=int, default=DEFAULT_NUM_TRIALS,
                    help="number of evenly spaced answers to run")
    ap.add_argument("--all", action="store_true", help="run every answer instead of --trials")
    ap.add_argument("--trace-index", type=int, default=DEFAULT_DEBUG_ANSWER_INDEX,
                    help="replay this answer index with a full debug trace first")
    ap.add_argument("--no-trace", action="store_true", help="skip the traced replay")
    ap.add_argument("--workers", type=int, default=1, help="worker processes for the trials")
    ap.add_argument("--outdir", default="reports", help="directory for output files")
    ap.add_argument(
        "--progress",
        choices=["auto", "bar", "plain", "off"],
        default="auto",
        help="Show run progress (auto=bar on a terminal, else plain text)."
    )
    args = ap.parse_args(argv)
    opener = args.opener or None

    # 1) Validate wordlists and print a one-liner summary
    rep = validate_wordlists(WORD_LENGTH, args.answers, args.allowed)
    print(pretty_summary(rep))
    for issue in rep["issues"]:
        print(f"  - {issue}")

    # 2) Load lists (malformed lines skipped, duplicates dropped)
    answers = load_word_list(args.answers)
    allowed = load_word_list(args.allowed)
    if not answers:
        raise SystemExit(f"No usable answers in {args.answers}")
    dictionary = build_dictionary(answers, allowed)

    # 3) Single traced trial
    trace = None if args.no_trace else args.trace_index
    if trace is not None and not 0 <= trace < len(answers):
        print(f"trace index {trace} out of range for {len(answers)} answers, skipped")
        trace = None
    if trace is not None:
        solver = GreedySolver(dictionary, answers, opener=opener)
        r = solver.solve(trace, debug=True)
        print(r.rounds)

    # 4) Batch
    indices = list(range(len(answers))) if args.all else evenly_spaced_indices(len(answers), args.trials)
    total = len(indices)
    mode = _progress_mode(args.progress)

    results = []
    start = time.time()
    trials = iter_trials(dictionary, answers, indices, opener=opener, workers=args.workers)
    if mode == "bar":
        trials = tqdm(trials, total=total, ncols=80, desc="Running", unit="game")
    emit = tqdm.write if mode == "bar" else print

    for n, (idx, r) in enumerate(trials, 1):
        results.append(r)
        emit(f"{idx} {r.answer}: {r.rounds} ({' '.join(r.guesses)})")
        if mode == "plain":
            elapsed = time.time() - start
            rate = n / elapsed if elapsed > 0 else 0.0
            remaining = (total - n) / rate if rate > 0 else 0.0
            sys.stderr.write(f"\r[{n}/{total}] elapsed {elapsed:6.1f}s | ETA {remaining:5.1f}s")
            sys.stderr.flush()
    if mode == "plain":
        sys.stderr.write("\n"); sys.stderr.flush()

    avg = sum(r.rounds for r in results) / max(1, len(results))
    print(f"greedy avg: {avg:.4f}")

    # 5) Write outputs (CSV + manifest)
    run_id = timestamp_id()
    outdir = Path(args.outdir)
    csv_path = outdir / f"run_{run_id}.csv"
    manifest_path = outdir / f"run_{run_id}_manifest.json"

    write_csv(results, str(csv_path))
    write_manifest({
        "run_id": run_id,
        "git_commit": git_commit_or_unknown(),
        "config": vars(args),
        "wordlists": rep,
        "num_cases": len(results),
        "average_rounds": avg,
    }, str(manifest_path))

    print(f"Wrote: {csv_path}")
    print(f"Wrote: {manifest_path}")
    return avg


if __name__ == "__main__":
    main()
