# apps/cli/rank_openers.py
"""
Rank first guesses by how much they cut the answer pool.

Every dictionary word is played against every sampled answer; its score is
the total number of sampled answers left feasible. This is the offline
computation that picked the default opener. On the full lists it is slow,
so --sample and --workers are worth using.

Usage:
    python -m apps.cli.rank_openers --top 50 --workers 8
"""

from __future__ import annotations

import argparse
import random
from pathlib import Path

from packages.datasets import load_word_list, pretty_summary, validate_wordlists
from packages.harness import rank_opening_guesses, write_rankings
from packages.harness.io import timestamp_id
from packages.solvers import build_dictionary
from packages.engine import WORD_LENGTH


def main(argv=None):
    ap = argparse.ArgumentParser(description="rank greedy opening guesses")
    ap.add_argument("--answers", default="data/wordle-answers-alphabetical.txt")
    ap.add_argument("--allowed", default="data/wordle-allowed-guesses.txt")
    ap.add_argument("--sample", type=int,
                    help="score against a random subset of answers (deterministic by seed)")
    ap.add_argument("--seed", type=int, default=123)
    ap.add_argument("--top", type=int, default=50, help="how many ranked guesses to print")
    ap.add_argument("--workers", type=int, default=1)
    ap.add_argument("--outdir", default="reports")
    ap.add_argument("--progress", action="store_true", help="show a tqdm bar")
    args = ap.parse_args(argv)

    rep = validate_wordlists(WORD_LENGTH, args.answers, args.allowed)
    print(pretty_summary(rep))

    answers = load_word_list(args.answers)
    allowed = load_word_list(args.allowed)
    dictionary = build_dictionary(answers, allowed)

    sample = list(answers)
    if args.sample and args.sample < len(sample):
        rng = random.Random(args.seed)
        rng.shuffle(sample)
        sample = sample[: args.sample]

    rankings = rank_opening_guesses(dictionary, sample, workers=args.workers, progress=args.progress)
    for i, (guess, score) in enumerate(rankings[: args.top]):
        print(f"{i} guess: {guess} {score}")

    out = write_rankings(rankings, str(Path(args.outdir) / f"openers_{timestamp_id()}.csv"))
    print(f"Wrote: {out}")
    return rankings


if __name__ == "__main__":
    main()
