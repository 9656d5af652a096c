"""
Dataset validator for the greedy trial runner.

What this module does:
- Validate a pair of word lists: the answers list (candidate pool) and the
  allowed-guesses list (extra guessable words).
- Enforce formatting rules (lowercase, a–z only, exact length N, one per line).
- Count the lines the loader will skip, detect duplicates, compute SHA-256
  of the raw files.
- Report how many answers also appear in the allowed list. The usual Wordle
  files keep the two disjoint, so overlap is informational, not an issue.
- Return a machine-readable dict (for manifests) and provide a pretty one-line summary.

Typical use:
    from packages.datasets import validate_wordlists, pretty_summary
    rep = validate_wordlists(5, "data/wordle-answers-alphabetical.txt",
                                "data/wordle-allowed-guesses.txt")
    print(pretty_summary(rep))
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Dict, List
import hashlib

from .io import read_lines, split_valid


# -----------------------------
# Dataclasses for structured reports
# -----------------------------

@dataclass
class FileReport:
    """Per-file diagnostics and metadata."""
    path: str            # file path (as given)
    exists: bool         # did the file exist on disk?
    count: int           # number of VALID words after cleaning
    sha256: str          # SHA-256 of raw file bytes (empty string if missing)
    unique_count: int    # unique valid words (after dedupe)
    invalid_lines: int   # lines the loader skips


@dataclass
class ValidationReport:
    """Top-level validation result for the (answers, allowed) pair."""
    N: int
    answers: FileReport
    allowed: FileReport
    overlap: int         # answers that are also listed as allowed guesses
    dictionary_size: int # answers + allowed, deduplicated
    passed: bool
    issues: List[str]    # human-friendly list of problems (if any)


# -----------------------------
# Helpers
# -----------------------------

def _sha256_file(path: Path) -> str:
    """Compute SHA-256 of a file's raw bytes."""
    h = hashlib.sha256()
    with path.open("rb") as f:
        for chunk in iter(lambda: f.read(8192), b""):
            h.update(chunk)
    return h.hexdigest()


def _report(path: Path, N: int):
    words, invalid = split_valid(read_lines(path), N)
    rep = FileReport(
        path=str(path),
        exists=True,
        count=len(words),
        sha256=_sha256_file(path),
        unique_count=len(set(words)),
        invalid_lines=invalid,
    )
    return rep, set(words)


# -----------------------------
# Public API
# -----------------------------

def validate_wordlists(N: int, answers_path: str, allowed_path: str) -> Dict:
    """
    Validate the answers/allowed word lists for length N.

    Returns a JSON-serializable dict (see ValidationReport). `passed` is
    strict: both files non-empty with no skipped lines.
    """
    issues: List[str] = []

    ans_p = Path(answers_path)
    all_p = Path(allowed_path)

    if not ans_p.exists() or not all_p.exists():
        if not ans_p.exists():
            issues.append(f"answers file not found: {answers_path}")
        if not all_p.exists():
            issues.append(f"allowed file not found: {allowed_path}")
        rep = ValidationReport(
            N=N,
            answers=FileReport(answers_path, ans_p.exists(), 0, "", 0, 0),
            allowed=FileReport(allowed_path, all_p.exists(), 0, "", 0, 0),
            overlap=0,
            dictionary_size=0,
            passed=False,
            issues=issues,
        )
        return asdict(rep)

    ans_report, answers_set = _report(ans_p, N)
    all_report, allowed_set = _report(all_p, N)

    if ans_report.count == 0:
        issues.append("answers file contains 0 valid words")
    if all_report.count == 0:
        issues.append("allowed file contains 0 valid words")

    if ans_report.invalid_lines:
        issues.append(f"answers has {ans_report.invalid_lines} invalid line(s) (skipped)")
    if all_report.invalid_lines:
        issues.append(f"allowed has {all_report.invalid_lines} invalid line(s) (skipped)")

    if ans_report.count != ans_report.unique_count:
        issues.append("answers contains duplicate lines")
    if all_report.count != all_report.unique_count:
        issues.append("allowed contains duplicate lines")

    passed = (
            ans_report.invalid_lines == 0
            and all_report.invalid_lines == 0
            and ans_report.count > 0
            and all_report.count > 0
    )

    rep = ValidationReport(
        N=N,
        answers=ans_report,
        allowed=all_report,
        overlap=len(answers_set & allowed_set),
        dictionary_size=len(answers_set | allowed_set),
        passed=passed,
        issues=issues,
    )
    return asdict(rep)


def pretty_summary(report: Dict) -> str:
    """
    Produce a compact, human-friendly one-liner for console/docs.

    Example:
        N=5 | answers=2315 (uniq=2315, sha=abc123...) | allowed=10657 (uniq=10657, sha=def456...) | dictionary=12972 | OK
    """
    N = report["N"]
    a = report["answers"]
    b = report["allowed"]
    status = "OK" if report["passed"] else "FAIL"
    # abbreviate sha to 12 chars for readability
    a_sha = (a.get("sha256") or "")[:12]
    b_sha = (b.get("sha256") or "")[:12]
    return (
        f"N={N} | answers={a['count']} (uniq={a['unique_count']}, sha={a_sha}) "
        f"| allowed={b['count']} (uniq={b['unique_count']}, sha={b_sha}) "
        f"| dictionary={report['dictionary_size']} | {status}"
    )
