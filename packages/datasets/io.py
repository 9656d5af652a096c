from __future__ import annotations
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Tuple

from packages.engine.codec import WORD_LENGTH, encode
from packages.engine.errors import MalformedWordError


def read_lines(p: Path | str) -> List[str]:
    """
    Read a UTF-8 text file into a list of lines, stripping trailing CR/LF.
    Raises FileNotFoundError if the path doesn't exist.
    """
    p = Path(p)
    if not p.exists():
        raise FileNotFoundError(p)
    return [ln.rstrip("\r\n") for ln in p.read_text(encoding="utf-8").splitlines()]


def unique_preserve_order(items: Iterable, key: Optional[Callable] = None) -> list:
    seen, out = set(), []
    for s in items:
        k = key(s) if key else s
        if k not in seen:
            seen.add(k)
            out.append(s)
    return out


def is_valid_word(line: str, N: int = WORD_LENGTH) -> bool:
    """Exactly N lowercase a–z characters, nothing else on the line."""
    w = line.strip()
    return len(w) == N and w.isascii() and w.isalpha() and w.islower()


def split_valid(lines: Iterable[str], N: int = WORD_LENGTH) -> Tuple[List[str], int]:
    """(valid words in order, number of rejected lines)."""
    valid: List[str] = []
    invalid = 0
    for raw in lines:
        if is_valid_word(raw, N):
            valid.append(raw.strip())
        else:
            invalid += 1
    return valid, invalid


def load_word_list(p: Path | str, *, strict: bool = False) -> List[str]:
    """
    Load a word list (one word per line) for the solver.

    Policy: malformed lines (blank, wrong length, anything but a–z) are
    skipped, and duplicates are dropped keeping the first occurrence.
    validate_wordlists() reports how many lines were skipped.

    With strict=True the first malformed line raises MalformedWordError
    instead, naming the file and line number.
    """
    lines = read_lines(p)
    if strict:
        for lineno, raw in enumerate(lines, start=1):
            if not is_valid_word(raw):
                try:
                    encode(raw)
                except MalformedWordError as e:
                    raise MalformedWordError(f"{p}:{lineno}: {e}") from e
                raise MalformedWordError(f"{p}:{lineno}: {raw!r} is not a lowercase word")
    valid, _ = split_valid(lines)
    return unique_preserve_order(valid)
