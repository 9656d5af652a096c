from pathlib import Path

import pytest
from packages.datasets import load_word_list, pretty_summary, validate_wordlists
from packages.engine import MalformedWordError


def _write(p: Path, lines):
    p.write_text("\n".join(lines) + "\n", encoding="utf-8")


def test_validate_wordlists_happy_path(tmp_path: Path):
    ans = tmp_path / "answers.txt"
    allw = tmp_path / "allowed.txt"
    _write(ans, ["crane", "raise", "stare"])
    _write(allw, ["trace", "cared", "crane"])

    rep = validate_wordlists(5, str(ans), str(allw))
    assert rep["passed"] is True
    assert rep["overlap"] == 1
    assert rep["dictionary_size"] == 5
    s = pretty_summary(rep)
    assert "N=5" in s and "dictionary=5" in s and s.endswith("OK")


def test_validate_wordlists_flags_errors(tmp_path: Path):
    ans = tmp_path / "answers.txt"
    allw = tmp_path / "allowed.txt"
    # 'raiser' is too long, '???' is not alphabetic, 'Crane' is not lowercase
    ans.write_text("crane\nraiser\n???\nCrane\n", encoding="utf-8")
    allw.write_text("stare\nstare\n", encoding="utf-8")

    rep = validate_wordlists(5, str(ans), str(allw))
    assert rep["passed"] is False
    assert rep["answers"]["invalid_lines"] == 3
    assert any("invalid" in msg for msg in rep["issues"])
    assert any("duplicate" in msg for msg in rep["issues"])


def test_validate_wordlists_missing_file(tmp_path: Path):
    rep = validate_wordlists(5, str(tmp_path / "nope.txt"), str(tmp_path / "nada.txt"))
    assert rep["passed"] is False
    assert len(rep["issues"]) == 2
    assert "FAIL" in pretty_summary(rep)


def test_load_word_list_skips_malformed_and_duplicates(tmp_path: Path):
    p = tmp_path / "words.txt"
    p.write_text("crane\r\n\nraiser\nstare\ncrane\nab1de\n", encoding="utf-8")
    assert load_word_list(p) == ["crane", "stare"]


def test_load_word_list_strict(tmp_path: Path):
    p = tmp_path / "words.txt"
    _write(p, ["crane", "raiser"])
    with pytest.raises(MalformedWordError, match=":2:"):
        load_word_list(p, strict=True)


def test_load_word_list_missing(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        load_word_list(tmp_path / "missing.txt")
