import csv
import json
from pathlib import Path

from apps.cli import rank_openers, run

ANSWERS = ["crane", "raise", "stare", "trace", "cared", "adieu", "alone", "roate", "slate"]
ALLOWED = ["salet", "tares", "fjord", "fuzzy"]


def _lists(tmp_path: Path):
    ans = tmp_path / "answers.txt"
    allw = tmp_path / "allowed.txt"
    ans.write_text("\n".join(ANSWERS) + "\n", encoding="utf-8")
    allw.write_text("\n".join(ALLOWED) + "\n", encoding="utf-8")
    return str(ans), str(allw)


def test_run_cli_writes_reports(tmp_path: Path, capsys):
    ans, allw = _lists(tmp_path)
    out = tmp_path / "out"
    avg = run.main(["--answers", ans, "--allowed", allw, "--trials", "3",
                    "--trace-index", "7", "--outdir", str(out), "--progress", "off"])
    printed = capsys.readouterr().out
    assert "greedy avg:" in printed
    assert "best_guess: roate" in printed
    assert avg >= 1.0

    csv_files = list(out.glob("run_*.csv"))
    manifests = list(out.glob("run_*_manifest.json"))
    assert len(csv_files) == 1 and len(manifests) == 1
    rows = list(csv.DictReader(csv_files[0].open(encoding="utf-8")))
    assert [r["answer"] for r in rows] == ["crane", "trace", "alone"]
    assert rows[0]["guess_1"] == "roate" and rows[0]["patt_1"].startswith("'")
    manifest = json.loads(manifests[0].read_text(encoding="utf-8"))
    assert manifest["num_cases"] == 3
    assert manifest["average_rounds"] == avg


def test_rank_openers_cli(tmp_path: Path, capsys):
    ans, allw = _lists(tmp_path)
    rankings = rank_openers.main(["--answers", ans, "--allowed", allw, "--top", "3",
                                  "--outdir", str(tmp_path)])
    assert len(rankings) == len(ANSWERS) + len(ALLOWED)
    scores = [s for _, s in rankings]
    assert scores == sorted(scores)
    assert "0 guess:" in capsys.readouterr().out
    assert list(tmp_path.glob("openers_*.csv"))


def test_run_cli_default_trace_index(tmp_path: Path, capsys):
    assert run.DEFAULT_DEBUG_ANSWER_INDEX == 445
    ans, allw = _lists(tmp_path)
    run.main(["--answers", ans, "--allowed", allw, "--trials", "2",
              "--outdir", str(tmp_path / "out"), "--progress", "off"])
    printed = capsys.readouterr().out
    assert "trace index 445 out of range for 9 answers, skipped" in printed
    assert "best_guess:" not in printed


def test_run_cli_no_trace(tmp_path: Path, capsys):
    ans, allw = _lists(tmp_path)
    run.main(["--answers", ans, "--allowed", allw, "--trials", "2", "--trace-index", "0",
              "--no-trace", "--outdir", str(tmp_path / "out"), "--progress", "off"])
    printed = capsys.readouterr().out
    assert "best_guess:" not in printed and "skipped" not in printed
