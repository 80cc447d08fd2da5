"""Smoke tests for the scripts under examples/."""

import gzip
import runpy
import sys
from pathlib import Path

import pytest

EXAMPLES = Path(__file__).resolve().parents[1] / "examples"
FIXTURES = Path(__file__).resolve().parent / "fixtures"


@pytest.mark.parametrize("gzipped", [False, True])
def test_count_pair_types(tmp_path: Path, monkeypatch, capsys, gzipped: bool):
    src = FIXTURES / "sample.bpseq"
    if gzipped:
        path = tmp_path / "sample.bpseq.gz"
        with gzip.open(path, "wt") as f:
            f.write(src.read_text())
    else:
        path = src
    monkeypatch.setattr(sys, "argv", ["count_pair_types.py", "--input", str(path)])
    runpy.run_path(str(EXAMPLES / "count_pair_types.py"), run_name="__main__")
    lines = capsys.readouterr().out.splitlines()
    # G1-C7, G2-C6, C4-G9
    assert lines == ["GC\t3", "AU\t0", "GU\t0", "other\t0"]
