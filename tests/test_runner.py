# tests/test_runner.py
"""
CLI smoke tests: exit codes and JSON output.
"""

from __future__ import annotations

import json

from riverlabel.core.runner import main


def test_cli_coords_prints_layout(capsys) -> None:
    coords = json.dumps([[i * 50, 0, 30] for i in range(11)])
    rc = main(["--coords", coords, "--text", "Test", "--fixed-advance"])
    assert rc == 0
    out = json.loads(capsys.readouterr().out)
    assert out["result"]["fits"] is True
    assert len(out["glyphs"]) == 4


def test_cli_wkt_input(capsys) -> None:
    rc = main(["--wkt", "POLYGON((0 0, 200 0, 400 0, 400 40, 200 40, 0 40, 0 0))", "--text", "Po", "--fixed-advance"])
    # 6 vertices -> 3 cross-sections
    assert rc == 0
    out = json.loads(capsys.readouterr().out)
    assert out["path"]["has_widths"] is True


def test_cli_invalid_input_exit_code(capsys) -> None:
    assert main(["--coords", "[[0, 0], [1, 1]]", "--fixed-advance"]) == 2
    assert "InvalidPath" in capsys.readouterr().err
    assert main(["--coords", "not json"]) == 2
    assert "Invalid --coords JSON" in capsys.readouterr().err
