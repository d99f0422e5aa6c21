import json
import subprocess
import sys
from pathlib import Path

import pytest

from gbf.api.irep import cli

from irep_wire import container, node, ref, string_ref

ROOT = Path(__file__).resolve().parents[2]


def _write_sample(tmp_path: Path) -> Path:
    path = tmp_path / "sample.goto"
    path.write_bytes(
        container(node(1, string_ref(1, "pair"), children=[node(5, string_ref(2, "int")), ref(5)]))
    )
    return path


def test_cli_dump_and_summary(tmp_path):
    sample = _write_sample(tmp_path)
    cmd = [sys.executable, "-m", "gbf.api.irep", "decode", "dump", str(sample)]
    res = subprocess.run(cmd, capture_output=True, text=True, check=True, cwd=ROOT)
    items = json.loads(res.stdout)
    assert isinstance(items, list) and items
    entry = items[0]
    assert entry["path"] == str(sample)
    assert entry["root_identifier"] == "pair"
    assert entry["unique_nodes"] == 2
    assert entry["node_back_references"] == 1

    cmd_summary = cmd + ["--summary"]
    res_sum = subprocess.run(cmd_summary, capture_output=True, text=True, check=True, cwd=ROOT)
    items_sum = json.loads(res_sum.stdout)
    assert set(items_sum[0]) == {"path", "root_identifier", "unique_nodes", "distinct_strings"}


def test_cli_dump_writes_out_file(tmp_path, capsys):
    sample = _write_sample(tmp_path)
    out = tmp_path / "dump.json"
    assert cli.main(["decode", "dump", str(sample), "--out", str(out)]) == 0
    assert "[+] wrote" in capsys.readouterr().out
    assert json.loads(out.read_text())[0]["distinct_strings"] == 2


def test_cli_reports_bad_header(tmp_path, capsys):
    good = _write_sample(tmp_path)
    bad = tmp_path / "bad.goto"
    bad.write_bytes(b"ELF\x00\x00\x00\x01")
    assert cli.main(["decode", "dump", str(good), str(bad)]) == 1
    captured = capsys.readouterr()
    assert f"[!] {bad}:" in captured.err
    assert len(json.loads(captured.out)) == 1


def test_cli_header_command(tmp_path, capsys):
    good = _write_sample(tmp_path)
    old = tmp_path / "old.goto"
    old.write_bytes(b"GBF\x00\x00\x00\x02")
    assert cli.main(["decode", "header", str(good), str(old)]) == 1
    entries = json.loads(capsys.readouterr().out)
    assert entries[0]["ok"] is True
    assert entries[0]["magic"] == "GBF"
    assert entries[0]["version"] == 1
    assert entries[1]["ok"] is False
    assert "unsupported container version 2" in entries[1]["error"]


def test_cli_max_depth_from_environment(tmp_path, monkeypatch, capsys):
    sample = _write_sample(tmp_path)
    monkeypatch.setenv(cli.MAX_DEPTH_ENV, "0")
    assert cli.main(["decode", "dump", str(sample)]) == 1
    assert "max depth 0" in capsys.readouterr().err


def test_cli_flag_overrides_invalid_environment(tmp_path, monkeypatch, capsys):
    sample = _write_sample(tmp_path)
    monkeypatch.setenv(cli.MAX_DEPTH_ENV, "deep")
    assert cli.main(["decode", "dump", str(sample), "--max-depth", "4"]) == 0
    assert json.loads(capsys.readouterr().out)[0]["unique_nodes"] == 2


def test_cli_invalid_environment_only_affects_dump(tmp_path, monkeypatch, capsys):
    sample = _write_sample(tmp_path)
    monkeypatch.setenv(cli.MAX_DEPTH_ENV, "deep")
    assert cli.main(["decode", "header", str(sample)]) == 0
    assert json.loads(capsys.readouterr().out)[0]["ok"] is True
    with pytest.raises(SystemExit) as info:
        cli.main(["decode", "dump", str(sample)])
    assert cli.MAX_DEPTH_ENV in str(info.value)
