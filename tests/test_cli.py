from __future__ import annotations

"""CLI smoke tests: subcommands, exit codes and reporter output."""

import json
import struct

import pytest

from builders import minimal_map, rsb_v0_palette, rsb_v1, u32
from rseassets.cli import build_parser, main


def _rsb_tree(root):
    (root / "a.rsb").write_bytes(rsb_v1(2, 1, (5, 6, 5, 0), (1, 2)))
    (root / "b.rsb").write_bytes(rsb_v0_palette(1, 1, [0], (5, 6, 5, 0), [0]))


def test_map_command(tmp_path, capsys):
    p = tmp_path / "m01.map"
    p.write_bytes(minimal_map())
    assert main(["map", str(p)]) == 0
    captured = capsys.readouterr()
    assert "m01.map {" in captured.out
    assert "Decode summary: files=1 failed=0" in captured.err


def test_map_command_reports_chain_and_fails(tmp_path, capsys):
    good = tmp_path / "good.map"
    good.write_bytes(minimal_map())
    bad = tmp_path / "bad.map"
    bad.write_bytes(u32(0))
    assert main(["map", str(bad), str(good)]) == 1
    captured = capsys.readouterr()
    assert f"{bad}: MAP Header > incorrect magic" in captured.err
    assert "good.map {" in captured.out


def test_rsb_command(tmp_path, capsys):
    _rsb_tree(tmp_path)
    assert main(["rsb", str(tmp_path / "a.rsb")]) == 0
    assert "RGBA bits: 5/6/5/0" in capsys.readouterr().out


def test_stats_command_json_reporter(tmp_path, capsys):
    _rsb_tree(tmp_path)
    assert main(["-r", "json", "stats", str(tmp_path)]) == 0
    events = [
        json.loads(line)
        for line in capsys.readouterr().out.splitlines()
        if line.startswith("{\"")
    ]
    summaries = [e for e in events if e.get("event") == "summary"]
    assert summaries[0]["summary_type"] == "scan"
    assert summaries[0]["files"] == "2"
    assert summaries[0]["failed"] == "0"


def test_stats_command_with_failure(tmp_path, capsys):
    _rsb_tree(tmp_path)
    (tmp_path / "c.rsb").write_bytes(u32(5))
    assert main(["stats", str(tmp_path)]) == 1
    err = capsys.readouterr().err
    assert "RSB version 5 not supported" in err
    assert "Scan summary: files=2 failed=1" in err


def test_stats_fail_fast(tmp_path, capsys):
    (tmp_path / "c.rsb").write_bytes(u32(5))
    assert main(["stats", str(tmp_path), "--fail-fast"]) == 1
    assert "c.rsb" in capsys.readouterr().err


def test_stats_uses_config_file(tmp_path, capsys):
    textures = tmp_path / "textures"
    textures.mkdir()
    _rsb_tree(textures)
    cfg = tmp_path / "scan.yaml"
    cfg.write_text("root: textures\n")
    assert main(["stats", "--config", str(cfg), "--json"]) == 0
    out = capsys.readouterr().out
    assert json.loads(out)["files"] == 2


def test_stats_bad_config_is_usage_error(tmp_path, capsys):
    cfg = tmp_path / "scan.yaml"
    cfg.write_text("unknown: 1\n")
    assert main(["stats", "--config", str(cfg)]) == 2
    assert "invalid scan configuration" in capsys.readouterr().err


def test_raster_command_writes_words(tmp_path, capsys):
    _rsb_tree(tmp_path)
    out = tmp_path / "a.raw"
    assert main(["raster", str(tmp_path / "a.rsb"), "--out", str(out)]) == 0
    assert len(struct.unpack("<2I", out.read_bytes())) == 2
    assert "Raster summary: width=2 height=1 pixels=2 bytes=8" in (
        capsys.readouterr().err
    )


def test_raster_missing_file(tmp_path, capsys):
    assert main(["raster", str(tmp_path / "nope.rsb")]) == 1
    assert "E_FILE_IO" in capsys.readouterr().err


def test_usage_errors_exit_2():
    with pytest.raises(SystemExit) as ei:
        main([])
    assert ei.value.code == 2
    with pytest.raises(SystemExit) as ei:
        main(["-r", "fancy", "map", "x.map"])
    assert ei.value.code == 2


def test_parser_verbosity_counts():
    args = build_parser().parse_args(["-vv", "rsb", "x.rsb"])
    assert args.verbose == 2
    assert args.reporter == "plain"
