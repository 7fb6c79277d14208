"""Command line interface for rseassets."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Callable, List, TypeVar

from .api import describe_map, describe_rsb, read_map, read_rsb
from .config import ConfigError, ScanConfig, load_scan_config
from .errors import DecodeError, FileReadError
from .logging import configure_logging, section, step
from .raster import rgb_raster, write_raster
from .reporting import (
    REPORTER_CHOICES,
    JsonLinesReporter,
    PlainReporter,
    RichReporter,
    SilentReporter,
    get_reporter,
    set_reporter,
    set_verbosity,
)
from .stats import scan_rsb, summary_lines

T = TypeVar("T")


def _report_failure(exc: DecodeError | FileReadError, path: Path) -> None:
    rep = get_reporter()
    if isinstance(exc, DecodeError):
        rep.error(f"{path}: {exc.format_chain()}", code=exc.code)
    else:
        rep.error(str(exc), code=exc.code)


def _decode_files(
    files: List[Path],
    read: Callable[[Path], T],
    describe: Callable[[T, str], str],
) -> int:
    rep = get_reporter()
    failed = 0
    for path in files:
        try:
            result = read(path)
        except (DecodeError, FileReadError) as exc:
            failed += 1
            _report_failure(exc, path)
            continue
        print(describe(result, path.name))
    rep.status(f"Decode summary: files={len(files)} failed={failed}")
    return 1 if failed else 0


def _map_cmd(args: argparse.Namespace) -> int:
    return _decode_files(args.files, read_map, describe_map)


def _rsb_cmd(args: argparse.Namespace) -> int:
    return _decode_files(args.files, read_rsb, describe_rsb)


def _stats_cmd(args: argparse.Namespace) -> int:
    rep = get_reporter()
    try:
        config = (
            load_scan_config(args.config) if args.config else ScanConfig()
        )
    except (ConfigError, FileNotFoundError) as exc:
        rep.error(f"invalid scan configuration: {exc}")
        return 2
    config = config.with_overrides(
        root=args.root,
        extensions=tuple(args.ext) if args.ext else None,
        fail_fast=args.fail_fast,
    )
    step(f"scanning {config.root}")
    try:
        stats = scan_rsb(config)
    except (DecodeError, FileReadError) as exc:
        _report_failure(exc, Path(exc.path or config.root))
        return 1
    rep.flush()
    with section("RSB statistics"):
        for line in summary_lines(stats):
            rep.status(line)
    if args.json:
        print(json.dumps(stats.to_dict(), indent=2, sort_keys=True))
    return 1 if stats.failures else 0


def _raster_cmd(args: argparse.Namespace) -> int:
    rep = get_reporter()
    try:
        rsb = read_rsb(args.file)
    except (DecodeError, FileReadError) as exc:
        _report_failure(exc, args.file)
        return 1
    words = rgb_raster(rsb)
    written = 0
    if args.out is not None:
        written = write_raster(words, args.out)
        step(f"wrote {args.out}")
    rep.status(
        f"Raster summary: width={rsb.width} height={rsb.height} "
        f"pixels={len(words)} bytes={written}"
    )
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="rseassets",
        description="Decode Red Storm Entertainment MAP and RSB assets",
    )
    p.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (repeatable)",
    )
    p.add_argument(
        "-r",
        "--reporter",
        choices=list(REPORTER_CHOICES),
        default="plain",
        help="Select reporter backend: plain (default), rich, json (JSONL events), silent",
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    m = sub.add_parser("map", help="Decode MAP files and print a summary")
    m.add_argument("files", type=Path, nargs="+")
    m.set_defaults(func=_map_cmd)

    r = sub.add_parser("rsb", help="Decode RSB textures and describe them")
    r.add_argument("files", type=Path, nargs="+")
    r.set_defaults(func=_rsb_cmd)

    s = sub.add_parser("stats", help="Tally RSB formats under a directory")
    s.add_argument("root", type=Path, nargs="?")
    s.add_argument(
        "--ext",
        action="append",
        help="File extension to scan (repeatable, default .rsb)",
    )
    s.add_argument(
        "--config", type=Path, help="Scan configuration file (JSON or YAML)"
    )
    s.add_argument(
        "--fail-fast",
        dest="fail_fast",
        action="store_true",
        help="Stop at the first file that fails to decode",
    )
    s.add_argument("--json", action="store_true", help="Emit JSON statistics")
    s.set_defaults(func=_stats_cmd)

    ra = sub.add_parser("raster", help="Convert an RSB to packed 0RGB words")
    ra.add_argument("file", type=Path)
    ra.add_argument(
        "--out", type=Path, help="Write the raster as little-endian u32"
    )
    ra.set_defaults(func=_raster_cmd)

    return p


def _select_reporter(requested: str) -> None:
    if requested == "json":
        set_reporter(JsonLinesReporter())
    elif requested == "silent":
        set_reporter(SilentReporter())
    elif requested == "rich" and sys.stderr.isatty():
        set_reporter(RichReporter())
    else:
        # rich without a TTY falls back to plain
        set_reporter(PlainReporter())


def main(argv: list[str] | None = None) -> int:
    argv = argv if argv is not None else sys.argv[1:]
    parser = build_parser()
    args = parser.parse_args(argv)
    _select_reporter(args.reporter)
    set_verbosity(args.verbose)
    configure_logging(args.verbose)
    try:
        return args.func(args)
    finally:
        get_reporter().flush()


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
