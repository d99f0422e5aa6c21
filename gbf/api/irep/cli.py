#!/usr/bin/env python3
"""
`gbf.api.irep` command-line interface.

This CLI is deliberately *structural*:
- Validate container headers (magic + version) for one or more files.
- Decode containers and report structural counts (unique nodes, sharing,
  interned strings, depth, trailing bytes) as JSON.

Non-goals:
- Rendering decoded trees. The JSON here is counts, not content.
- Interpreting what the irep means to the tool that produced it.

This is the entrypoint for `python -m gbf.api.irep ...` (via `__main__.py`).
"""

from __future__ import annotations

import argparse
import json
import os
import sys
from pathlib import Path
from typing import Any, Optional

from . import decoder as decoder_mod
from . import ingestion as ingestion_mod
from .cursor import ByteCursor
from .errors import IrepDecodeError

MAX_DEPTH_ENV = "GBF_IREP_MAX_DEPTH"


def _default_max_depth() -> Optional[int]:
    """Read the default nesting bound from the environment, if set."""
    raw = os.environ.get(MAX_DEPTH_ENV)
    if not raw:
        return None
    try:
        value = int(raw)
    except ValueError:
        raise SystemExit(f"{MAX_DEPTH_ENV} must be an integer (got {raw!r})")
    if value < 0:
        raise SystemExit(f"{MAX_DEPTH_ENV} must be >= 0 (got {value})")
    return value


def _report_failure(source: str, err: IrepDecodeError) -> None:
    print(f"[!] {source}: {err}", file=sys.stderr)


def _emit(payload: Any, out: Path | None, *, compact: bool = False) -> None:
    """Write JSON to `out` or stdout."""
    text = json.dumps(payload, indent=None if compact else 2)
    if out:
        out.write_text(text + "\n")
        print(f"[+] wrote {out}")
        return
    sys.stdout.write(text + "\n")


def decode_dump_command(args: argparse.Namespace) -> int:
    """
    `irep decode dump`: decode containers and report structural counts.

    Files that fail to decode are reported on stderr and skipped; the exit
    status is 1 if any file failed.
    """
    max_depth = args.max_depth if args.max_depth is not None else _default_max_depth()
    entries: list[dict[str, Any]] = []
    failed = 0
    for raw in args.containers:
        path = Path(raw)
        try:
            decoded = decoder_mod.decode_irep_file(path, max_depth=max_depth)
        except IrepDecodeError as err:
            _report_failure(str(path), err)
            failed += 1
            continue
        summary = decoder_mod.summarize_irep(decoded).to_dict()
        if args.summary:
            entry = {
                "path": str(path),
                "root_identifier": summary["root_identifier"],
                "unique_nodes": summary["unique_nodes"],
                "distinct_strings": summary["distinct_strings"],
            }
        else:
            entry = {"path": str(path), **summary}
        entries.append(entry)
    _emit(entries, args.out, compact=args.summary)
    return 1 if failed else 0


def decode_header_command(args: argparse.Namespace) -> int:
    """`irep decode header`: validate magic + version without decoding nodes."""
    entries: list[dict[str, Any]] = []
    failed = 0
    for raw in args.containers:
        path = Path(raw)
        try:
            blob = ingestion_mod.load_blob(path)
            header = ingestion_mod.parse_header(ByteCursor(blob.bytes))
        except IrepDecodeError as err:
            _report_failure(str(path), err)
            failed += 1
            entries.append({"path": str(path), "ok": False, "error": str(err)})
            continue
        entries.append(
            {
                "path": str(path),
                "ok": True,
                "magic": header.magic.decode("ascii"),
                "version": header.version,
                "length": len(blob.bytes),
            }
        )
    _emit(entries, args.out)
    return 1 if failed else 0


def main(argv: list[str] | None = None) -> int:
    """
    Entrypoint for the `python -m gbf.api.irep` CLI.

    Accepts an optional `argv` for unit tests and embedding.
    """
    ap = argparse.ArgumentParser(description="Structural tooling for GBF irep containers.")
    sub = ap.add_subparsers(dest="command", required=True)

    ap_decode = sub.add_parser("decode", help="Decode GBF containers.")
    decode_sub = ap_decode.add_subparsers(dest="decode_cmd", required=True)

    dump_p = decode_sub.add_parser("dump", help="Decode containers and print structural counts")
    dump_p.add_argument("containers", nargs="+", help="Paths to GBF containers")
    dump_p.add_argument("--summary", action="store_true", help="Emit a compact summary per container")
    dump_p.add_argument("--out", type=Path, help="Write JSON to this path instead of stdout")
    dump_p.add_argument(
        "--max-depth",
        type=int,
        default=None,
        help=f"Reject node nesting deeper than this (default: ${MAX_DEPTH_ENV} or unbounded)",
    )
    dump_p.set_defaults(func=decode_dump_command)

    header_p = decode_sub.add_parser("header", help="Validate container headers only")
    header_p.add_argument("containers", nargs="+", help="Paths to GBF containers")
    header_p.add_argument("--out", type=Path, help="Write JSON to this path instead of stdout")
    header_p.set_defaults(func=decode_header_command)

    args = ap.parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
