from __future__ import annotations

import argparse
import json
import logging
import shlex
import sys
from typing import Any, Dict, List, Optional

from .codec import encode_assignment
from .lib.env import PATHS
from .logging_utils import DEFAULT_LOG_PATH, configure_logging
from .snapshot import load_snapshot, save_snapshot
from .store import list_keys, load, load_value, save
from .values import Array, Scalar, to_plain

logger = logging.getLogger(__name__)


def _parse_assignments(pairs: List[str], array_keys: List[str]) -> Dict[str, Any]:
    values: Dict[str, Any] = {}
    for pair in pairs:
        key, sep, raw = pair.partition("=")
        if not sep:
            raise SystemExit(f"set: expected KEY=VALUE, got {pair!r}")
        if key in array_keys:
            values[key] = Array(tuple(shlex.split(raw)))
        else:
            values[key] = Scalar(raw)
    return values


def cmd_get(args: argparse.Namespace) -> int:
    sys.stdout.write(load_value(args.file, args.key) + "\n")
    return 0


def cmd_load(args: argparse.Namespace) -> int:
    values = load(args.file, args.keys)
    if args.json:
        sys.stdout.write(json.dumps(to_plain(values), indent=2, sort_keys=True) + "\n")
        return 0
    for key in sorted(values):
        sys.stdout.write(encode_assignment(key, values[key]) + "\n")
    return 0


def cmd_set(args: argparse.Namespace) -> int:
    values = _parse_assignments(args.assignments, args.array or [])
    res = save(args.file, values, list(values), declared_only=bool(args.declared_only))
    logger.info("Updated=%s appended=%s skipped=%s", res.updated, res.appended, res.skipped)
    return 0


def cmd_export(args: argparse.Namespace) -> int:
    keys = args.keys or list_keys(args.file)
    save_snapshot(args.to, load(args.file, keys))
    return 0


def cmd_import(args: argparse.Namespace) -> int:
    values = load_snapshot(args.snapshot)
    keys = list(values) if args.append else None
    res = save(args.file, values, keys, declared_only=bool(args.declared_only))
    logger.info("Updated=%s appended=%s skipped=%s", res.updated, res.appended, res.skipped)
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="live-config")
    p.add_argument("-f", "--file", default=PATHS.config_default, help="Config file (default: %(default)s)")
    p.add_argument("--log", default=DEFAULT_LOG_PATH, help="Path to log file")
    p.add_argument("-v", "--verbose", action="store_true", help="Log at DEBUG level")

    sub = p.add_subparsers(dest="subcmd", required=True)

    sp = sub.add_parser("get", help="Print the value of one key (empty if missing)")
    sp.add_argument("key")
    sp.set_defaults(func=cmd_get)

    sp = sub.add_parser("load", help="Print selected keys as KEY=VALUE lines")
    sp.add_argument("keys", nargs="+")
    sp.add_argument("--json", action="store_true", help="Print a JSON object instead")
    sp.set_defaults(func=cmd_load)

    sp = sub.add_parser("set", help="Write KEY=VALUE assignments into the file")
    sp.add_argument("assignments", nargs="+", metavar="KEY=VALUE")
    sp.add_argument("--array", action="append", metavar="KEY", help="Treat KEY's value as a shell-quoted list")
    sp.add_argument("--declared-only", action="store_true", help="Also write empty values")
    sp.set_defaults(func=cmd_set)

    sp = sub.add_parser("export", help="Dump keys to a JSON/YAML snapshot")
    sp.add_argument("keys", nargs="*", help="Keys to export (default: all keys in the file)")
    sp.add_argument("--to", required=True, help="Snapshot path (.json|.yaml)")
    sp.set_defaults(func=cmd_export)

    sp = sub.add_parser("import", help="Save values from a JSON/YAML snapshot into the file")
    sp.add_argument("snapshot")
    sp.add_argument("--append", action="store_true", help="Also append keys not yet in the file")
    sp.add_argument("--declared-only", action="store_true", help="Also write empty values")
    sp.set_defaults(func=cmd_import)

    return p


def main(argv: Optional[list[str]] = None) -> int:
    p = build_parser()
    args = p.parse_args(argv)

    configure_logging(log_path=args.log, level=logging.DEBUG if args.verbose else logging.INFO)

    try:
        return int(args.func(args))
    except ValueError as e:
        # UnsafeValueError, unbalanced --array quoting, bad snapshot values.
        logger.error("%s", e)
        return 2
    except KeyboardInterrupt:
        return 130


if __name__ == "__main__":
    raise SystemExit(main())
