from __future__ import annotations

import argparse
import base64
import sys
from pathlib import Path

from .exceptions import UnsupportedDialectError
from .logging_config import get_logger, setup_logging
from .normalize import format_bytes
from .rules import DIALECTS

logger = get_logger("cli")


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="ini-reg-format",
        description="Format INI and Windows Registry (.reg) files into a canonical, diff-friendly layout.",
    )
    p.add_argument("paths", nargs="+", type=Path, help="Files to format.")
    p.add_argument(
        "--dialect",
        choices=list(DIALECTS),
        default=None,
        help="Force a dialect. Default: inferred from extension, then content.",
    )
    p.add_argument("--check", action="store_true", help="Exit 1 if any file would change; write nothing.")
    p.add_argument("--in-place", "-i", action="store_true", help="Rewrite files in place.")
    p.add_argument("--log-level", default=None, help="Logging level (default: $INI_REG_LOG_LEVEL or INFO).")
    return p


def main(argv: list[str] | None = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    if not args.check and not args.in_place and len(args.paths) > 1:
        parser.error("formatting several files requires --in-place or --check")

    exit_code = 0
    for path in args.paths:
        try:
            raw = path.read_bytes()
        except OSError as e:
            logger.error("Cannot read %s: %s", path, e)
            exit_code = 2
            continue

        try:
            result = format_bytes(raw, filename=path.name, dialect=args.dialect)
        except UnsupportedDialectError as e:
            logger.error("Cannot format %s: %s", path, e)
            exit_code = 2
            continue

        formatted = base64.b64decode(result["formatted"]["content_b64"])
        changed = result["report"]["summary"]["changed"]

        if args.check:
            if changed:
                logger.info("Would reformat %s", path)
                exit_code = max(exit_code, 1)
            continue

        if args.in_place:
            if changed:
                try:
                    path.write_bytes(formatted)
                except OSError as e:
                    logger.error("Cannot write %s: %s", path, e)
                    exit_code = 2
                    continue
                logger.info("Reformatted %s", path)
            else:
                logger.info("No change: %s", path)
            continue

        sys.stdout.buffer.write(formatted)
        sys.stdout.flush()

    return exit_code


if __name__ == "__main__":
    raise SystemExit(main())
