from __future__ import annotations

"""
Repair broken Scratch 3 projects (.sb3) and sprites (.sprite3) so they load again.

Usage:
python sb3fix.py broken.sb3 fixed.sb3
python sb3fix.py broken.sprite3 fixed.sprite3 --platform turbowarp
python sb3fix.py project.json fixed.json --verbose
"""

import argparse
import json
import logging
import re
import sys
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from archive import ArchiveError, read_descriptor, replace_descriptor
from fixer import fix_json
from platforms import DEFAULT_PLATFORM, PLATFORMS, Platform
from validators import FixError

logger = logging.getLogger(__name__)


# JSON allows unpaired surrogate escapes but UTF-8 cannot encode them, so they stay escaped.
LONE_SURROGATE_PATTERN = re.compile("[\ud800-\udfff]")


@dataclass
class FixResult:
    data: bytes
    log: list[str] = field(default_factory=list)


def dump_json(document: dict) -> str:
    text = json.dumps(document, ensure_ascii=False, separators=(",", ":"))
    return LONE_SURROGATE_PATTERN.sub(lambda match: f"\\u{ord(match.group()):04x}", text)


def fix_zip(
    data: bytes,
    platform: str | Platform = DEFAULT_PLATFORM,
    log_callback: Callable[[str], None] | None = None,
) -> bytes:
    entry_name, text = read_descriptor(data)
    logger.debug("found descriptor '%s'", entry_name)
    fixed = fix_json(text, platform=platform, log_callback=log_callback)
    return replace_descriptor(data, entry_name, dump_json(fixed))


def fix_bytes(
    data: bytes,
    is_json: bool,
    platform: str | Platform = DEFAULT_PLATFORM,
    log_callback: Callable[[str], None] | None = None,
) -> FixResult:
    result = FixResult(data=b"")

    def log(message: str) -> None:
        result.log.append(message)
        if log_callback is not None:
            log_callback(message)

    if is_json:
        fixed = fix_json(data, platform=platform, log_callback=log)
        result.data = dump_json(fixed).encode("utf-8")
    else:
        result.data = fix_zip(data, platform=platform, log_callback=log)
    return result


def fix_file(
    input_path: Path,
    output_path: Path,
    platform: str | Platform = DEFAULT_PLATFORM,
    log_callback: Callable[[str], None] | None = None,
) -> FixResult:
    data = input_path.read_bytes()
    is_json = input_path.suffix.lower() == ".json"
    result = fix_bytes(data, is_json=is_json, platform=platform, log_callback=log_callback)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_bytes(result.data)
    return result


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Repair a broken Scratch .sb3/.sprite3 file or project.json")
    parser.add_argument("input", type=Path, help="Path to the broken .sb3, .sprite3 or .json file")
    parser.add_argument("output", type=Path, help="Path to write the repaired file to")
    parser.add_argument(
        "--platform",
        choices=sorted(PLATFORMS),
        default=DEFAULT_PLATFORM,
        help="Rule-set to apply; each platform loads projects slightly differently.",
    )
    parser.add_argument("--verbose", action="store_true", help="Show progress messages while repairing.")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = _build_arg_parser()
    args = parser.parse_args(argv)
    input_path: Path = args.input
    output_path: Path = args.output

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not input_path.exists() or not input_path.is_file():
        raise FileNotFoundError(f"Input file not found: '{input_path}'")

    try:
        result = fix_file(input_path=input_path, output_path=output_path, platform=args.platform, log_callback=print)
    except (FixError, ArchiveError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    if not result.log:
        print("no problems found")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
