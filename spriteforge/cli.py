#!/usr/bin/env python
"""Run a post-processing pipeline over an image file.

Example::

    spriteforge-postprocess in.png out.png --op chroma:r=0,g=255,b=0,tolerance=30 --op trim --op resize:scale=4
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Sequence

from spriteforge.models import PostOpSpec
from spriteforge.services.errors import SpriteForgeError
from spriteforge.services.post_ops import list_post_ops, run_pipeline


def _coerce(value: str) -> Any:
    for cast in (int, float):
        try:
            return cast(value)
        except ValueError:
            continue
    return value


def parse_op(text: str) -> PostOpSpec:
    """Parse ``id`` or ``id:key=value,key=value`` into a :class:`PostOpSpec`."""

    op_id, _, raw_params = text.partition(":")
    params: dict[str, Any] = {}
    for item in filter(None, raw_params.split(",")):
        key, sep, value = item.partition("=")
        if not sep or not key:
            raise argparse.ArgumentTypeError(f"Bad parameter '{item}' in '{text}'")
        params[key.strip()] = _coerce(value.strip())
    if not op_id:
        raise argparse.ArgumentTypeError(f"Missing operation id in '{text}'")
    return PostOpSpec(id=op_id.strip(), params=params)


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Apply SpriteForge post-ops to an image")
    parser.add_argument("input", type=Path, nargs="?")
    parser.add_argument("output", type=Path, nargs="?")
    parser.add_argument("--op", dest="ops", action="append", type=parse_op, default=[])
    parser.add_argument("--list", action="store_true", help="List available operations and exit")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    if args.list:
        for op in list_post_ops():
            print(f"{op['id']:<10} {op['label']}")
        return 0
    if args.input is None or args.output is None:
        parser.error("input and output are required")

    try:
        output = run_pipeline(args.input.read_bytes(), args.ops)
    except (OSError, SpriteForgeError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    args.output.write_bytes(output)
    print(f"Wrote {args.output} ({len(output)} bytes, {len(args.ops)} op(s))")
    return 0


if __name__ == "__main__":
    sys.exit(main())
