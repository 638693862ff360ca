# riverlabel/core/runner.py
"""
CLI entrypoint: build the path from inline coordinates or POLYGON WKT, lay out
the label and print the layout JSON to stdout.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys

from riverlabel.core.config import DEFAULT_FONT_FAMILY, DEFAULT_FONT_SIZE_PT, LOG_LEVEL
from riverlabel.core.error_codes import RiverLabelError
from riverlabel.core.pipeline import label_river
from riverlabel.core.reporting import layout_to_dict
from riverlabel.core.text_metrics import fixed_ratio_advance_width, pillow_advance_width
from riverlabel.core.types import LabelSpec


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Curved river label placement along a centerline.")
    src = p.add_mutually_exclusive_group(required=True)
    src.add_argument("--coords", type=str, help="JSON list of [x, y] or [x, y, width] points")
    src.add_argument("--wkt", type=str, help="River boundary as POLYGON WKT text")
    p.add_argument("--text", type=str, default="River", help="Label text")
    p.add_argument("--font-size-pt", type=float, default=DEFAULT_FONT_SIZE_PT, dest="font_size_pt", help="Font size (pt)")
    p.add_argument("--font-family", type=str, default=DEFAULT_FONT_FAMILY, dest="font_family", help="Font family")
    p.add_argument("--fixed-advance", action="store_true", dest="fixed_advance",
                   help="Use fixed-ratio glyph widths instead of font metrics")
    p.add_argument("--indent", type=int, default=2, help="JSON indent")
    return p.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(level=getattr(logging, LOG_LEVEL, logging.INFO))
    args = _parse_args(argv)
    if args.coords is not None:
        try:
            source = json.loads(args.coords)
        except json.JSONDecodeError as exc:
            print(f"Invalid --coords JSON: {exc}", file=sys.stderr)
            return 2
    else:
        source = args.wkt

    label = LabelSpec(text=args.text, font_family=args.font_family, font_size_pt=args.font_size_pt)
    advance = fixed_ratio_advance_width if args.fixed_advance else pillow_advance_width
    try:
        layout = label_river(source, label, advance_width=advance)
    except RiverLabelError as exc:
        print(f"{type(exc).__name__}: {exc}", file=sys.stderr)
        return 2

    print(json.dumps(layout_to_dict(layout), indent=args.indent))
    return 0


if __name__ == "__main__":
    sys.exit(main())
