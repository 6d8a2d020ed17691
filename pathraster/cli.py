from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from pathraster.recorder import PathRecorder
from pathraster.trace import TraceConfig, TraceLayout, draw_copper, draw_holes, write_trace


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog="pathraster")
    parser.add_argument("--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR"], default="INFO")
    sub = parser.add_subparsers(dest="command", required=True)

    trace = sub.add_parser("trace", help="Render a PCB-like trace between two pads to a PNG file.")
    trace.add_argument("--dest", type=Path, required=True, help="Destination png file.")
    trace.add_argument("--width", type=int, default=200)
    trace.add_argument("--height", type=int, default=100)
    trace.add_argument("--background", default="#ffffff")
    trace.add_argument("--foreground", default="#000000")
    trace.add_argument(
        "--buffered",
        action="store_true",
        help="Record each shape and composite it through its own bounding-box sized buffer.",
    )

    entries = sub.add_parser("entries", help="Print the recorded shape entries of the trace scene as JSON.")
    entries.add_argument("--width", type=int, default=200)
    entries.add_argument("--height", type=int, default=100)
    args = parser.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")

    if args.command == "trace":
        config = TraceConfig(
            dest=args.dest,
            width=args.width,
            height=args.height,
            background=args.background,
            foreground=args.foreground,
            buffered=args.buffered,
        )
        try:
            config.validate()
        except ValueError as exc:
            parser.error(str(exc))
        write_trace(config)
        return

    if args.command == "entries":
        if args.width <= 0 or args.height <= 0:
            parser.error("width and height must be > 0")
        layout = TraceLayout.for_board(args.width, args.height)
        recorder = PathRecorder.buffered()
        draw_copper(recorder, layout)
        draw_holes(recorder, layout)
        rows = []
        for entry in recorder.entries:
            ix, iy, wide, high = entry.footprint()
            rows.append(
                {
                    "closed": entry.closed,
                    "segments": [str(segment.op) for segment in entry.path],
                    "bounds": list(entry.bounds),
                    "footprint": {"x": ix, "y": iy, "width": wide, "height": high},
                }
            )
        print(json.dumps(rows, indent=2))
        return


if __name__ == "__main__":
    main()
