from __future__ import annotations
import argparse, json, logging, sys
from pathlib import Path

from pydantic import ValidationError

from .models.file import JpegFile
from .models.settings import MoshSettings
from .binary.codecs.markers import marker_hex

def cmd_info(args):
    if args.summary:
        from .binary.reader import summarize_file
        summary = summarize_file(args.input)
        totals = {k: summary.pop(k) for k in ("segments", "bytes", "scan_bytes")}
        for descr, n in sorted(summary.items()):
            print(f"{n:4d}  {descr}")
        print(f"segments={totals['segments']}, bytes={totals['bytes']}, scan_bytes={totals['scan_bytes']}")
        return 0

    f = JpegFile.from_binary(args.input)
    if args.json:
        print(json.dumps(f.model_dump(mode="json"), indent=2))
        return 0

    for seg in f.segments:
        print(f"{seg.offset:8d}  size:2+{seg.size - 2:<7d} type:{marker_hex(seg.marker)}  {seg.description}")
    if f.frame is not None:
        print(f"Image is {f.frame.width} by {f.frame.height} px, "
              f"{len(f.frame.components)}-channel, {f.frame.precision} bits per channel")
    return 0

def cmd_mosh(args):
    try:
        settings = MoshSettings(
            typ=args.type,
            qt=tuple(args.qt),
            im=tuple(args.im),
            validate_output=args.validate,
            max_tries=args.max_tries,
            seed=args.seed,
        )
    except ValidationError as e:
        print(f"Invalid settings: {e}", file=sys.stderr)
        return 2

    from .mosh import mosh_with_settings, ValidationExhausted
    data = Path(args.input).read_bytes()
    try:
        out = mosh_with_settings(data, settings)
    except ValidationExhausted as e:
        print(str(e), file=sys.stderr)
        return 1
    Path(args.output).write_bytes(out)
    print(f"wrote {len(out)} bytes to {args.output}")
    return 0

def cmd_plot(args):
    from .viz import plot_segments
    plot_segments(JpegFile.from_binary(args.input))
    return 0

def build_parser():
    p = argparse.ArgumentParser(prog="jpegmosh", description="JPEG segment inspection and datamoshing")
    p.add_argument("-v", "--debug", action="store_true", help="Trace the segment walk and mosh attempts")
    sub = p.add_subparsers(dest="cmd", required=True)

    sp = sub.add_parser("info", help="list segments, or dump the parsed model as JSON")
    sp.add_argument("input", help="Path to a JPEG file")
    sp.add_argument("--summary", action="store_true", help="Count segments per type instead of listing them")
    sp.add_argument("--json", action="store_true", help="Print the parsed model as JSON")
    sp.set_defaults(func=cmd_info)

    sp = sub.add_parser("mosh", help="corrupt quantization tables and/or scan data")
    sp.add_argument("input")
    sp.add_argument("output")
    sp.add_argument("--type", type=int, default=3, help="1: quantization tables, 2: scan data, 3: both")
    sp.add_argument("--qt", type=int, nargs=2, default=[2, 1], metavar=("TIMES", "BITS"),
                    help="How much to corrupt the quantization tables")
    sp.add_argument("--im", type=int, nargs=2, default=[15, 1], metavar=("TIMES", "BITS"),
                    help="How much to corrupt the image data")
    sp.add_argument("--validate", action="store_true", help="Retry until Pillow can decode the result")
    sp.add_argument("--max-tries", type=int, default=10, help="Give up validating after N tries")
    sp.add_argument("--seed", type=int, default=None, help="Seed for reproducible corruption")
    sp.set_defaults(func=cmd_mosh)

    sp = sub.add_parser("plot", help="plot segment sizes by offset")
    sp.add_argument("input")
    sp.set_defaults(func=cmd_plot)

    return p

def main(argv=None):
    p = build_parser()
    ns = p.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if ns.debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        return ns.func(ns)
    except FileNotFoundError as e:
        print(f"No such file: {e.filename}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
