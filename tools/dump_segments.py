#!/usr/bin/env python3
"""Walk a JPEG's segments with debug tracing on, then print the decoded headers."""
import logging
import sys
from pathlib import Path

from jpegmosh.binary.reader import parse_file

logging.basicConfig(level=logging.DEBUG, format="%(message)s")

p = Path(sys.argv[1] if len(sys.argv) > 1 else "tools/sample.jpg")  # adjust if needed
f = parse_file(p)

print(f"{len(f.segments)} segments, {f.size} of {p.stat().st_size} bytes covered")
if f.size != p.stat().st_size:
    print("walk stopped early; trailing bytes were not parsed")
if f.frame:
    print("frame:", f.frame.model_dump_json())
if f.jfif:
    print("jfif: ", f.jfif.model_dump_json())
