import logging

from jpegmosh.binary.reader import iter_segments, parse_file, summarize_file
from jpegmosh.models.common import MarkerCategory

from conftest import SOI, EOI, SCAN_DATA, build_jpeg, segment, dqt, sof0, sos_header, jfif_app0

def test_decomposition_is_lossless(simple_jpeg):
    segs = list(iter_segments(simple_jpeg))
    assert b"".join(s.raw for s in segs) == simple_jpeg
    assert sum(s.size for s in segs) == len(simple_jpeg)
    assert [s.marker for s in segs] == [0xD8, 0xE0, 0xDB, 0xC0, 0xDA, 0xD9]
    offsets = [s.offset for s in segs]
    assert offsets == sorted(offsets) and offsets[0] == 0

def test_length_field_arithmetic(simple_jpeg):
    q = next(s for s in iter_segments(simple_jpeg) if s.marker == 0xDB)
    assert q.category == MarkerCategory.LENGTH_PREFIXED
    assert q.declared_length == 67
    assert q.size == q.declared_length + 2
    assert len(q.payload) == q.declared_length - 2

def test_scan_stops_before_trailing_eoi(simple_jpeg):
    segs = list(iter_segments(simple_jpeg))
    scan = segs[-2]
    assert scan.category == MarkerCategory.SCAN
    assert scan.raw == sos_header() + SCAN_DATA
    assert segs[-1].raw == EOI
    assert segs[-1].description == "End Of Image"

def test_scan_runs_to_end_without_eoi():
    data = build_jpeg(dqt(), eoi=False)
    segs = list(iter_segments(data))
    assert segs[-1].category == MarkerCategory.SCAN
    assert segs[-1].raw.endswith(SCAN_DATA)
    assert segs[-1].offset + segs[-1].size == len(data)

def test_restart_markers_inside_scan_are_not_split():
    scan = b"\x01\x02\xff\xd0\x03\x04\xff\xd1\x05"
    segs = list(iter_segments(build_jpeg(scan=scan)))
    assert [s.marker for s in segs] == [0xD8, 0xDA, 0xD9]

def test_app_descriptions():
    data = build_jpeg(jfif_app0(), segment(0xE1, b"Exif\x00\x00MM"), segment(0xE2, b"\x01\x02"))
    descr = [s.description for s in iter_segments(data)][1:4]
    assert descr == ["APP0 JFIF", "APP1 Exif", "APP2"]

def test_restart_interval_segment():
    dri = b"\xff\xdd\x00\x04\x00\x10"
    segs = list(iter_segments(SOI + dri + EOI))
    assert segs[1].category == MarkerCategory.RESTART_INTERVAL
    assert segs[1].size == 6 and segs[1].raw == dri
    assert segs[1].payload == b"\x00\x10"

def test_unknown_marker_is_walked_as_length_prefixed():
    data = SOI + segment(0x02, b"abc") + EOI
    segs = list(iter_segments(data))
    assert segs[1].description == "unknown marker"
    assert segs[1].size == 7
    assert segs[2].marker == 0xD9

def test_misaligned_input_stops_softly(caplog):
    data = SOI + dqt() + b"\x00garbage" + EOI
    with caplog.at_level(logging.DEBUG, logger="jpegmosh.binary.reader"):
        segs = list(iter_segments(data))
    assert [s.marker for s in segs] == [0xD8, 0xDB]
    assert "didn't start with 0xff" in caplog.text

def test_cut_off_length_field_stops():
    segs = list(iter_segments(SOI + b"\xff\xc4\x00"))
    assert [s.marker for s in segs] == [0xD8]

def test_iteration_is_lazy_and_restartable(simple_jpeg):
    it = iter_segments(simple_jpeg)
    assert next(it).marker == 0xD8
    first = [s.raw for s in iter_segments(simple_jpeg)]
    second = [s.raw for s in iter_segments(simple_jpeg)]
    assert first == second

def test_accepts_path(tmp_path, simple_jpeg):
    p = tmp_path / "in.jpg"
    p.write_bytes(simple_jpeg)
    assert len(list(iter_segments(p))) == 6

def test_parse_file_headers(simple_jpeg):
    f = parse_file(simple_jpeg)
    assert f.frame is not None and (f.frame.width, f.frame.height) == (16, 8)
    assert f.jfif is not None and f.jfif.version == "1.01"
    assert f.to_binary() == simple_jpeg
    assert "raw" not in f.model_dump(mode="json")["segments"][0]

def test_parse_file_tolerates_bad_frame_header(caplog):
    data = build_jpeg(segment(0xC0, b"\x08\x00"))
    with caplog.at_level(logging.WARNING):
        f = parse_file(data)
    assert f.frame is None
    assert "could not decode" in caplog.text

def test_summarize_file(simple_jpeg):
    s = summarize_file(simple_jpeg)
    assert s["segments"] == 6
    assert s["bytes"] == len(simple_jpeg)
    assert s["quantization tables"] == 1
    assert s["scan_bytes"] == len(sos_header()) + len(SCAN_DATA)

def test_truncated_segment_counts_only_present_bytes():
    data = b"\xff\xd8\xff\xc4\x00\x10\x01\x02"
    segs = list(iter_segments(data))
    assert segs[1].size == 18
    assert len(segs[1].raw) == 6
    assert summarize_file(data)["bytes"] == 8
    assert parse_file(data).size == 8

def test_debug_trace_shows_jfif_fields_and_comments(caplog):
    data = build_jpeg(jfif_app0(), segment(0xFE, b"hello there"), dqt(), sof0())
    with caplog.at_level(logging.DEBUG, logger="jpegmosh.binary.reader"):
        parse_file(data)
    assert "density 72x72, thumbnail 0x0" in caplog.text
    assert "comment: 'hello there'" in caplog.text
