import json

import pytest

from jpegmosh.cli import build_parser, main

from conftest import build_jpeg, segment, jfif_app0, dqt, sof0


@pytest.fixture
def jpeg_path(tmp_path, simple_jpeg):
    p = tmp_path / "in.jpg"
    p.write_bytes(simple_jpeg)
    return p


def test_info_lists_segments(jpeg_path, capsys):
    assert main(["info", str(jpeg_path)]) == 0
    out = capsys.readouterr().out
    assert "quantization tables" in out
    assert "type:0xda" in out
    assert "Image is 16 by 8 px" in out

def test_info_summary(jpeg_path, capsys):
    assert main(["info", str(jpeg_path), "--summary"]) == 0
    assert "segments=6" in capsys.readouterr().out

def test_info_json(jpeg_path, capsys):
    assert main(["info", str(jpeg_path), "--json"]) == 0
    doc = json.loads(capsys.readouterr().out)
    assert doc["frame"]["width"] == 16
    assert doc["segments"][0]["description"] == "Start Of Image"

def test_mosh_writes_output(tmp_path, capsys):
    src = tmp_path / "a.jpg"
    data = build_jpeg(jfif_app0(), segment(0xE1, b"Exif\x00\x00"), dqt(), sof0())
    src.write_bytes(data)
    dst = tmp_path / "b.jpg"
    assert main(["mosh", str(src), str(dst), "--type", "0"]) == 0
    assert dst.read_bytes() == build_jpeg(jfif_app0(), dqt(), sof0())

def test_mosh_seeded(jpeg_path, tmp_path):
    a, b = tmp_path / "a.jpg", tmp_path / "b.jpg"
    for dst in (a, b):
        assert main(["mosh", str(jpeg_path), str(dst), "--seed", "3", "--im", "5", "1"]) == 0
    assert a.read_bytes() == b.read_bytes()

def test_mosh_bad_settings(jpeg_path, tmp_path, capsys):
    assert main(["mosh", str(jpeg_path), str(tmp_path / "x.jpg"), "--max-tries", "0"]) == 2
    assert "Invalid settings" in capsys.readouterr().err

def test_missing_input(tmp_path, capsys):
    assert main(["info", str(tmp_path / "nope.jpg")]) == 1
    assert "No such file" in capsys.readouterr().err

def test_mosh_gives_up_when_nothing_decodes(jpeg_path, tmp_path, capsys):
    # no table 1 for the chroma components, so no decoder accepts any attempt
    dst = tmp_path / "out.jpg"
    assert main(["mosh", str(jpeg_path), str(dst), "--validate", "--max-tries", "2", "--seed", "1"]) == 1
    assert "after 2 tries" in capsys.readouterr().err
    assert not dst.exists()

def test_verbose_flag(jpeg_path):
    assert build_parser().parse_args(["-v", "info", "x.jpg"]).debug
    assert main(["-v", "info", str(jpeg_path), "--summary"]) == 0
