import pytest

SOI = b"\xff\xd8"
EOI = b"\xff\xd9"

def segment(marker: int, body: bytes) -> bytes:
    """Length-prefixed segment: FF, marker, 2-byte length (incl. itself), body."""
    return bytes([0xFF, marker]) + (len(body) + 2).to_bytes(2, "big") + body

def jfif_app0() -> bytes:
    # JFIF 1.01, dpi, 72x72, no thumbnail
    return segment(0xE0, b"JFIF\x00" + bytes([1, 1, 1]) + (72).to_bytes(2, "big") * 2 + bytes([0, 0]))

def dqt(table_id: int = 0, fill: int = 0) -> bytes:
    return segment(0xDB, bytes([table_id]) + bytes([fill]) * 64)

def sof0(width: int = 16, height: int = 8) -> bytes:
    body = bytes([8]) + height.to_bytes(2, "big") + width.to_bytes(2, "big") + bytes([3])
    body += bytes([1, 0x22, 0, 2, 0x11, 1, 3, 0x11, 1])
    return segment(0xC0, body)

def sos_header() -> bytes:
    # 3 components, then Ss=0 Se=63 Ah/Al=0
    return segment(0xDA, bytes([3, 1, 0x00, 2, 0x11, 3, 0x11, 0, 63, 0]))

SCAN_DATA = bytes(range(0x10, 0x50))

def build_jpeg(*middle: bytes, scan: bytes = SCAN_DATA, eoi: bool = True) -> bytes:
    return SOI + b"".join(middle) + sos_header() + scan + (EOI if eoi else b"")

@pytest.fixture
def simple_jpeg() -> bytes:
    return build_jpeg(jfif_app0(), dqt(), sof0())
