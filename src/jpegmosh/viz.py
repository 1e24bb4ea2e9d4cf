from __future__ import annotations
from .models.file import JpegFile

def plot_segments(file: JpegFile, show: bool = True):
    """Segment sizes by offset, log scale, one bar per segment."""
    import matplotlib.pyplot as plt
    offsets = [s.offset for s in file.segments]
    sizes = [s.size for s in file.segments]
    fig, ax = plt.subplots()
    ax.bar(offsets, sizes, width=[max(s, 1) for s in sizes], align="edge")
    for s in file.segments:
        ax.annotate(s.description.split(",")[0], (s.offset, s.size), fontsize=6, rotation=45)
    ax.set_yscale("log")
    ax.set_xlabel("Offset (bytes)")
    ax.set_ylabel("Segment size (bytes)")
    ax.set_title("JPEG segment layout")
    if show:
        plt.show()
    return fig
