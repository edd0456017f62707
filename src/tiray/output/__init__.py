"""Output module for writing rendered images.

Components:
    export: PPM (P3) text and PNG writers
"""

from tiray.output.export import (
    format_ppm,
    format_ppm_header,
    save_png,
    save_ppm,
    write_ppm,
)

__all__ = [
    "format_ppm",
    "format_ppm_header",
    "write_ppm",
    "save_ppm",
    "save_png",
]
