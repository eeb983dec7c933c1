# pyimgconv/utils/__init__.py
"""
Utilities module for common functionality.

This module provides the Pillow/CairoSVG primitives the conversion handlers
are built from, SVG helpers, and logging setup.
"""

from .logger import (
    apply_logging_config,
    create_console_logger,
    get_library_logger,
    resolve_level,
)
from .image_utils import (
    create_surface,
    decode_image,
    decode_raster,
    draw_source,
    encode_surface,
    parse_color,
    rasterize_svg,
    sanitize_quality,
)
from .svg_utils import build_embedded_svg, ensure_svg_size, read_svg_size, to_data_url

__all__ = [
    # Logger utilities
    "get_library_logger",
    "create_console_logger",
    "apply_logging_config",
    "resolve_level",

    # Image utilities
    "sanitize_quality",
    "decode_raster",
    "rasterize_svg",
    "decode_image",
    "parse_color",
    "create_surface",
    "draw_source",
    "encode_surface",

    # SVG utilities
    "read_svg_size",
    "ensure_svg_size",
    "to_data_url",
    "build_embedded_svg",
]
