import io
import math
import numbers

import cairosvg
from PIL import Image, ImageColor

from ..common.errors import ConversionError, DecodeFailure
from ..models import SourceKind, TargetFormat
from .svg_utils import ensure_svg_size, read_svg_size

DEFAULT_QUALITY = 0.92
MIN_QUALITY = 0.01
MAX_QUALITY = 1.0

PIL_FORMATS = {
    TargetFormat.PNG: "PNG",
    TargetFormat.JPEG: "JPEG",
    TargetFormat.WEBP: "WEBP",
}

# Errors Pillow raises for unreadable or hostile input
_PIL_DECODE_ERRORS = (OSError, ValueError, SyntaxError, Image.DecompressionBombError)


def sanitize_quality(quality) -> float:
    """
    Clamp an encoder quality to [0.01, 1.0].

    Non-numeric values (including ``None`` and booleans) and NaN fall back
    to 0.92.
    """
    if isinstance(quality, bool) or not isinstance(quality, numbers.Real):
        return DEFAULT_QUALITY
    quality = float(quality)
    if math.isnan(quality):
        return DEFAULT_QUALITY
    return min(MAX_QUALITY, max(MIN_QUALITY, quality))


def decode_raster(content: bytes) -> Image.Image:
    """
    Decode raster bytes into a fully loaded PIL image.

    Raises:
        DecodeFailure: If Pillow cannot identify or read the data.
    """
    try:
        image = Image.open(io.BytesIO(content))
        image.load()
    except _PIL_DECODE_ERRORS as e:
        raise DecodeFailure(f"Could not decode raster image: {e}") from e
    return image


def rasterize_svg(content: bytes, size: tuple[int, int] = None) -> Image.Image:
    """
    Render an SVG document to a PIL image using CairoSVG.

    Parameters
    ----------
    content : bytes
        The SVG document.
    size : tuple[int, int], optional
        Output (width, height). When omitted the document's own size is used.

    Returns
    -------
    PIL.Image.Image
        The rendered RGBA image.

    Raises
    ------
    DecodeFailure
        If CairoSVG cannot parse or render the document.
    """
    kwargs = {}
    if size is not None:
        kwargs["output_width"], kwargs["output_height"] = size
        if 0 in read_svg_size(content):
            content = ensure_svg_size(content, *size)

    try:
        # unsafe=False limits external references to data: URLs
        png_data = cairosvg.svg2png(bytestring=content, unsafe=False, **kwargs)
    except Exception as e:
        # CairoSVG surfaces XML, cairo and attribute errors with no common base
        raise DecodeFailure(f"Could not render SVG image: {e}") from e

    if not png_data:
        raise DecodeFailure("SVG rendering produced no data")
    return decode_raster(png_data).convert("RGBA")


def decode_image(content: bytes, kind: SourceKind, size: tuple[int, int] = None) -> Image.Image:
    """Decode source bytes into a drawable image; ``size`` only applies to vector input."""
    if kind is SourceKind.VECTOR:
        return rasterize_svg(content, size)
    return decode_raster(content)


def parse_color(color: str) -> tuple[int, int, int, int]:
    """
    Parse a CSS colour string (``"#fff"``, ``"#ffffff"``, ``"white"``) to RGBA.

    Raises:
        ConversionError: If the colour cannot be parsed.
    """
    try:
        return ImageColor.getcolor(color, "RGBA")
    except (ValueError, AttributeError) as e:
        raise ConversionError(f"Invalid background colour {color!r}") from e


def create_surface(width: int, height: int, background: str = None) -> Image.Image:
    """
    Create an off-screen RGBA surface of exactly ``width`` x ``height``.

    The surface is fully transparent, or filled with ``background`` when given.

    Raises:
        ConversionError: If the surface cannot be created.
    """
    if width <= 0 or height <= 0:
        raise ConversionError(f"Cannot create a {width}x{height} surface")

    fill = (0, 0, 0, 0) if background is None else parse_color(background)
    try:
        return Image.new("RGBA", (width, height), fill)
    except (ValueError, MemoryError) as e:
        raise ConversionError(f"Cannot create a {width}x{height} surface: {e}") from e


def draw_source(surface: Image.Image, image: Image.Image) -> Image.Image:
    """Draw ``image`` at the origin, spanning the whole surface."""
    layer = image if image.mode == "RGBA" else image.convert("RGBA")
    if layer.size != surface.size:
        layer = layer.resize(surface.size, Image.Resampling.LANCZOS)
    surface.alpha_composite(layer)
    return surface


def encode_surface(surface: Image.Image, target: TargetFormat, quality: float = None) -> bytes:
    """
    Encode a surface to PNG, JPEG or WebP bytes.

    Parameters
    ----------
    surface : PIL.Image.Image
        RGBA surface to encode.
    target : TargetFormat
        Output format; must be a raster format.
    quality : float, optional
        Quality in [0.01, 1.0]; sanitised here and ignored for PNG.

    Returns
    -------
    bytes
        The encoded image.

    Raises
    ------
    ConversionError
        If the encoder fails or returns no data.
    """
    pil_format = PIL_FORMATS.get(target)
    if pil_format is None:
        raise ConversionError(f"{target.value} is not a raster format")

    image = surface
    save_kwargs = {}

    if target is TargetFormat.JPEG:
        # No alpha channel: whatever is still transparent ends up black
        opaque = Image.new("RGBA", surface.size, (0, 0, 0, 255))
        image = Image.alpha_composite(opaque, surface).convert("RGB")

    if target.is_lossy:
        save_kwargs["quality"] = max(1, min(100, int(round(sanitize_quality(quality) * 100))))

    buffer = io.BytesIO()
    try:
        image.save(buffer, format=pil_format, **save_kwargs)
    except (OSError, ValueError, KeyError) as e:
        raise ConversionError(f"{pil_format} encoding failed: {e}") from e

    data = buffer.getvalue()
    if not data:
        raise ConversionError(f"{pil_format} encoder returned no data")
    return data
