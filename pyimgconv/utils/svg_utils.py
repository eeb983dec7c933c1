import base64
import math
import re

# CSS absolute units expressed in px (96 dpi)
_UNIT_TO_PX = {
    "": 1.0,
    "px": 1.0,
    "pt": 96 / 72,
    "pc": 16.0,
    "mm": 96 / 25.4,
    "cm": 96 / 2.54,
    "in": 96.0,
}

_ROOT_TAG = re.compile(r'<svg\b[^>]*>', flags=re.IGNORECASE)
_LENGTH = re.compile(r'^\s*([+]?\d*\.?\d+(?:[eE][-+]?\d+)?)\s*([a-zA-Z%]*)\s*$')


def _root_attribute(root_tag: str, name: str):
    m = re.search(
        r'(?:^|\s)' + name + r'\s*=\s*(["\'])(.*?)\1', root_tag, flags=re.DOTALL)
    return m.group(2) if m else None


def _length_to_px(value) -> float:
    """Convert an SVG length to px; relative units (%, em, ex) give 0."""
    if value is None:
        return 0.0
    m = _LENGTH.match(value)
    if not m:
        return 0.0
    number, unit = float(m.group(1)), m.group(2).lower()
    return _finite(number * _UNIT_TO_PX.get(unit, 0.0))


def _finite(value: float) -> float:
    """Non-finite values (overflowing lengths, nan) count as unknown."""
    return value if math.isfinite(value) else 0.0


def read_svg_size(svg) -> tuple[int, int]:
    """
    Read the intrinsic size of an SVG document.

    Uses the root ``width``/``height`` attributes when they are absolute
    lengths, and the ``viewBox`` for whichever of them is missing.

    Parameters
    ----------
    svg : bytes | str
        The SVG document.

    Returns
    -------
    tuple[int, int]
        ``(width, height)`` in px; a dimension that cannot be determined is 0.
    """
    if isinstance(svg, bytes):
        svg = svg.decode("utf-8", errors="replace")

    root = _ROOT_TAG.search(svg)
    if not root:
        return 0, 0
    root_tag = root.group(0)

    width = _length_to_px(_root_attribute(root_tag, "width"))
    height = _length_to_px(_root_attribute(root_tag, "height"))

    view_box = _root_attribute(root_tag, "viewBox")
    if view_box and (width <= 0 or height <= 0):
        parts = re.split(r'[\s,]+', view_box.strip())
        if len(parts) == 4:
            try:
                vb_width, vb_height = _finite(float(parts[2])), _finite(float(parts[3]))
            except ValueError:
                vb_width = vb_height = 0.0
            if width <= 0 and height > 0 and vb_height > 0:
                width = height * vb_width / vb_height
            elif height <= 0 and width > 0 and vb_width > 0:
                height = width * vb_height / vb_width
            else:
                width = width if width > 0 else vb_width
                height = height if height > 0 else vb_height

    # the aspect-ratio product can still overflow
    return max(0, int(round(_finite(width)))), max(0, int(round(_finite(height))))


def ensure_svg_size(svg: bytes, width: int, height: int) -> bytes:
    """
    Give an unsized SVG document an explicit size for rendering.

    Missing or relative ``width``/``height`` attributes on the root element
    are set to the given values, and a matching ``viewBox`` is added when
    the document has none. Only used to rasterise; pass-through output
    never goes through here.
    """
    text = svg.decode("utf-8", errors="replace") if isinstance(svg, bytes) else svg
    root = _ROOT_TAG.search(text)
    if not root:
        return svg

    tag = root.group(0)
    for name, value in (("width", width), ("height", height)):
        current = _root_attribute(tag, name)
        if current is None:
            tag = f'<svg {name}="{value}"' + tag[4:]
        elif _length_to_px(current) <= 0:
            tag = re.sub(
                r'(\s' + name + r'\s*=\s*)(["\']).*?\2',
                lambda m: f'{m.group(1)}"{value}"',
                tag,
                count=1,
                flags=re.DOTALL,
            )
    if _root_attribute(tag, "viewBox") is None:
        tag = f'<svg viewBox="0 0 {width} {height}"' + tag[4:]

    return (text[:root.start()] + tag + text[root.end():]).encode("utf-8")


def to_data_url(payload: bytes, media_type: str) -> str:
    encoded = base64.b64encode(payload).decode("ascii")
    return f"data:{media_type};base64,{encoded}"


def build_embedded_svg(data_url: str, width: int, height: int) -> str:
    """
    Wrap an image data URL in a minimal SVG 1.1 document of the given size.

    The result is a container for a bitmap, not vector artwork.
    """
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        f'<svg xmlns="http://www.w3.org/2000/svg" '
        f'xmlns:xlink="http://www.w3.org/1999/xlink" '
        f'width="{width}" height="{height}" viewBox="0 0 {width} {height}" version="1.1">\n'
        f'  <image xlink:href="{data_url}" width="{width}" height="{height}" />\n'
        '</svg>'
    )
