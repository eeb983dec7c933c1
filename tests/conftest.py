"""Shared fixtures: small in-memory images for every source kind."""

import io

import pytest
from PIL import Image

from pyimgconv import load_config, registry


def encode(image: Image.Image, fmt: str, **kwargs) -> bytes:
    buffer = io.BytesIO()
    image.save(buffer, format=fmt, **kwargs)
    return buffer.getvalue()


def decode(data: bytes) -> Image.Image:
    image = Image.open(io.BytesIO(data))
    image.load()
    return image


@pytest.fixture
def open_output():
    """Decode output bytes back into a loaded PIL image."""
    return decode


@pytest.fixture
def transparent_png() -> bytes:
    """400x300 PNG: left half fully transparent, right half opaque red."""
    image = Image.new("RGBA", (400, 300), (0, 0, 0, 0))
    image.paste((255, 0, 0, 255), (200, 0, 400, 300))
    return encode(image, "PNG")


@pytest.fixture
def opaque_jpeg() -> bytes:
    """200x200 solid green JPEG."""
    return encode(Image.new("RGB", (200, 200), (0, 160, 0)), "JPEG", quality=95)


@pytest.fixture
def sized_svg() -> bytes:
    """200x200 SVG: left half blue, right half empty."""
    return (
        b'<?xml version="1.0" encoding="UTF-8"?>\n'
        b'<svg xmlns="http://www.w3.org/2000/svg" width="200" height="200" viewBox="0 0 200 200">'
        b'<rect x="0" y="0" width="100" height="200" fill="#0000ff"/>'
        b'</svg>'
    )


@pytest.fixture
def unsized_svg() -> bytes:
    return (
        b'<svg xmlns="http://www.w3.org/2000/svg">'
        b'<rect x="0" y="0" width="10" height="10" fill="#000000"/>'
        b'</svg>'
    )


@pytest.fixture
def config():
    """Packaged defaults, registered as the active config."""
    cfg = load_config()
    yield cfg
    registry.unregister("config")
