"""
Source classification.

Decides whether a selected file is a vector (SVG) or raster image from its
declared media type, falling back to the file extension when the type is
missing or unreliable.
"""

from .common.errors import UnsupportedInputKind
from .models import SVG_MEDIA_TYPE, SourceKind

VECTOR_SIGNATURE = "svg"
VECTOR_EXTENSION = ".svg"


def _has_vector_extension(name: str) -> bool:
    return (name or "").lower().endswith(VECTOR_EXTENSION)


def is_image(media_type: str, name: str) -> bool:
    return (media_type or "").lower().startswith("image/") or _has_vector_extension(name)


def is_vector(media_type: str, name: str) -> bool:
    return VECTOR_SIGNATURE in (media_type or "").lower() or _has_vector_extension(name)


def classify(media_type: str, name: str) -> SourceKind:
    """
    Classify a file as vector or raster.

    Args:
        media_type (str): Declared media type, may be empty.
        name (str): File name.

    Returns:
        SourceKind: ``VECTOR`` for SVG input, ``RASTER`` otherwise.

    Raises:
        UnsupportedInputKind: If the file is not recognised as an image at all.
    """
    if not is_image(media_type, name):
        raise UnsupportedInputKind(
            f"'{name}' ({media_type or 'no media type'}) is not an image")

    if is_vector(media_type, name):
        return SourceKind.VECTOR
    return SourceKind.RASTER


def resolve_media_type(media_type: str, name: str) -> str:
    """Media type recorded for a source; untyped ``.svg`` files become ``image/svg+xml``."""
    if not media_type and _has_vector_extension(name):
        return SVG_MEDIA_TYPE
    return media_type or ""
