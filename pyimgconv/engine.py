"""
Conversion engine.

``load_source`` turns a selected file into a ``SourceImage`` with
authoritative dimensions; ``convert`` dispatches on the target format to the
registered handler and returns the output blob.
"""

from .classifier import classify, resolve_media_type
from .common.errors import ConversionError
from .converter import load_handler
from .models import ConversionResult, SourceImage, SourceKind, TargetFormat, TargetSpec
from .utils import decode_image, get_library_logger, read_svg_size

logger = get_library_logger(__name__)

# Used for any dimension a decode reports as zero (seen with unsized SVGs)
FALLBACK_SIZE = (1024, 768)


def load_source(content: bytes, media_type: str, name: str, fallback_size=None) -> SourceImage:
    """
    Classify and decode a file to establish its pixel dimensions.

    Args:
        content (bytes): File bytes.
        media_type (str): Declared media type, may be empty.
        name (str): File name.
        fallback_size (tuple[int, int], optional): Size substituted per
            dimension when decoding reports zero. Defaults to ``FALLBACK_SIZE``.

    Returns:
        SourceImage: The loaded source.

    Raises:
        UnsupportedInputKind: If the file is not an image.
        DecodeFailure: If the bytes cannot be decoded.
    """
    fallback_width, fallback_height = fallback_size or FALLBACK_SIZE
    kind = classify(media_type, name)

    if kind is SourceKind.VECTOR:
        width, height = read_svg_size(content)
        width, height = width or fallback_width, height or fallback_height
        # Render once so unreadable documents fail at selection time
        with decode_image(content, kind, (width, height)):
            pass
    else:
        with decode_image(content, kind) as image:
            width, height = image.size
        width, height = width or fallback_width, height or fallback_height

    source = SourceImage(
        content=content,
        media_type=resolve_media_type(media_type, name),
        name=name,
        width=width,
        height=height,
    )
    logger.debug(
        f"Loaded {kind.value} source '{name}' ({source.media_type or 'unknown'}, "
        f"{width}x{height}, {source.size} bytes)")
    return source


def convert(source: SourceImage, spec: TargetSpec) -> ConversionResult:
    """
    Convert ``source`` according to ``spec``.

    Strategy by (source kind, target format):
        - vector -> svg: byte-identical pass-through
        - raster -> svg: lossless PNG embedded in an SVG wrapper
        - any -> png/jpeg/webp: render and re-encode (jpeg over the background)

    Raises:
        DecodeFailure: If the source cannot be decoded.
        ConversionError: If no usable output is produced.
    """
    target = TargetFormat.parse(spec.format)
    handler = load_handler(target.value)

    logger.debug(
        f"Converting '{source.name}' ({source.kind.value}) to {target.value} "
        f"with {type(handler).__name__}")
    result = handler(source, spec)

    if result is None or not result.blob:
        raise ConversionError(f"{type(handler).__name__} produced no output")

    logger.success(
        f"Converted '{source.name}' to {target.value} ({result.size} bytes)")
    return result
