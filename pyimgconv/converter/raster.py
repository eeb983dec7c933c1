from PIL import Image

from ..common import registry
from ..models import ConversionResult, SourceImage, TargetFormat, TargetSpec
from ..utils import create_surface, decode_image, draw_source, encode_surface
from .base import IFormatHandler


class RasterHandler(IFormatHandler):
    """
    Re-encode a source as a raster image.

    The source is drawn onto a fresh surface sized exactly to its recorded
    width/height, then the surface is encoded in ``target`` format.
    """

    # Formats without an alpha channel get the configured background first
    fills_background = False

    def render(self, source: SourceImage, background: str = None) -> Image.Image:
        size = (source.width, source.height)
        with decode_image(source.content, source.kind, size) as image:
            surface = create_surface(source.width, source.height, background)
            self.logger.debug(
                f"Drawing {image.size[0]}x{image.size[1]} {image.mode} source "
                f"onto {size[0]}x{size[1]} surface (background={background})")
            return draw_source(surface, image)

    def encode(self, source: SourceImage, quality: float = None, background: str = None) -> bytes:
        surface = self.render(source, background)
        try:
            return encode_surface(surface, self.target, quality)
        finally:
            surface.close()

    def process(self, source: SourceImage, spec: TargetSpec) -> ConversionResult:
        background = spec.background if self.fills_background else None
        blob = self.encode(source, spec.quality, background)
        return ConversionResult(blob=blob, media_type=self.target.media_type)


@registry.register_handler("png")
class PngHandler(RasterHandler):
    target = TargetFormat.PNG


@registry.register_handler("jpeg")
class JpegHandler(RasterHandler):
    target = TargetFormat.JPEG
    fills_background = True


@registry.register_handler("webp")
class WebpHandler(RasterHandler):
    target = TargetFormat.WEBP
