from ..common import registry
from ..models import ConversionResult, SourceImage, TargetFormat, TargetSpec
from ..utils import build_embedded_svg, to_data_url
from .base import IFormatHandler
from .raster import PngHandler


@registry.register_handler("svg")
class SvgHandler(IFormatHandler):
    """
    Produce SVG output.

    Vector sources are passed through byte for byte. Raster sources are
    encoded losslessly as PNG and embedded as a base64 data URL inside a
    minimal SVG document of the same size; no vectorisation takes place.
    """

    target = TargetFormat.SVG

    def passthrough(self, source: SourceImage) -> ConversionResult:
        return ConversionResult(blob=source.content, media_type=self.target.media_type)

    def wrap(self, source: SourceImage) -> ConversionResult:
        png = PngHandler(logger=self.logger).encode(
            source, quality=1.0, background=None)
        data_url = to_data_url(png, TargetFormat.PNG.media_type)
        document = build_embedded_svg(data_url, source.width, source.height)
        return ConversionResult(
            blob=document.encode("utf-8"), media_type=self.target.media_type)

    def process(self, source: SourceImage, spec: TargetSpec) -> ConversionResult:
        if source.is_vector:
            self.logger.debug(f"Passing '{source.name}' through unchanged")
            return self.passthrough(source)

        self.logger.debug(
            f"Wrapping raster '{source.name}' in an SVG container")
        return self.wrap(source)
