"""Tests for the Pillow/CairoSVG primitives."""

import io
import math

import pytest
from PIL import Image

from pyimgconv import ConversionError, DecodeFailure, SourceKind, TargetFormat
from pyimgconv.utils import (
    create_surface,
    decode_image,
    draw_source,
    encode_surface,
    parse_color,
    rasterize_svg,
    sanitize_quality,
    to_data_url,
)


class TestSanitizeQuality:
    """Tests for sanitize_quality()."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            (0.5, 0.5),
            (1, 1.0),
            (0.01, 0.01),
            (0, 0.01),
            (-3, 0.01),
            (1.5, 1.0),
            (100, 1.0),
            (math.inf, 1.0),
            (-math.inf, 0.01),
        ],
    )
    def test_numeric_values_are_clamped(self, value, expected):
        assert sanitize_quality(value) == pytest.approx(expected)

    @pytest.mark.parametrize("value", [math.nan, None, "0.5", [], True, object()])
    def test_non_numeric_values_use_default(self, value):
        assert sanitize_quality(value) == 0.92

    @pytest.mark.parametrize("value", [-1e9, -0.5, 0.0, 0.3, 0.999, 2, 1e9])
    def test_result_is_always_in_range(self, value):
        assert 0.01 <= sanitize_quality(value) <= 1.0


class TestDecode:
    """Tests for decoding raster and vector bytes."""

    def test_decode_raster(self, transparent_png):
        image = decode_image(transparent_png, SourceKind.RASTER)
        assert image.size == (400, 300)

    def test_decode_garbage_fails(self):
        with pytest.raises(DecodeFailure):
            decode_image(b"definitely not an image", SourceKind.RASTER)

    def test_rasterize_svg_at_requested_size(self, sized_svg):
        image = rasterize_svg(sized_svg, (100, 50))
        assert image.size == (100, 50)
        assert image.mode == "RGBA"

    def test_rasterize_unsized_svg(self, unsized_svg):
        image = rasterize_svg(unsized_svg, (64, 48))
        assert image.size == (64, 48)

    def test_rasterize_broken_svg_fails(self):
        with pytest.raises(DecodeFailure):
            rasterize_svg(b"<svg><rect", (10, 10))

    def test_rasterize_does_not_fetch_remote_images(self, monkeypatch):
        import cairosvg.url

        requested = []

        def record(request, *args, **kwargs):
            requested.append(getattr(request, "full_url", request))
            raise OSError("network disabled")

        monkeypatch.setattr(cairosvg.url, "urlopen", record)
        svg = (b'<svg xmlns="http://www.w3.org/2000/svg" width="10" height="10">'
               b'<image href="http://example.com/pixel.png" width="10" height="10"/></svg>')

        image = rasterize_svg(svg, (10, 10))

        assert image.size == (10, 10)
        assert not any(str(url).startswith("http") for url in requested)

    def test_rasterize_renders_embedded_data_images(self):
        buffer = io.BytesIO()
        Image.new("RGB", (4, 4), (255, 0, 0)).save(buffer, format="PNG")
        svg = (
            '<svg xmlns="http://www.w3.org/2000/svg" width="10" height="10">'
            f'<image href="{to_data_url(buffer.getvalue(), "image/png")}" width="10" height="10"/>'
            '</svg>'
        ).encode("utf-8")

        image = rasterize_svg(svg, (10, 10))

        assert image.getpixel((5, 5))[:3] == (255, 0, 0)


class TestSurface:
    """Tests for surface creation and drawing."""

    def test_transparent_surface(self):
        surface = create_surface(4, 3)
        assert surface.size == (4, 3)
        assert surface.getpixel((0, 0)) == (0, 0, 0, 0)

    def test_background_fill(self):
        surface = create_surface(2, 2, "#ff8000")
        assert surface.getpixel((1, 1)) == (255, 128, 0, 255)

    @pytest.mark.parametrize("width, height", [(0, 10), (10, 0), (-1, 5)])
    def test_invalid_size(self, width, height):
        with pytest.raises(ConversionError):
            create_surface(width, height)

    def test_invalid_background(self):
        with pytest.raises(ConversionError):
            create_surface(2, 2, "not-a-colour")

    def test_parse_color_accepts_short_hex_and_names(self):
        assert parse_color("#fff") == (255, 255, 255, 255)
        assert parse_color("black") == (0, 0, 0, 255)

    def test_draw_stretches_to_surface(self):
        surface = create_surface(10, 10)
        draw_source(surface, Image.new("RGB", (5, 5), (10, 20, 30)))
        r, g, b, a = surface.getpixel((9, 9))
        assert all(abs(got - want) <= 1 for got, want in ((r, 10), (g, 20), (b, 30)))
        assert a == 255

    def test_draw_keeps_background_under_transparency(self):
        surface = create_surface(2, 1, "#ffffff")
        layer = Image.new("RGBA", (2, 1), (0, 0, 0, 0))
        layer.putpixel((1, 0), (255, 0, 0, 255))
        draw_source(surface, layer)
        assert surface.getpixel((0, 0)) == (255, 255, 255, 255)
        assert surface.getpixel((1, 0)) == (255, 0, 0, 255)


class TestEncode:
    """Tests for encode_surface()."""

    def test_png_keeps_alpha(self, open_output):
        data = encode_surface(create_surface(3, 2), TargetFormat.PNG, quality=0.1)
        image = open_output(data)
        assert image.format == "PNG"
        assert image.size == (3, 2)
        assert image.getpixel((0, 0))[3] == 0

    def test_jpeg_flattens_transparency_to_black(self, open_output):
        data = encode_surface(create_surface(8, 8), TargetFormat.JPEG, quality=0.9)
        image = open_output(data)
        assert image.format == "JPEG"
        assert image.mode == "RGB"
        assert max(image.getpixel((4, 4))) < 10

    def test_lower_quality_gives_smaller_jpeg(self, transparent_png):
        image = decode_image(transparent_png, SourceKind.RASTER)
        surface = draw_source(create_surface(400, 300, "#ffffff"), image)
        # add detail so quality makes a difference
        for x in range(0, 400, 3):
            surface.putpixel((x, x % 300), (x % 256, 0, 255 - x % 256, 255))

        small = encode_surface(surface, TargetFormat.JPEG, quality=0.1)
        large = encode_surface(surface, TargetFormat.JPEG, quality=1.0)
        assert len(small) < len(large)

    def test_webp(self, open_output):
        data = encode_surface(create_surface(5, 5, "#00ff00"), TargetFormat.WEBP, quality=0.8)
        image = open_output(data)
        assert image.format == "WEBP"
        assert image.size == (5, 5)

    def test_svg_is_not_a_raster_target(self):
        with pytest.raises(ConversionError):
            encode_surface(create_surface(1, 1), TargetFormat.SVG)

    def test_encoder_failure_is_a_conversion_error(self, monkeypatch):
        surface = create_surface(2, 2)

        def broken_save(*args, **kwargs):
            raise OSError("encoder error -2")

        monkeypatch.setattr(surface, "save", broken_save)
        with pytest.raises(ConversionError):
            encode_surface(surface, TargetFormat.PNG)

    def test_empty_encoder_output_is_a_conversion_error(self, monkeypatch):
        surface = create_surface(2, 2)
        monkeypatch.setattr(surface, "save", lambda *args, **kwargs: None)

        with pytest.raises(ConversionError):
            encode_surface(surface, TargetFormat.PNG)
