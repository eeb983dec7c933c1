from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union


class SourceKind(str, Enum):
    VECTOR = "vector"
    RASTER = "raster"


class TargetFormat(str, Enum):
    """Output formats the engine can produce."""

    PNG = "png"
    JPEG = "jpeg"
    WEBP = "webp"
    SVG = "svg"

    @property
    def media_type(self) -> str:
        return _MEDIA_TYPES[self]

    @property
    def extension(self) -> str:
        # "jpeg" is written out with the conventional three-letter extension
        return "jpg" if self is TargetFormat.JPEG else self.value

    @property
    def is_lossy(self) -> bool:
        return self in (TargetFormat.JPEG, TargetFormat.WEBP)

    @property
    def has_alpha(self) -> bool:
        return self is not TargetFormat.JPEG

    @classmethod
    def parse(cls, value: Union["TargetFormat", str]) -> "TargetFormat":
        """
        Resolve a format tag such as ``"PNG"``, ``"jpg"`` or ``TargetFormat.WEBP``.

        Raises:
            ValueError: If the tag names no supported format.
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            raise ValueError(f"Unsupported target format: {value!r}")

        tag = value.strip().lower().lstrip(".")
        if tag == "jpg":
            tag = "jpeg"
        try:
            return cls(tag)
        except ValueError:
            raise ValueError(f"Unsupported target format: {value!r}") from None


_MEDIA_TYPES = {
    TargetFormat.PNG: "image/png",
    TargetFormat.JPEG: "image/jpeg",
    TargetFormat.WEBP: "image/webp",
    TargetFormat.SVG: "image/svg+xml",
}

SVG_MEDIA_TYPE = _MEDIA_TYPES[TargetFormat.SVG]


@dataclass(frozen=True)
class SourceImage:
    """
    A selected file together with its authoritative pixel dimensions.

    ``width``/``height`` are used for every raster operation; they are fixed
    when the file is loaded (see ``pyimgconv.engine.load_source``).
    """

    content: bytes = field(repr=False)
    media_type: str
    name: str
    width: int
    height: int

    @property
    def kind(self) -> SourceKind:
        from .classifier import classify

        return classify(self.media_type, self.name)

    @property
    def is_vector(self) -> bool:
        return self.kind is SourceKind.VECTOR

    @property
    def size(self) -> int:
        return len(self.content)


@dataclass(frozen=True)
class TargetSpec:
    """
    Per-request conversion settings.

    Attributes:
        format: Target format; a string tag is accepted and parsed.
        quality: Encoder quality in (0.0, 1.0]. Only jpeg and webp honour it;
            anything out of range or non-numeric is sanitised by the engine.
        background: Colour used to fill the surface before drawing, jpeg only.
    """

    format: TargetFormat
    quality: Optional[float] = None
    background: str = "#ffffff"

    def __post_init__(self):
        object.__setattr__(self, "format", TargetFormat.parse(self.format))

    @classmethod
    def from_ui(cls, format, quality_percent: int = 90, background: str = "#ffffff") -> "TargetSpec":
        """Build a spec from UI values (quality on the 1-100 slider scale)."""
        target = TargetFormat.parse(format)
        quality = None
        if target.is_lossy and isinstance(quality_percent, (int, float)) \
                and not isinstance(quality_percent, bool):
            quality = quality_percent / 100
        return cls(format=target, quality=quality, background=background)


@dataclass(frozen=True)
class ConversionResult:
    blob: bytes = field(repr=False)
    media_type: str

    @property
    def size(self) -> int:
        return len(self.blob)
