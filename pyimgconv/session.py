"""
Conversion session: the orchestration layer between a front end and the
engine.

A session holds at most one active source at a time. Selecting a new file
releases the previous file's preview handle before the new one is bound.
Conversions run one at a time; every failure comes back as a failed
``ConversionOutcome`` instead of an exception.
"""

import asyncio
import inspect
import io
import mimetypes
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Optional

from PIL import Image

from .classifier import classify
from .common import registry
from .common.errors import DecodeFailure, ImageConversionError
from .engine import convert, load_source
from .models import ConversionResult, SourceImage, SourceKind, TargetFormat, TargetSpec
from .naming import output_name
from .utils import get_library_logger

GENERIC_ERROR = "Conversion error."
NO_SOURCE_ERROR = "Please select an image first."
BUSY_ERROR = "A conversion is already in progress."

SVG_WRAP_WARNING = (
    "Selected SVG for a raster image. This will create an SVG that embeds "
    "a bitmap (not a true vector)."
)
SVG_PASSTHROUGH_NOTICE = "The original SVG will be preserved (no quality loss)."


@dataclass(frozen=True)
class InputFile:
    """A selected file: raw bytes, declared media type and name."""

    content: bytes = field(repr=False)
    media_type: str = ""
    name: str = ""

    @classmethod
    def from_path(cls, path, media_type: str = None) -> "InputFile":
        path = Path(path)
        if media_type is None:
            media_type = mimetypes.guess_type(path.name)[0] or ""
        return cls(content=path.read_bytes(), media_type=media_type, name=path.name)


class PreviewHandle:
    """
    Transient handle addressing the bytes of the active file.

    Must be released when the file is replaced or the session closes;
    ``release`` is idempotent.
    """

    def __init__(self, file: InputFile):
        self.file = file
        self._buffer = io.BytesIO(file.content)
        self._images = []
        self.released = False

    @property
    def buffer(self) -> io.BytesIO:
        if self.released:
            raise ValueError(f"Preview handle for '{self.file.name}' was released")
        return self._buffer

    def open_image(self) -> Image.Image:
        """Open the file as a PIL image for previewing; closed on release."""
        self.buffer.seek(0)
        image = Image.open(self.buffer)
        self._images.append(image)
        return image

    def release(self):
        if self.released:
            return
        for image in self._images:
            image.close()
        self._images.clear()
        self._buffer.close()
        self.released = True

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.release()


@dataclass(frozen=True)
class ConversionOutcome:
    """
    Result of a selection or conversion attempt.

    Exactly one of ``error`` (failure) or the payload fields (success) is
    meaningful, depending on ``ok``.
    """

    ok: bool
    source: Optional[SourceImage] = None
    result: Optional[ConversionResult] = None
    filename: Optional[str] = None
    warning: Optional[str] = None
    error: Optional[str] = None
    error_type: Optional[type] = None

    @classmethod
    def failed(cls, error, source: SourceImage = None) -> "ConversionOutcome":
        if isinstance(error, ImageConversionError):
            return cls(ok=False, source=source, error=error.user_message, error_type=type(error))
        return cls(ok=False, source=source, error=str(error) or GENERIC_ERROR)


class ConversionSession:
    """
    Holds the active source and runs conversions for it.

    Args:
        config: A ``Config`` as returned by ``pyimgconv.load_config``.
            Defaults to the registered config, or the packaged defaults.
        logger: Logger to use instead of the library logger.

    Usage::

        with ConversionSession() as session:
            session.select(InputFile.from_path("photo.png"))
            outcome = asyncio.run(session.convert_and_download(
                TargetSpec.from_ui("jpeg", 80, "#ffffff"), save))
    """

    def __init__(self, config=None, logger=None):
        if config is None:
            config = registry.get("config")
        if config is None:
            from . import load_config

            config = load_config()
        self.config = config
        self.logger = logger or get_library_logger(__name__)

        self.handle: Optional[PreviewHandle] = None
        self.source: Optional[SourceImage] = None
        self._in_flight = False

    @property
    def busy(self) -> bool:
        return self._in_flight

    def default_spec(self) -> TargetSpec:
        cfg = self.config.conversion_cfg
        return TargetSpec.from_ui(
            cfg.default_format, cfg.default_quality, cfg.default_background)

    def _bind(self, file: InputFile):
        if self.handle is not None:
            self.handle.release()
        self.handle = PreviewHandle(file)
        self.source = None

    def select(self, file: InputFile) -> ConversionOutcome:
        """
        Make ``file`` the active source.

        A file that is not an image is rejected before anything changes. For
        an image, the previous handle is released and the new one bound
        before decoding; a decode failure leaves no active source.
        """
        try:
            classify(file.media_type, file.name)
        except ImageConversionError as e:
            self.logger.warning(f"Rejected '{file.name}': {e}")
            return ConversionOutcome.failed(e)

        self._bind(file)

        cfg = self.config.conversion_cfg
        try:
            self.source = load_source(
                file.content,
                file.media_type,
                file.name,
                fallback_size=(cfg.fallback_width, cfg.fallback_height),
            )
        except DecodeFailure as e:
            self.logger.warning(f"Could not decode '{file.name}': {e}")
            return ConversionOutcome.failed(e)
        except Exception:
            self.logger.exception(f"Unexpected error loading '{file.name}'")
            return ConversionOutcome.failed(GENERIC_ERROR)

        return ConversionOutcome(ok=True, source=self.source)

    def warning_for(self, target, source: SourceImage = None) -> Optional[str]:
        """
        Notice to show the user for converting ``source`` (the active source
        by default) to ``target``.
        """
        source = source or self.source
        if source is None or TargetFormat.parse(target) is not TargetFormat.SVG:
            return None
        if source.kind is SourceKind.VECTOR:
            return SVG_PASSTHROUGH_NOTICE
        return SVG_WRAP_WARNING

    async def convert(self, spec: TargetSpec) -> ConversionOutcome:
        """
        Convert the active source. Never raises.

        Only one conversion may be in flight; a call made while another is
        running is rejected with ``BUSY_ERROR``.
        """
        if self._in_flight:
            return ConversionOutcome.failed(BUSY_ERROR, source=self.source)
        if self.source is None:
            return ConversionOutcome.failed(NO_SOURCE_ERROR)

        self._in_flight = True
        source = self.source
        try:
            target = TargetFormat.parse(spec.format)
            result = await asyncio.to_thread(convert, source, spec)
        except ImageConversionError as e:
            self.logger.warning(f"Conversion of '{source.name}' failed: {e}")
            return ConversionOutcome.failed(e, source=source)
        except Exception:
            self.logger.exception(f"Unexpected error converting '{source.name}'")
            return ConversionOutcome.failed(GENERIC_ERROR, source=source)
        finally:
            self._in_flight = False

        return ConversionOutcome(
            ok=True,
            source=source,
            result=result,
            filename=output_name(source.name, target),
            warning=self.warning_for(target, source),
        )

    async def convert_and_download(self, spec: TargetSpec, downloader: Callable) -> ConversionOutcome:
        """
        Convert the active source and hand ``(blob, filename)`` to ``downloader``.

        ``downloader`` may be a plain function or a coroutine function. Its
        failures are reported like conversion failures.
        """
        outcome = await self.convert(spec)
        if not outcome.ok:
            return outcome

        try:
            returned = downloader(outcome.result.blob, outcome.filename)
            if inspect.isawaitable(returned):
                await returned
        except Exception:
            self.logger.exception(f"Download of '{outcome.filename}' failed")
            return ConversionOutcome.failed(GENERIC_ERROR, source=outcome.source)

        self.logger.info(f"Handed '{outcome.filename}' ({outcome.result.size} bytes) to downloader")
        return outcome

    def close(self):
        if self.handle is not None:
            self.handle.release()
            self.handle = None
        self.source = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
