"""
pyimgconv - local image format conversion between PNG, JPEG, WebP and SVG.

Main components:
- Classifier: decides whether a file is vector (SVG) or raster
- Converter: one handler per target format (re-encode, pass-through, SVG wrap)
- Engine: loads sources and dispatches conversions
- Session: single-flight orchestration with scoped preview handles
- Utils: Pillow/CairoSVG primitives, SVG helpers, logging
"""

from argparse import Namespace
from pathlib import Path

from pyimgconv.common.config import Config
from pyimgconv.common.registry import registry
from pyimgconv.common.errors import (
    ConversionError,
    DecodeFailure,
    ImageConversionError,
    UnsupportedInputKind,
)
from pyimgconv.models import (
    ConversionResult,
    SourceImage,
    SourceKind,
    TargetFormat,
    TargetSpec,
)
from pyimgconv.classifier import classify, is_vector
from pyimgconv.utils import apply_logging_config, sanitize_quality
from pyimgconv.engine import convert, load_source
from pyimgconv.naming import output_name
from pyimgconv.session import ConversionOutcome, ConversionSession, InputFile, PreviewHandle

__version__ = "0.1.0"


def setup_path():
    package_dir = Path(__file__).resolve().parent
    config_dir = package_dir / "configs"

    registry.register_path("package_dir", str(package_dir))
    registry.register_path("config_dir", str(config_dir))
    registry.register_path("default_config_path", str(config_dir / "configs.yaml"))


def load_config(options=None):
    """
    Load the packaged configuration, optionally with overrides.

    Args:
        options (List[str], optional): Overrides in the format
            "section.key=value", e.g.:
            - "conversion.default_format=webp"
            - "conversion.fallback_width=800"
            - "logging.level=DEBUG"

    Returns:
        Config: The loaded configuration. It is also registered in the
            registry under "config" so later sessions pick it up. Its
            ``logging.level`` is applied to the "pyimgconv" logger.

    Raises:
        FileNotFoundError: If the config file is missing.
        ValueError: If an option is malformed.

    Example:
        >>> config = load_config(["conversion.default_quality=75"])
        >>> config.conversion_cfg.default_quality
        75
    """
    if not registry.get_path("default_config_path"):
        setup_path()

    args = Namespace(
        cfg_path=registry.get_path("default_config_path"),
        options=options if options is not None else [],
    )

    config = Config(args)
    registry.register("config", config)
    apply_logging_config(config.logging_cfg)

    return config


__all__ = [
    "load_config",
    "setup_path",

    "Config",
    "registry",

    "ImageConversionError",
    "UnsupportedInputKind",
    "DecodeFailure",
    "ConversionError",

    "SourceKind",
    "TargetFormat",
    "SourceImage",
    "TargetSpec",
    "ConversionResult",

    "classify",
    "is_vector",
    "sanitize_quality",
    "load_source",
    "convert",
    "output_name",

    "InputFile",
    "PreviewHandle",
    "ConversionOutcome",
    "ConversionSession",

    "__version__",
]
