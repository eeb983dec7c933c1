from .registry import Registry, registry
from .config import Config
from .errors import (
    ConversionError,
    DecodeFailure,
    ImageConversionError,
    UnsupportedInputKind,
)

__all__ = [
    "Registry",
    "registry",

    "Config",

    "ImageConversionError",
    "UnsupportedInputKind",
    "DecodeFailure",
    "ConversionError",
]
