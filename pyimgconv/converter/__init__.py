# pyimgconv/converter/__init__.py
"""
Converter module: one handler per target format.

Handlers register themselves in the global registry under their format tag
("png", "jpeg", "webp", "svg"); ``load_handler`` looks them up by tag.
"""

from .base import IFormatHandler
from .raster import JpegHandler, PngHandler, RasterHandler, WebpHandler
from .svg import SvgHandler

from ..common import registry

__all__ = [
    "IFormatHandler",
    "RasterHandler",
    "PngHandler",
    "JpegHandler",
    "WebpHandler",
    "SvgHandler",
    "load_handler",
    "HandlerZoo",
    "handler_zoo",
]


def load_handler(name, **kwargs):
    """
    Load a handler instance by format tag using the registry.

    Args:
        name (str): The registered format tag.
        **kwargs: Passed to the handler's constructor.

    Returns:
        IFormatHandler: An instance of the corresponding handler class.

    Raises:
        KeyError: If no handler is registered under ``name``.
    """
    handler_cls = registry.get_handler_class(name)
    if handler_cls is None:
        raise KeyError(f"No handler registered with name '{name}'")
    return handler_cls(**kwargs)


class HandlerZoo:
    """
    Lists all handler classes registered in the registry.
    """

    def __init__(self):
        self.handler_zoo = {
            k: v.__name__ for k, v in registry.mapping["handler"].items()
        }

    def __str__(self):
        return (
            "=" * 50
            + "\n"
            + "\n".join(
                [
                    f"{name:<30} {cls}" for name, cls in self.handler_zoo.items()
                ]
            )
        )

    def __iter__(self):
        """
        Yields:
            tuple: (name, class_name)
        """
        return iter(self.handler_zoo.items())


handler_zoo = HandlerZoo()
