# pyimgconv/utils/logger.py
import logging
import sys

PACKAGE_LOGGER = "pyimgconv"

LOG_FORMAT = "[%(asctime)s] %(levelname)-7s - %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Between INFO (20) and WARNING (30), used for finished conversions
SUCCESS_LEVEL_NUM = 25
logging.addLevelName(SUCCESS_LEVEL_NUM, "SUCCESS")


def success(self, message, *args, **kwargs):
    """Log a message with severity 'SUCCESS'."""
    if self.isEnabledFor(SUCCESS_LEVEL_NUM):
        self._log(SUCCESS_LEVEL_NUM, message, args, **kwargs)


logging.Logger.success = success

_RESET = "\033[0m"
LEVEL_COLORS = {
    logging.DEBUG: "\033[90m",
    logging.INFO: "\033[94m",
    SUCCESS_LEVEL_NUM: "\033[92m",
    logging.WARNING: "\033[93m",
    logging.ERROR: "\033[91m",
    logging.CRITICAL: "\033[1;31m",
}


class ColoredFormatter(logging.Formatter):
    """Colours the level name when the stream is a terminal."""

    def __init__(self, fmt=LOG_FORMAT, datefmt=DATE_FORMAT, use_colors=True, stream=None):
        super().__init__(fmt, datefmt)
        self.use_colors = use_colors
        self.stream = stream or sys.stdout

    def format(self, record):
        message = super().format(record)

        isatty = getattr(self.stream, "isatty", None)
        if not self.use_colors or isatty is None or not isatty():
            return message

        color = LEVEL_COLORS.get(record.levelno)
        if color is None:
            return message
        return message.replace(record.levelname, f"{color}{record.levelname}{_RESET}", 1)


def resolve_level(level) -> int:
    """
    Turn a level into its number.

    Accepts logging constants and level names as written in ``configs.yaml``
    (``"debug"``, ``"SUCCESS"``); unknown names give INFO.
    """
    if isinstance(level, int):
        return level
    value = logging.getLevelName(str(level).strip().upper())
    return value if isinstance(value, int) else logging.INFO


def get_library_logger(name: str) -> logging.Logger:
    """
    Get a library logger.

    The logger has no level of its own, so the ``pyimgconv`` logger decides
    what is emitted, and it stays silent until the host application adds a
    handler (e.g. with ``create_console_logger``).
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        logger.addHandler(logging.NullHandler())
    return logger


def apply_logging_config(logging_cfg, name: str = PACKAGE_LOGGER) -> logging.Logger:
    """Set the package logger level from the ``logging`` config section."""
    logger = logging.getLogger(name)
    logger.setLevel(resolve_level(logging_cfg.get("level", "INFO")))
    return logger


def create_console_logger(
    name: str = PACKAGE_LOGGER,
    level=None,
    use_colors: bool = True,
    stream=None,
) -> logging.Logger:
    """
    Send a logger's records to the console.

    Parameters
    ----------
    name : str
        Logger name; the default covers every library module.
    level : int | str, optional
        Level to set. When omitted the current level is kept, so a level
        applied by ``load_config`` stays in effect.
    use_colors : bool
        Colour level names on terminals (default: True).
    stream : file-like, optional
        Output stream, stdout by default.

    Returns
    -------
    logging.Logger
        The configured logger.
    """
    logger = logging.getLogger(name)
    if level is not None:
        logger.setLevel(resolve_level(level))

    if not any(isinstance(h, logging.StreamHandler) for h in logger.handlers):
        stream = stream or sys.stdout
        handler = logging.StreamHandler(stream)
        handler.setFormatter(ColoredFormatter(use_colors=use_colors, stream=stream))
        logger.addHandler(handler)
        logger.propagate = False

    return logger
