import re

from .models import TargetFormat

_TRAILING_EXTENSION = re.compile(r'\.[^.]+$')


def output_name(original: str, target) -> str:
    """
    Derive the download name for a converted file.

    The last dot-suffix of ``original`` is replaced by the canonical
    extension of ``target`` ("jpeg" becomes "jpg").

    >>> output_name("photo.png", "jpeg")
    'photo.jpg'
    >>> output_name("a.b.c.gif", "webp")
    'a.b.c.webp'
    """
    target = TargetFormat.parse(target)
    base = _TRAILING_EXTENSION.sub("", original or "")
    return f"{base}.{target.extension}"
