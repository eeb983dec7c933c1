"""
Error taxonomy for the conversion pipeline.

Every error carries a ``user_message`` that can be shown as-is to the end
user. All of them are terminal for the current attempt: the caller has to
pick another file or change the settings and try again.
"""


class ImageConversionError(Exception):
    """Base class for all errors raised by pyimgconv."""

    user_message = "Conversion error."

    def __init__(self, message: str = None):
        super().__init__(message or self.user_message)


class UnsupportedInputKind(ImageConversionError):
    """The selected file is not recognised as an image."""

    user_message = "Please select an image file (PNG, JPG, WEBP, or SVG)."


class DecodeFailure(ImageConversionError):
    """The source bytes could not be decoded into a drawable surface."""

    user_message = "Could not read the image. Try a different file."


class ConversionError(ImageConversionError):
    """The render/encode pipeline produced no usable output."""

    user_message = "Conversion failed. Please try a different image or format."
