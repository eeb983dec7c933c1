from abc import ABC, abstractmethod

from ..models import ConversionResult, SourceImage, TargetFormat, TargetSpec
from ..utils import get_library_logger


class IFormatHandler(ABC):
    """One conversion strategy per target format."""

    target: TargetFormat = None

    def __init__(self, logger=None):
        self.logger = logger or get_library_logger(__name__)

    @abstractmethod
    def process(self, source: SourceImage, spec: TargetSpec) -> ConversionResult:
        pass

    def __call__(self, source: SourceImage, spec: TargetSpec) -> ConversionResult:
        return self.process(source, spec)
