"""
Base interface for Procfile extractors.
"""
from abc import ABC, abstractmethod
from typing import Callable, Optional, TextIO

from ..REGISTRY.image_reference import ImageReference
from ..RUNTIME.context import Context


class ProcfileExtractor(ABC):
    """
    Something that can derive the raw bytes of a Procfile from an image.

    Implementations raise ProcfileNotFoundError when their method finds no
    Procfile, and any other exception when something is actually broken.
    """

    @abstractmethod
    def extract(self, ctx: Context, image: ImageReference, output: Optional[TextIO] = None) -> bytes:
        """
        Extract a Procfile from an image.

        Args:
            ctx: Cancellation context for the call.
            image: The image to inspect.
            output: Optional stream for human-readable progress messages.

        Returns:
            The raw Procfile content.
        """

    def _progress(self, output: Optional[TextIO], message: str) -> None:
        if output is not None:
            output.write(message + "\n")


class ExtractorFunc(ProcfileExtractor):
    """
    Adapts a plain function to the ProcfileExtractor interface.
    """

    def __init__(self, fn: Callable[[Context, ImageReference, Optional[TextIO]], bytes]):
        self.fn = fn

    def extract(self, ctx: Context, image: ImageReference, output: Optional[TextIO] = None) -> bytes:
        return self.fn(ctx, image, output)
