"""
Composition of extractors into a fallback chain.
"""
import logging
from typing import Callable, Dict, List, Optional, Sequence, TextIO

from .base import ProcfileExtractor
from .cmd_extractor import CMDExtractor
from .errors import NoSuitableExtractorError, is_not_found
from .file_extractor import FileExtractor
from ..REGISTRY.image_reference import ImageReference
from ..RUNTIME.context import Context
from ..RUNTIME.runtime_client import RuntimeClient

logger = logging.getLogger(__name__)

DEFAULT_EXTRACTORS = ["file", "cmd"]

EXTRACTORS: Dict[str, Callable[[RuntimeClient], ProcfileExtractor]] = {
    "file": FileExtractor,
    "cmd": CMDExtractor,
}


class MultiExtractor(ProcfileExtractor):
    """
    Tries multiple extractors in order until one succeeds.

    A "not found" error moves on to the next extractor; any other error is
    raised immediately and later extractors are never run.
    """

    def __init__(self, extractors: Sequence[ProcfileExtractor]):
        self.extractors = list(extractors)

    def extract(self, ctx: Context, image: ImageReference, output: Optional[TextIO] = None) -> bytes:
        for extractor in self.extractors:
            try:
                return extractor.extract(ctx, image, output)
            except Exception as e:
                if not is_not_found(e):
                    raise
                logger.info(f"{type(extractor).__name__} found no Procfile in {image}, trying next")

        raise NoSuitableExtractorError()


def build_extractor(client: RuntimeClient, names: Optional[List[str]] = None) -> MultiExtractor:
    """
    Builds a fallback chain from extractor names.

    Args:
        client: Runtime client handed to every extractor.
        names: Extractor names in the order to try them. Defaults to
            DEFAULT_EXTRACTORS.

    Returns:
        MultiExtractor over the named extractors.
    """
    if names is None:
        names = DEFAULT_EXTRACTORS

    extractors = []
    for name in names:
        factory = EXTRACTORS.get(name)
        if factory is None:
            raise ValueError(f"Unknown extractor {name!r}, expected one of: {', '.join(EXTRACTORS)}")
        extractors.append(factory(client))
    return MultiExtractor(extractors)
