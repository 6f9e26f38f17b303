"""
Resolves the Formation of an image: extract the Procfile, parse it, map it.
"""
import logging
from typing import List, Optional, TextIO, Union

from ..CONVERTERS.to_formation import formation_from_procfile
from ..EXTRACTORS.base import ProcfileExtractor
from ..EXTRACTORS.multi_extractor import build_extractor
from ..MODELS.formation import Formation
from ..PARSERS.procfile_parser import ProcfileParser
from ..REGISTRY.image_reference import ImageReference
from ..RUNTIME.context import Context
from ..RUNTIME.runtime_client import RuntimeClient

logger = logging.getLogger(__name__)


class FormationManager:
    """
    Produces Formations for images using a chain of Procfile extractors.
    """

    def __init__(self, client: RuntimeClient, extractor: Optional[ProcfileExtractor] = None,
                 extractor_names: Optional[List[str]] = None):
        """
        Initializes the manager.

        :param client: Runtime client for the default extractor chain.
        :param extractor: Extractor to use instead of building a chain.
        :param extractor_names: Names of the extractors in the default chain.
        """
        self.client = client
        self.extractor = extractor or build_extractor(client, extractor_names)
        self.parser = ProcfileParser()

    def extract(self, ctx: Context, image: Union[ImageReference, str],
                output: Optional[TextIO] = None) -> Formation:
        """
        Returns the Formation declared by an image.

        :param ctx: Cancellation context for the whole extraction.
        :param image: Image reference, parsed if given as a string.
        :param output: Optional stream for progress messages.
        """
        if isinstance(image, str):
            image = ImageReference.parse(image)

        logger.info(f"Extracting Procfile from {image}")
        raw = self.extractor.extract(ctx, image, output)
        procfile = self.parser.parse_from_bytes(raw)
        formation = formation_from_procfile(procfile)
        logger.info(f"Found processes in {image}: {', '.join(sorted(formation))}")
        return formation
