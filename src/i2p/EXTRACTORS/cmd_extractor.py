"""
Extractor that derives a Procfile from the image's CMD directive.
"""
import logging
from typing import Optional, TextIO

from .base import ProcfileExtractor
from ..MODELS.procfile import ExecCommand, ExtendedProcess, ExtendedProcfile
from ..PARSERS.procfile_parser import marshal_procfile
from ..REGISTRY.image_reference import ImageReference
from ..RUNTIME.context import Context
from ..RUNTIME.runtime_client import RuntimeClient

logger = logging.getLogger(__name__)

# Process name given to the image's CMD.
WEB_PROCESS = "web"


class CMDExtractor(ProcfileExtractor):
    """
    Returns a Procfile with a single "web" process running the image's CMD.

    This extractor always produces a Procfile; it never reports "not found".
    Errors from the runtime propagate unchanged.
    """

    def __init__(self, client: RuntimeClient):
        self.client = client

    def extract(self, ctx: Context, image: ImageReference, output: Optional[TextIO] = None) -> bytes:
        inspection = self.client.inspect_image(ctx, str(image))
        logger.debug(f"Using CMD {inspection.cmd} of {image} as the web process")
        self._progress(output, f"Using CMD of {image} as the {WEB_PROCESS} process")

        return marshal_procfile(ExtendedProcfile(processes={
            WEB_PROCESS: ExtendedProcess(command=ExecCommand(argv=list(inspection.cmd))),
        }))
