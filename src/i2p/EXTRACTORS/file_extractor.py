# Copyright 2024 Michael Maillet, Damien Davison, Sacha Davison
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Extractor that reads the Procfile out of the image's working directory.
"""

import logging
import posixpath
from typing import Optional, TextIO

from .base import ProcfileExtractor
from .errors import ExtractionCancelled, ProcfileNotFoundError
from ..REGISTRY.image_reference import ImageReference
from ..RUNTIME.context import Context
from ..RUNTIME.runtime_client import RuntimeClient
from ..UTILS.archive import first_file

logger = logging.getLogger(__name__)

PROCFILE_NAME = "Procfile"


class FileExtractor(ProcfileExtractor):
    """
    Extracts the Procfile from the image's WORKDIR.

    A container is created (never started) from the image so the file can be
    copied out of it, and is removed again before extract() returns.
    """

    def __init__(self, client: RuntimeClient, filename: str = PROCFILE_NAME):
        """
        Initializes the extractor.

        :param client: Runtime client used to create, inspect and remove containers.
        :param filename: Name of the Procfile inside the working directory.
        """
        self.client = client
        self.filename = filename

    def extract(self, ctx: Context, image: ImageReference, output: Optional[TextIO] = None) -> bytes:
        """
        Copies the Procfile out of a throwaway container.

        Errors creating or inspecting the container propagate as they are.
        Any error while copying or reading the file is raised as
        ProcfileNotFoundError, except cancellation.
        """
        container_id = self.client.create_container(ctx, str(image))
        try:
            path = self._procfile_path(ctx, container_id)
            self._progress(output, f"Looking for {path} in {image}")

            try:
                return self._copy_file(ctx, container_id, path)
            except ExtractionCancelled:
                raise
            except Exception as e:
                logger.info(f"No Procfile at {path} in {image}: {e}")
                raise ProcfileNotFoundError(e) from e
        finally:
            self._remove_container(ctx, container_id)

    def _procfile_path(self, ctx: Context, container_id: str) -> str:
        """
        Returns the path to the Procfile, inside the container's WORKDIR when
        one is set.
        """
        container = self.client.inspect_container(ctx, container_id)
        return posixpath.join(container.working_dir or "", self.filename)

    def _copy_file(self, ctx: Context, container_id: str, path: str) -> bytes:
        stream = self.client.copy_from_container(ctx, container_id, path)
        try:
            return first_file(stream)
        finally:
            stream.close()

    def _remove_container(self, ctx: Context, container_id: str) -> None:
        """
        Removes the container. Failures are logged, never raised, so they do
        not replace the result of the extraction.
        """
        try:
            self.client.remove_container(ctx, container_id)
        except Exception:
            logger.warning(f"Failed to remove container {container_id[:12]}", exc_info=True)
