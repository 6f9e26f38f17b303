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
Container runtime client used by the Procfile extractors.

RuntimeClient names the five operations the extractors need. DockerRuntimeClient
implements them over the Docker Engine API using the low-level docker.APIClient.
"""

import io
import logging
from abc import ABC, abstractmethod
from typing import Any, BinaryIO, Dict, Optional

import docker

from .context import Context
from ..MODELS.container_image import ContainerInspection, ImageInspection

logger = logging.getLogger(__name__)


class RuntimeClient(ABC):
    """
    Operations on a container runtime. Implementations must be safe to share
    between concurrent extraction calls.
    """

    @abstractmethod
    def inspect_image(self, ctx: Context, image: str) -> ImageInspection:
        """Returns the configuration of an image."""

    @abstractmethod
    def create_container(self, ctx: Context, image: str) -> str:
        """Creates (does not start) a container from an image and returns its id."""

    @abstractmethod
    def inspect_container(self, ctx: Context, container_id: str) -> ContainerInspection:
        """Returns the configuration of a container."""

    @abstractmethod
    def copy_from_container(self, ctx: Context, container_id: str, path: str) -> BinaryIO:
        """Returns a tar archive stream holding ``path`` from the container."""

    @abstractmethod
    def remove_container(self, ctx: Context, container_id: str) -> None:
        """Removes a container."""


class DockerRuntimeClient(RuntimeClient):
    """
    RuntimeClient backed by a Docker daemon.
    """

    def __init__(self, api: Optional[docker.APIClient] = None):
        """
        Initialize the client.

        Args:
            api: Low-level Docker API client. Defaults to one built from the
                environment (DOCKER_HOST, DOCKER_TLS_VERIFY, DOCKER_CERT_PATH).
        """
        self.api = api or docker.from_env().api

    @classmethod
    def from_settings(cls, settings) -> "DockerRuntimeClient":
        """
        Build a client from ExtractorSettings.
        """
        if settings.docker_host:
            api = docker.APIClient(base_url=settings.docker_host, timeout=settings.docker_timeout)
        else:
            api = docker.from_env(timeout=settings.docker_timeout).api
        return cls(api)

    def _call(self, ctx: Context, fn, *args, **kwargs) -> Any:
        ctx.check()
        result = fn(*args, **kwargs)
        ctx.check()
        return result

    def inspect_image(self, ctx: Context, image: str) -> ImageInspection:
        data = self._call(ctx, self.api.inspect_image, image)
        config: Dict[str, Any] = data.get("Config") or {}
        return ImageInspection(
            id=data.get("Id", ""),
            cmd=config.get("Cmd") or [],
            entrypoint=config.get("Entrypoint") or [],
            working_dir=config.get("WorkingDir") or None,
            labels=config.get("Labels") or {},
        )

    def create_container(self, ctx: Context, image: str) -> str:
        # No check after the call: once the container exists its id must reach
        # the caller so it can be removed.
        ctx.check()
        data = self.api.create_container(image=image)
        container_id = data["Id"]
        logger.debug(f"Created container {container_id[:12]} from {image}")
        return container_id

    def inspect_container(self, ctx: Context, container_id: str) -> ContainerInspection:
        data = self._call(ctx, self.api.inspect_container, container_id)
        config: Dict[str, Any] = data.get("Config") or {}
        return ContainerInspection(
            id=data.get("Id", container_id),
            image=config.get("Image", ""),
            working_dir=config.get("WorkingDir") or None,
        )

    def copy_from_container(self, ctx: Context, container_id: str, path: str) -> BinaryIO:
        ctx.check()
        stream, _ = self.api.get_archive(container_id, path)
        buf = io.BytesIO()
        try:
            ctx.check()
            for chunk in stream:
                ctx.check()
                buf.write(chunk)
        finally:
            close = getattr(stream, "close", None)
            if close is not None:
                close()
        buf.seek(0)
        return buf

    def remove_container(self, ctx: Context, container_id: str) -> None:
        # Teardown runs even after the context is cancelled.
        self.api.remove_container(container_id)
        logger.debug(f"Removed container {container_id[:12]}")
