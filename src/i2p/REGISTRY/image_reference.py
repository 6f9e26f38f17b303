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
Image reference parsing and handling.
Parses image references like 'nginx:latest' or 'docker.io/library/nginx:1.21'.
"""

from typing import Optional
from dataclasses import dataclass


@dataclass(frozen=True)
class ImageReference:
    """
    Parsed image reference.

    Examples:
        - nginx -> docker.io/library/nginx:latest
        - nginx:1.21 -> docker.io/library/nginx:1.21
        - myuser/myimage:v1 -> docker.io/myuser/myimage:v1
        - gcr.io/project/image@sha256:abc123... -> gcr.io/project/image@sha256:abc123...
    """

    registry: str
    repository: str
    tag: Optional[str] = None
    digest: Optional[str] = None

    DEFAULT_REGISTRY = "docker.io"
    DEFAULT_TAG = "latest"

    @classmethod
    def parse(cls, reference: str) -> "ImageReference":
        """
        Parse an image reference string.

        Args:
            reference: Image reference string (e.g., 'nginx:latest', 'myuser/myimage:v1')

        Returns:
            Parsed ImageReference object.
        """
        if not reference or not reference.strip():
            raise ValueError("Empty image reference")
        reference = reference.strip()

        digest = None
        if "@" in reference:
            reference, digest = reference.rsplit("@", 1)

        tag = None
        last_colon = reference.rfind(":")
        if last_colon != -1:
            after_colon = reference[last_colon + 1 :]
            # localhost:5000/image has a port, not a tag
            if "/" not in after_colon:
                tag = after_colon
                reference = reference[:last_colon]

        if not reference or (tag is not None and not tag):
            raise ValueError(f"Invalid image reference: {reference!r}")

        parts = reference.split("/")

        if len(parts) == 1:
            registry = cls.DEFAULT_REGISTRY
            repository = f"library/{parts[0]}"
        else:
            first_part = parts[0]
            if "." in first_part or ":" in first_part or first_part == "localhost":
                registry = first_part
                repository = "/".join(parts[1:])
            else:
                registry = cls.DEFAULT_REGISTRY
                repository = reference

        if not tag and not digest:
            tag = cls.DEFAULT_TAG

        return cls(registry=registry, repository=repository, tag=tag, digest=digest)

    @property
    def full_name(self) -> str:
        """Get full image name with registry."""
        name = f"{self.registry}/{self.repository}"
        if self.digest:
            return f"{name}@{self.digest}"
        if self.tag:
            return f"{name}:{self.tag}"
        return name

    @property
    def short_name(self) -> str:
        """Get short image name (without registry if default)."""
        if self.registry == self.DEFAULT_REGISTRY:
            repo = self.repository
            # Official images drop the 'library/' prefix
            if repo.startswith("library/"):
                repo = repo[8:]
            if self.digest:
                return f"{repo}@{self.digest}"
            if self.tag:
                return f"{repo}:{self.tag}"
            return repo
        return self.full_name

    def __str__(self) -> str:
        return self.short_name

    def __repr__(self) -> str:
        return f"ImageReference({self.full_name})"
