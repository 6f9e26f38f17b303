"""
Shared fixtures: an in-memory runtime client and tar archive helpers.
"""
import io
import tarfile

import pytest

from i2p.MODELS.container_image import ContainerInspection, ImageInspection
from i2p.RUNTIME.runtime_client import RuntimeClient


def make_tar(*entries):
    """Builds a tar archive from (name, content) pairs."""
    buf = io.BytesIO()
    with tarfile.open(fileobj=buf, mode="w") as tar:
        for name, content in entries:
            info = tarfile.TarInfo(name=name)
            info.size = len(content)
            tar.addfile(info, io.BytesIO(content))
    return buf.getvalue()


class FakeRuntimeClient(RuntimeClient):
    """
    RuntimeClient that serves files from a dict and records every call.
    """

    def __init__(self, cmd=None, working_dir=None, files=None, errors=None):
        self.cmd = cmd or []
        self.working_dir = working_dir
        self.files = files or {}
        self.errors = errors or {}
        self.calls = []
        self.containers = set()
        self._next_id = 0

    def _record(self, op, *args):
        self.calls.append((op,) + args)
        if op in self.errors:
            raise self.errors[op]

    def ops(self):
        return [call[0] for call in self.calls]

    def inspect_image(self, ctx, image):
        ctx.check()
        self._record("inspect_image", image)
        return ImageInspection(id="sha256:fake", cmd=self.cmd, working_dir=self.working_dir)

    def create_container(self, ctx, image):
        ctx.check()
        self._record("create_container", image)
        self._next_id += 1
        container_id = f"container{self._next_id:02d}"
        self.containers.add(container_id)
        return container_id

    def inspect_container(self, ctx, container_id):
        ctx.check()
        self._record("inspect_container", container_id)
        return ContainerInspection(id=container_id, working_dir=self.working_dir)

    def copy_from_container(self, ctx, container_id, path):
        ctx.check()
        self._record("copy_from_container", container_id, path)
        if path not in self.files:
            raise FileNotFoundError(f"Could not find the file {path} in container {container_id}")
        name = path.rsplit("/", 1)[-1]
        return io.BytesIO(make_tar((name, self.files[path])))

    def remove_container(self, ctx, container_id):
        self._record("remove_container", container_id)
        self.containers.discard(container_id)


@pytest.fixture
def fake_client():
    """Factory for FakeRuntimeClient instances."""
    return FakeRuntimeClient


@pytest.fixture
def tar_bytes():
    return make_tar
