"""
Unit tests for DockerRuntimeClient against a stub Docker API.
"""
import pytest
from i2p.EXTRACTORS.errors import ExtractionCancelled
from i2p.EXTRACTORS.file_extractor import FileExtractor
from i2p.REGISTRY.image_reference import ImageReference
from i2p.RUNTIME.context import Context
from i2p.RUNTIME.runtime_client import DockerRuntimeClient


class ClosableStream:
    """Chunk iterator that records whether it was closed."""

    def __init__(self, chunks, on_chunk=None):
        self.chunks = chunks
        self.on_chunk = on_chunk
        self.closed = False

    def __iter__(self):
        for chunk in self.chunks:
            if self.on_chunk:
                self.on_chunk()
            yield chunk

    def close(self):
        self.closed = True


class StubAPI:
    """Stands in for docker.APIClient."""

    def __init__(self, image=None, container=None, chunks=None):
        self.image = image if image is not None else {}
        self.container = container if container is not None else {}
        self.stream = ClosableStream(chunks or [])
        self.created = []
        self.removed = []
        self.on_create = None

    def inspect_image(self, image):
        return self.image

    def create_container(self, image):
        container_id = f"abc123{len(self.created)}"
        self.created.append(container_id)
        if self.on_create:
            self.on_create()
        return {"Id": container_id}

    def inspect_container(self, container_id):
        return self.container

    def get_archive(self, container_id, path):
        return self.stream, {"name": path}

    def remove_container(self, container_id):
        self.removed.append(container_id)


class TestDockerRuntimeClient:
    """Tests for DockerRuntimeClient."""

    def test_inspect_image_maps_config(self):
        api = StubAPI(image={
            "Id": "sha256:123",
            "Config": {"Cmd": ["/go/bin/app", "server"], "WorkingDir": "/app", "Labels": None},
        })
        inspection = DockerRuntimeClient(api).inspect_image(Context.background(), "acme/app:v1")
        assert inspection.id == "sha256:123"
        assert inspection.cmd == ["/go/bin/app", "server"]
        assert inspection.working_dir == "/app"
        assert inspection.labels == {}

    def test_inspect_image_without_config(self):
        inspection = DockerRuntimeClient(StubAPI(image={"Config": None})).inspect_image(
            Context.background(), "acme/app:v1")
        assert inspection.cmd == []
        assert inspection.entrypoint == []
        assert inspection.working_dir is None

    def test_inspect_container_empty_working_dir(self):
        api = StubAPI(container={"Id": "abc", "Config": {"Image": "acme/app:v1", "WorkingDir": ""}})
        inspection = DockerRuntimeClient(api).inspect_container(Context.background(), "abc")
        assert inspection.working_dir is None
        assert inspection.image == "acme/app:v1"

    def test_inspect_container_without_config(self):
        inspection = DockerRuntimeClient(StubAPI(container={"Config": None})).inspect_container(
            Context.background(), "abc")
        assert inspection.id == "abc"
        assert inspection.working_dir is None

    def test_copy_joins_chunks_and_rewinds(self):
        api = StubAPI(chunks=[b"part one, ", b"part two"])
        buf = DockerRuntimeClient(api).copy_from_container(Context.background(), "abc", "Procfile")
        assert buf.read() == b"part one, part two"
        assert api.stream.closed

    def test_copy_closes_stream_on_cancellation(self):
        ctx = Context.background()
        api = StubAPI(chunks=[b"a", b"b"])
        api.stream.on_chunk = ctx.cancel
        with pytest.raises(ExtractionCancelled):
            DockerRuntimeClient(api).copy_from_container(ctx, "abc", "Procfile")
        assert api.stream.closed

    def test_remove_ignores_cancelled_context(self):
        ctx = Context.background()
        ctx.cancel()
        api = StubAPI()
        DockerRuntimeClient(api).remove_container(ctx, "abc")
        assert api.removed == ["abc"]

    def test_create_refuses_cancelled_context(self):
        ctx = Context.background()
        ctx.cancel()
        api = StubAPI()
        with pytest.raises(ExtractionCancelled):
            DockerRuntimeClient(api).create_container(ctx, "acme/app:v1")
        assert api.created == []

    def test_container_cancelled_during_create_is_removed(self):
        ctx = Context.background()
        api = StubAPI()
        api.on_create = ctx.cancel
        extractor = FileExtractor(DockerRuntimeClient(api))
        with pytest.raises(ExtractionCancelled):
            extractor.extract(ctx, ImageReference.parse("acme/app:v1"))
        assert api.created == ["abc1230"]
        assert api.removed == api.created
