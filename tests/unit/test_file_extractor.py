"""
Unit tests for the FileExtractor.
"""
import io

import pytest
from i2p.CONVERTERS.to_formation import formation_from_procfile
from i2p.EXTRACTORS.errors import ErrorKind, ExtractionCancelled, ProcfileNotFoundError
from i2p.EXTRACTORS.file_extractor import FileExtractor
from i2p.MODELS.formation import Process
from i2p.PARSERS.procfile_parser import parse_procfile
from i2p.REGISTRY.image_reference import ImageReference
from i2p.RUNTIME.context import Context

IMAGE = ImageReference.parse("remind101/acme-inc:latest")


class TestFileExtractor:
    """Tests for FileExtractor."""

    def test_procfile_at_root(self, fake_client):
        client = fake_client(files={"Procfile": b"web: rails server"})
        raw = FileExtractor(client).extract(Context.background(), IMAGE)

        assert raw == b"web: rails server"
        formation = formation_from_procfile(parse_procfile(raw))
        assert formation == {"web": Process(command=["rails", "server"])}

    def test_procfile_in_working_dir(self, fake_client):
        client = fake_client(working_dir="/app", files={"/app/Procfile": b"worker: ./work"})
        raw = FileExtractor(client).extract(Context.background(), IMAGE)

        assert raw == b"worker: ./work"
        assert ("copy_from_container", "container01", "/app/Procfile") in client.calls

    def test_phase_order(self, fake_client):
        client = fake_client(files={"Procfile": b"web: x"})
        FileExtractor(client).extract(Context.background(), IMAGE)
        assert client.ops() == [
            "create_container",
            "inspect_container",
            "copy_from_container",
            "remove_container",
        ]
        assert client.calls[0] == ("create_container", "remind101/acme-inc:latest")

    def test_missing_procfile_is_not_found(self, fake_client):
        client = fake_client(files={})
        with pytest.raises(ProcfileNotFoundError) as exc:
            FileExtractor(client).extract(Context.background(), IMAGE)

        assert exc.value.kind == ErrorKind.NOT_FOUND
        assert isinstance(exc.value.__cause__, FileNotFoundError)
        assert client.ops().count("remove_container") == 1
        assert client.containers == set()

    def test_empty_archive_is_not_found(self, fake_client):
        client = fake_client()
        client.copy_from_container = lambda ctx, cid, path: io.BytesIO(b"")
        with pytest.raises(ProcfileNotFoundError, match="no entries"):
            FileExtractor(client).extract(Context.background(), IMAGE)
        assert client.ops().count("remove_container") == 1

    def test_create_failure_propagates_without_removal(self, fake_client):
        client = fake_client(errors={"create_container": RuntimeError("no such image")})
        with pytest.raises(RuntimeError, match="no such image"):
            FileExtractor(client).extract(Context.background(), IMAGE)
        assert "remove_container" not in client.ops()

    def test_inspect_failure_is_hard_and_removes(self, fake_client):
        client = fake_client(errors={"inspect_container": ConnectionError("daemon gone")})
        with pytest.raises(ConnectionError):
            FileExtractor(client).extract(Context.background(), IMAGE)
        assert client.ops().count("remove_container") == 1

    def test_remove_failure_does_not_mask_result(self, fake_client, caplog):
        client = fake_client(
            files={"Procfile": b"web: x"},
            errors={"remove_container": RuntimeError("removal failed")},
        )
        assert FileExtractor(client).extract(Context.background(), IMAGE) == b"web: x"
        assert "Failed to remove container" in caplog.text

    def test_remove_failure_does_not_mask_not_found(self, fake_client):
        client = fake_client(errors={"remove_container": RuntimeError("removal failed")})
        with pytest.raises(ProcfileNotFoundError):
            FileExtractor(client).extract(Context.background(), IMAGE)
        assert client.ops().count("remove_container") == 1

    def test_cancellation_is_not_reclassified(self, fake_client):
        ctx = Context.background()
        client = fake_client(files={"Procfile": b"web: x"})
        inspect = client.inspect_container

        def inspect_then_cancel(c, container_id):
            result = inspect(c, container_id)
            ctx.cancel()
            return result

        client.inspect_container = inspect_then_cancel
        with pytest.raises(ExtractionCancelled):
            FileExtractor(client).extract(ctx, IMAGE)
        assert client.ops().count("remove_container") == 1

    def test_progress_written_to_output(self, fake_client):
        client = fake_client(working_dir="/app", files={"/app/Procfile": b"web: x"})
        output = io.StringIO()
        FileExtractor(client).extract(Context.background(), IMAGE, output)
        assert "/app/Procfile" in output.getvalue()
