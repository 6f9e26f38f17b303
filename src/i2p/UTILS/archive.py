"""
Utilities for reading file transfer archives returned by the container runtime.
"""
import tarfile
from typing import BinaryIO

from ..EXTRACTORS.errors import ArchiveError, EmptyArchiveError


def first_file(stream: BinaryIO) -> bytes:
    """
    Returns the content of the first entry in a tar stream.

    Only one header is read; any later entries are ignored. Entries that are
    not regular files (directories, links) have no content and yield b"".

    :param stream: Readable binary stream holding a tar archive.
    :return: Content of the first entry.
    :raises EmptyArchiveError: If the archive has no entries.
    :raises ArchiveError: If the stream is not a readable tar archive.
    """
    try:
        with tarfile.open(fileobj=stream, mode="r|") as tar:
            member = tar.next()
            if member is None:
                raise EmptyArchiveError()
            if not member.isfile():
                return b""
            f = tar.extractfile(member)
            if f is None:
                return b""
            return f.read()
    except tarfile.ReadError as e:
        if str(e) == "empty file":
            raise EmptyArchiveError() from e
        raise ArchiveError(f"invalid archive: {e}") from e
    except tarfile.TarError as e:
        raise ArchiveError(f"invalid archive: {e}") from e
