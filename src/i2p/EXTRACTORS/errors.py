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
Errors raised while extracting a Procfile from an image.

Every error carries a ``kind``. ``ErrorKind.NOT_FOUND`` means the extractor
that raised it could not find a Procfile by its method, so the next extractor
in a chain may be tried. Anything else, including exceptions that are not
``ExtractionError`` at all, aborts the chain.
"""
from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """
    Classification attached to an extraction error where it is raised.
    """
    NOT_FOUND = "not_found"
    HARD = "hard"


class ExtractionError(Exception):
    """Base class for extraction errors."""

    kind = ErrorKind.HARD


class ProcfileNotFoundError(ExtractionError):
    """
    The Procfile could not be located (or recognised) by an extractor.

    Args:
        cause: The underlying error or a message describing it.
    """

    kind = ErrorKind.NOT_FOUND

    def __init__(self, cause):
        self.cause = cause
        super().__init__(f"Procfile not found: {cause}")


class NoSuitableExtractorError(ProcfileNotFoundError):
    """Every extractor in a chain reported that it found nothing."""

    def __init__(self):
        super().__init__("no suitable Procfile extractor found")


class UnknownCommandFormatError(ExtractionError):
    """A process command was neither a string nor a list of strings."""

    def __init__(self, process: Optional[str] = None):
        self.process = process
        if process:
            super().__init__(f"unknown command format for process {process!r}")
        else:
            super().__init__("unknown command format")


class CommandParseError(ExtractionError):
    """A shell-style command string could not be tokenized."""


class ExtractionCancelled(ExtractionError):
    """The caller's context was cancelled or its deadline passed."""


class ArchiveError(Exception):
    """A file transfer archive could not be read."""


class EmptyArchiveError(ArchiveError):
    """The archive holds no entries."""

    def __init__(self):
        super().__init__("no entries")


def is_not_found(err: BaseException) -> bool:
    """Whether an error tells a chain to move on to the next extractor."""
    return getattr(err, "kind", ErrorKind.HARD) == ErrorKind.NOT_FOUND
