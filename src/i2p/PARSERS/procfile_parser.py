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
Parser and serializer for Procfiles.

Both shapes are YAML documents. A mapping whose values are all scalars is a
standard Procfile; a mapping of process entries with a ``command`` key is an
extended Procfile. Standard Procfiles that are not valid YAML (for instance a
command containing ``": "``) are read line by line instead.
"""
import re
from typing import Any, Dict, Union

import yaml

from ..MODELS.procfile import (
    ExecCommand,
    ExtendedProcess,
    ExtendedProcfile,
    Procfile,
    ShellCommand,
    StandardProcfile,
)
from ..EXTRACTORS.errors import ProcfileNotFoundError, UnknownCommandFormatError

# name: command
LINE_PATTERN = re.compile(r"^([A-Za-z0-9_.-]+):\s*(.+?)\s*$")

# YAML values a standard Procfile accepts as commands.
SCALARS = (str, int, float, bool)


class ProcfileParser:
    """
    Parser for Procfile content.
    """

    def parse(self, procfile_path: str) -> Procfile:
        """
        Parses a Procfile from a file path.

        :param procfile_path: Path to the Procfile.
        :return: The parsed Procfile.
        """
        with open(procfile_path, "rb") as f:
            content = f.read()
        return self.parse_from_bytes(content)

    def parse_from_bytes(self, content: Union[bytes, str]) -> Procfile:
        """
        Parses a Procfile from raw content.

        :param content: Procfile content.
        :return: A StandardProcfile or an ExtendedProcfile.
        :raises ProcfileNotFoundError: If the content is neither shape.
        :raises UnknownCommandFormatError: If a process command is malformed.
        """
        if isinstance(content, bytes):
            try:
                content = content.decode("utf-8")
            except UnicodeDecodeError as e:
                raise ProcfileNotFoundError(f"unknown Procfile format: {e}") from e

        try:
            data = yaml.safe_load(content)
        except (yaml.YAMLError, ValueError):
            # ValueError: PyYAML on impossible implicit dates such as 2001-13-45
            return self._parse_lines(content)

        if not isinstance(data, dict) or not data:
            raise ProcfileNotFoundError("unknown Procfile format")

        if all(isinstance(v, SCALARS) for v in data.values()):
            return self._standard(content, data)

        processes = {}
        for name, entry in data.items():
            processes[str(name)] = self._parse_process(str(name), entry)
        return ExtendedProcfile(processes=processes)

    def _parse_process(self, name: str, entry: Any) -> ExtendedProcess:
        """
        Parses a single extended process entry, resolving its command shape.
        """
        if isinstance(entry, str):
            return ExtendedProcess(command=ShellCommand(line=entry))
        if not isinstance(entry, dict):
            raise UnknownCommandFormatError(name)

        command = entry.get("command")
        if isinstance(command, str):
            return ExtendedProcess(command=ShellCommand(line=command))
        if isinstance(command, list) and all(isinstance(arg, str) for arg in command):
            return ExtendedProcess(command=ExecCommand(argv=command))
        raise UnknownCommandFormatError(name)

    def _standard(self, content: str, data: Dict[Any, Any]) -> StandardProcfile:
        """
        Builds a standard Procfile. Non-string scalars (`web: 8080`,
        `release: true`) keep their text as written in the file.
        """
        raw = {}
        for line in content.splitlines():
            match = LINE_PATTERN.match(line.strip())
            if match:
                raw[match.group(1)] = match.group(2)

        processes = {}
        for name, value in data.items():
            name = str(name)
            if isinstance(value, str):
                processes[name] = value
            else:
                processes[name] = raw.get(name, str(value))
        return StandardProcfile(processes=processes)

    def _parse_lines(self, content: str) -> StandardProcfile:
        """
        Reads a standard Procfile line by line.
        """
        processes: Dict[str, str] = {}
        for line in content.splitlines():
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            match = LINE_PATTERN.match(line)
            if not match:
                raise ProcfileNotFoundError(f"unknown Procfile format: invalid line {line!r}")
            processes[match.group(1)] = match.group(2)

        if not processes:
            raise ProcfileNotFoundError("unknown Procfile format")
        return StandardProcfile(processes=processes)


def parse_procfile(content: Union[bytes, str]) -> Procfile:
    """Parses raw Procfile content with a default parser."""
    return ProcfileParser().parse_from_bytes(content)


def marshal_procfile(procfile: Procfile) -> bytes:
    """
    Serializes a Procfile so that parse_procfile reads back the same shape.

    Extended Procfiles are written as block-style YAML::

        web:
          command:
          - /go/bin/app
          - server
    """
    if isinstance(procfile, StandardProcfile):
        return _dump(dict(procfile.processes))

    if isinstance(procfile, ExtendedProcfile):
        data = {}
        for name, process in procfile.processes.items():
            command = process.command
            if isinstance(command, ExecCommand):
                data[name] = {"command": list(command.argv)}
            else:
                data[name] = {"command": command.line}
        return _dump(data)

    raise TypeError(f"cannot marshal {type(procfile).__name__}")


def _dump(data: Dict[str, Any]) -> bytes:
    return yaml.safe_dump(
        data, default_flow_style=False, sort_keys=False, width=float("inf")
    ).encode("utf-8")
