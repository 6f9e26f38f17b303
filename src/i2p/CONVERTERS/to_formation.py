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
Converts parsed Procfiles into Formations.
"""
from typing import Any

from ..EXTRACTORS.errors import ProcfileNotFoundError, UnknownCommandFormatError, CommandParseError
from ..MODELS.formation import Command, Formation, Process
from ..MODELS.procfile import ExecCommand, ExtendedProcfile, ShellCommand, StandardProcfile
from ..PARSERS.command_parser import parse_command


def formation_from_procfile(procfile: Any) -> Formation:
    """
    Builds a Formation from either Procfile shape.

    The whole mapping fails on the first bad command; a partial Formation is
    never returned.

    :param procfile: A StandardProcfile or an ExtendedProcfile.
    :return: Process name -> Process.
    :raises ProcfileNotFoundError: If the Procfile is of neither shape.
    """
    if isinstance(procfile, StandardProcfile):
        return formation_from_standard_procfile(procfile)
    if isinstance(procfile, ExtendedProcfile):
        return formation_from_extended_procfile(procfile)
    raise ProcfileNotFoundError("unknown Procfile format")


def formation_from_standard_procfile(procfile: StandardProcfile) -> Formation:
    formation: Formation = {}
    for name, command in procfile.processes.items():
        formation[name] = Process(command=parse_command(command))
    return formation


def formation_from_extended_procfile(procfile: ExtendedProcfile) -> Formation:
    formation: Formation = {}
    for name, process in procfile.processes.items():
        formation[name] = Process(command=_command(name, process.command))
    return formation


def _command(name: str, command: Any) -> Command:
    if isinstance(command, ShellCommand):
        return parse_command(command.line)
    if isinstance(command, ExecCommand):
        # Used verbatim, never re-tokenized.
        if not command.argv:
            raise CommandParseError(f"empty command for process {name!r}")
        return list(command.argv)
    raise UnknownCommandFormatError(name)
