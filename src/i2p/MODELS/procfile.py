"""
Models for the two Procfile shapes.

Standard:

    web: rails server
    worker: sidekiq

Extended:

    web:
      command:
      - /go/bin/app
      - server
"""
from typing import Annotated, Dict, List, Literal, Union
from pydantic import BaseModel, Field


class ShellCommand(BaseModel):
    """
    A command written as one shell-style string, tokenized when mapped.
    """
    kind: Literal["shell"] = "shell"
    line: str


class ExecCommand(BaseModel):
    """
    A command written as a list of arguments, used verbatim.
    """
    kind: Literal["exec"] = "exec"
    argv: List[str]


ProcessCommand = Annotated[Union[ShellCommand, ExecCommand], Field(discriminator="kind")]


class ExtendedProcess(BaseModel):
    """
    A process entry of an extended Procfile.
    """
    command: ProcessCommand


class StandardProcfile(BaseModel):
    """
    Procfile mapping each process name to a single command string.
    """
    processes: Dict[str, str] = {}


class ExtendedProcfile(BaseModel):
    """
    Procfile mapping each process name to a structured process entry.
    """
    processes: Dict[str, ExtendedProcess] = {}


Procfile = Union[StandardProcfile, ExtendedProcfile]
