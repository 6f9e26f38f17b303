"""
Models for the Formation: the process types an application can run.
"""
from typing import Dict, List
from pydantic import BaseModel

# Ordered argv, first token is the executable.
Command = List[str]


class Process(BaseModel):
    """
    A single process type and the command that launches it.
    """
    command: Command


# Process name -> process definition.
Formation = Dict[str, Process]
