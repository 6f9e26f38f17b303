"""
Parser for shell-style command strings.
"""
import shlex
from typing import List

from ..EXTRACTORS.errors import CommandParseError


def parse_command(command: str) -> List[str]:
    """
    Splits a command string into argv using POSIX shell quoting rules.

    Args:
        command (str): Command such as ``bundle exec rails server -p "$PORT"``.

    Returns:
        List[str]: The command tokens. Variables are not expanded.
    """
    try:
        argv = shlex.split(command, comments=False, posix=True)
    except ValueError as e:
        raise CommandParseError(f"invalid command {command!r}: {e}") from e
    if not argv:
        raise CommandParseError("empty command")
    return argv
