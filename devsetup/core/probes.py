"""
Detection probes reporting whether a tool is already installed.

Probes only query the system; they never change it.
"""

import shutil
from pathlib import Path
from typing import List, Optional, Sequence

from ..integrations.command_runner import CommandRunner
from ..models.tool import DetectProbe


class CommandProbe(DetectProbe):
    """Present when an executable can be found on the search path."""

    def __init__(self, command: str):
        self.command = command

    def is_present(self) -> bool:
        return shutil.which(self.command) is not None

    def describe(self) -> str:
        return f"command -v {self.command}"


class PathProbe(DetectProbe):
    """Present when a file exists at a well-known location."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def is_present(self) -> bool:
        return self.path.exists()

    def describe(self) -> str:
        return f"test -e {self.path}"


class CommandSucceedsProbe(DetectProbe):
    """Present when a read-only query command exits 0."""

    def __init__(self, command: Sequence[str], runner: Optional[CommandRunner] = None, timeout: float = 30):
        self.command: List[str] = list(command)
        self.runner = runner or CommandRunner()
        self.timeout = timeout

    def is_present(self) -> bool:
        return self.runner.succeeds(self.command, timeout=self.timeout)

    def describe(self) -> str:
        return " ".join(self.command)


class AnyProbe(DetectProbe):
    """Present when any of the wrapped probes reports presence."""

    def __init__(self, *probes: DetectProbe):
        if not probes:
            raise ValueError("AnyProbe needs at least one probe")
        self.probes = probes

    def is_present(self) -> bool:
        return any(probe.is_present() for probe in self.probes)

    def describe(self) -> str:
        return " || ".join(probe.describe() for probe in self.probes)
