"""
Shared test fixtures and test doubles.
"""

import io
from typing import List, Optional

import pytest

from devsetup.integrations.command_runner import CommandRunner
from devsetup.models.installation import InstallOutcome
from devsetup.models.tool import DetectProbe, InstallAction, ToolSpec
from devsetup.utils.reporter import StatusReporter


class FakeProbe(DetectProbe):
    """Probe with a scripted answer; flips to present after a successful FakeAction."""

    def __init__(self, present: bool = False, error: Optional[Exception] = None):
        self.present = present
        self.error = error
        self.calls = 0

    def is_present(self) -> bool:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.present


class FakeAction(InstallAction):
    """Install action that records calls and returns a scripted outcome."""

    def __init__(self,
                 success: bool = True,
                 error: Optional[Exception] = None,
                 probe: Optional[FakeProbe] = None,
                 log: Optional[List[str]] = None,
                 name: str = ""):
        self.success = success
        self.error = error
        self.probe = probe
        self.log = log
        self.name = name
        self.calls = 0

    def install(self) -> InstallOutcome:
        self.calls += 1
        if self.log is not None:
            self.log.append(self.name)
        if self.error is not None:
            raise self.error
        if not self.success:
            return InstallOutcome.failed("exit status 1", command=["fake", "install"], return_code=1)
        if self.probe is not None:
            self.probe.present = True
        return InstallOutcome.succeeded(command=["fake", "install"], return_code=0)


class FakeRunner(CommandRunner):
    """CommandRunner that never spawns processes."""

    def __init__(self, available=(), return_code: int = 0, outputs=None):
        super().__init__()
        self.available = set(available)
        self.return_code = return_code
        self.outputs = outputs or {}
        self.commands: List[List[str]] = []

    def which(self, executable: str) -> Optional[str]:
        if executable in self.available:
            return f"/usr/bin/{executable}"
        return None

    def run(self, command, timeout=None) -> InstallOutcome:
        self.commands.append(list(command))
        if self.return_code == 0:
            return InstallOutcome.succeeded(command=list(command), return_code=0)
        return InstallOutcome.failed(
            f"Command exited with code {self.return_code}",
            command=list(command),
            return_code=self.return_code
        )

    def succeeds(self, command, timeout=10) -> bool:
        self.commands.append(list(command))
        return self.return_code == 0

    def output_of(self, command, timeout=10):
        self.commands.append(list(command))
        return self.outputs.get(tuple(command[1:]))


def make_spec(name: str,
              present: bool = False,
              success: bool = True,
              detect_error: Optional[Exception] = None,
              install_error: Optional[Exception] = None,
              log: Optional[List[str]] = None) -> ToolSpec:
    probe = FakeProbe(present=present, error=detect_error)
    action = FakeAction(success=success, error=install_error, probe=probe, log=log, name=name)
    return ToolSpec(
        name=name,
        detect=probe,
        install=action,
        fallback_message=f"Install {name} by hand."
    )


@pytest.fixture
def output() -> io.StringIO:
    """Captures status lines."""
    return io.StringIO()


@pytest.fixture
def reporter(output: io.StringIO) -> StatusReporter:
    return StatusReporter(stream=output)


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()
