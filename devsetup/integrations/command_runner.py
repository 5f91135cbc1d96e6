"""
Command runner for invoking external package managers.

Every process the provisioner spawns goes through here so that exit codes
are turned into InstallOutcome objects in one place.
"""

import logging
import shutil
import subprocess
import time
from typing import List, Optional, Dict

from ..errors import InstallError
from ..models.installation import InstallOutcome


class CommandRunner:
    """Runs commands to completion and captures their output."""

    def __init__(self, capture_output: bool = False, env: Optional[Dict[str, str]] = None):
        """
        Initialize the command runner.

        Args:
            capture_output: Capture stdout/stderr instead of streaming to the terminal
            env: Optional environment for spawned processes
        """
        self.logger = logging.getLogger(__name__)
        self.capture_output = capture_output
        self.env = env

    def which(self, executable: str) -> Optional[str]:
        """Locate an executable on the search path."""
        return shutil.which(executable)

    def run(self, command: List[str], timeout: Optional[float] = None) -> InstallOutcome:
        """
        Run a command and block until it exits.

        Args:
            command: Command and arguments
            timeout: Optional timeout in seconds; installers run without one

        Returns:
            Outcome describing the exit status

        Raises:
            InstallError: If the process could not be started
        """
        self.logger.debug(f"Executing: {' '.join(command)}")
        start = time.monotonic()

        try:
            result = subprocess.run(
                command,
                capture_output=self.capture_output,
                text=True,
                timeout=timeout,
                env=self.env
            )
        except subprocess.TimeoutExpired:
            return InstallOutcome.failed(
                f"Command timed out after {timeout}s",
                command=command,
                duration_ms=int((time.monotonic() - start) * 1000)
            )
        except OSError as e:
            raise InstallError(f"Could not run {command[0]}: {e}") from e

        elapsed_ms = int((time.monotonic() - start) * 1000)
        stdout = (result.stdout or "").strip()
        stderr = (result.stderr or "").strip()

        if result.returncode == 0:
            return InstallOutcome.succeeded(
                command=command,
                return_code=result.returncode,
                output=stdout,
                duration_ms=elapsed_ms
            )

        return InstallOutcome.failed(
            stderr or f"Command exited with code {result.returncode}",
            command=command,
            return_code=result.returncode,
            output=stdout,
            duration_ms=elapsed_ms
        )

    def succeeds(self, command: List[str], timeout: Optional[float] = 10) -> bool:
        """Quietly check whether a command exits 0."""
        try:
            result = subprocess.run(
                command,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                timeout=timeout,
                env=self.env
            )
        except (OSError, subprocess.TimeoutExpired):
            return False
        return result.returncode == 0

    def output_of(self, command: List[str], timeout: Optional[float] = 10) -> Optional[str]:
        """Return stripped stdout of a command, or None if it fails."""
        try:
            result = subprocess.run(
                command,
                capture_output=True,
                text=True,
                timeout=timeout,
                env=self.env
            )
        except (OSError, subprocess.TimeoutExpired):
            return None
        if result.returncode != 0:
            return None
        return result.stdout.strip()
