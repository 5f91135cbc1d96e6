"""
Host checks that must pass before any tool is provisioned.

Each check raises PreconditionError with remediation text; they are run
once by the CLI before the provisioner starts.
"""

import ctypes
import logging
import platform
import re
import sys
from pathlib import Path
from typing import Optional

from ..errors import PreconditionError, ConfigurationError
from ..integrations.command_runner import CommandRunner
from ..utils.reporter import StatusReporter

logger = logging.getLogger(__name__)

PROC_VERSION = Path("/proc/version")
WSL_MARKERS = re.compile(r"microsoft|wsl", re.IGNORECASE)

PROFILE_SYSTEMS = {
    "windows": "Windows",
    "wsl": "Linux",
}


def check_platform(profile: str, system: Optional[str] = None) -> None:
    """Make sure the profile targets the operating system we are running on."""
    try:
        expected = PROFILE_SYSTEMS[profile]
    except KeyError:
        raise ConfigurationError(f"Unknown profile: {profile}") from None

    system = system or platform.system()
    if system != expected:
        raise PreconditionError(
            f"The '{profile}' profile must be run on {expected}, not {system}.",
            "Pick the profile that matches this machine with --profile."
        )


def is_windows_admin() -> bool:
    try:
        return bool(ctypes.windll.shell32.IsUserAnAdmin())
    except (AttributeError, OSError):
        return False


def check_admin(is_admin: Optional[bool] = None) -> None:
    """Require an elevated (Administrator) session on Windows."""
    if is_admin is None:
        is_admin = is_windows_admin()
    if not is_admin:
        raise PreconditionError(
            "This script must be run as Administrator.",
            "Right-click your terminal and choose 'Run as administrator', then try again."
        )


def check_sudo(runner: Optional[CommandRunner] = None) -> None:
    """Require passwordless (or cached) sudo on Linux."""
    runner = runner or CommandRunner()
    if not runner.succeeds(["sudo", "-n", "true"], timeout=10):
        raise PreconditionError(
            "This script requires sudo privileges.",
            "Please ensure you can run sudo commands (run 'sudo -v' first)."
        )


def windows_build(version: Optional[str] = None) -> int:
    """Return the Windows build number, e.g. 22621 for '10.0.22621'."""
    if version is None:
        getwindowsversion = getattr(sys, "getwindowsversion", None)
        if getwindowsversion is not None:
            return getwindowsversion().build
        version = platform.version()

    parts = [p for p in version.split(".") if p.isdigit()]
    if not parts:
        raise PreconditionError(
            f"Could not determine the Windows build number from '{version}'.",
            "Check Settings > System > About for your OS build."
        )
    return int(parts[-1])


def check_windows_build(minimum: int = 19041, build: Optional[int] = None) -> None:
    """Require a Windows build recent enough for 'wsl --install'."""
    if build is None:
        build = windows_build()
    if build < minimum:
        raise PreconditionError(
            f"Windows build {build} is too old; build {minimum} or later is required.",
            "Install the latest Windows updates and run this script again."
        )


def check_wsl(proc_version: Optional[Path] = None) -> None:
    """Require that we are running inside WSL."""
    proc_version = proc_version or PROC_VERSION
    if not proc_version.exists():
        raise PreconditionError("This script should be run in a WSL environment.")
    try:
        version = proc_version.read_text(errors="replace")
    except OSError as e:
        raise PreconditionError(
            f"Could not read {proc_version}: {e}",
            "This script should be run in a WSL environment."
        ) from e
    if not WSL_MARKERS.search(version):
        raise PreconditionError("This script should be run in a WSL environment.")


def verify_preconditions(profile: str,
                         minimum_build: int = 19041,
                         reporter: Optional[StatusReporter] = None,
                         runner: Optional[CommandRunner] = None) -> None:
    """
    Run every check the profile needs, stopping at the first failure.

    Raises:
        PreconditionError: If the host is not fit for the profile
        ConfigurationError: If the profile is unknown
    """
    reporter = reporter or StatusReporter()

    check_platform(profile)

    if profile == "windows":
        check_admin()
        reporter.info("Running with Administrator privileges.")
        check_windows_build(minimum_build)
        reporter.info(f"Windows build {windows_build()} supports WSL.")
    elif profile == "wsl":
        check_wsl()
        reporter.info("Running in WSL environment.")
        check_sudo(runner)
        reporter.info("Sudo privileges confirmed.")

    logger.info(f"Preconditions for '{profile}' satisfied")
