"""
Install actions wrapping the external package managers.

Each action knows its own invocation syntax and reports a structured
InstallOutcome. When the package manager itself is missing, the action
fails without spawning anything and the provisioner falls back to the
tool's guidance text.
"""

import logging
import os
from pathlib import Path
from typing import List, Optional, Sequence

from ..models.installation import InstallOutcome
from ..models.tool import InstallAction
from .command_runner import CommandRunner

LINUXBREW_PREFIX = Path("/home/linuxbrew/.linuxbrew")
LINUXBREW_BREW = LINUXBREW_PREFIX / "bin" / "brew"
HOMEBREW_INSTALL_URL = "https://raw.githubusercontent.com/Homebrew/install/HEAD/install.sh"


class PackageManagerAction(InstallAction):
    """Base class for installs delegated to a single package manager executable."""

    manager: str = ""

    def __init__(self, runner: Optional[CommandRunner] = None):
        self.logger = logging.getLogger(__name__)
        self.runner = runner or CommandRunner()

    def locate_manager(self) -> Optional[str]:
        return self.runner.which(self.manager)

    def build_command(self, executable: str) -> List[str]:
        raise NotImplementedError

    def install(self) -> InstallOutcome:
        executable = self.locate_manager()
        if executable is None:
            self.logger.warning(f"{self.manager} not found on PATH")
            return InstallOutcome.failed(f"{self.manager} is not available")

        command = self.build_command(executable)
        return self.runner.run(command)

    def describe(self) -> str:
        return " ".join(self.build_command(self.manager))


class WingetInstall(PackageManagerAction):
    """winget install --id <package> (Windows Package Manager)."""

    manager = "winget"

    def __init__(self, package_id: str, runner: Optional[CommandRunner] = None):
        super().__init__(runner)
        self.package_id = package_id

    def build_command(self, executable: str) -> List[str]:
        return [
            executable, "install",
            "--id", self.package_id,
            "-e",
            "--accept-source-agreements",
            "--accept-package-agreements"
        ]


class WslInstall(PackageManagerAction):
    """wsl --install -d <distribution>."""

    manager = "wsl"

    def __init__(self, distribution: str = "Ubuntu", runner: Optional[CommandRunner] = None):
        super().__init__(runner)
        self.distribution = distribution

    def build_command(self, executable: str) -> List[str]:
        return [executable, "--install", "-d", self.distribution]


class AptInstall(PackageManagerAction):
    """sudo apt install -y <packages>."""

    manager = "apt"

    def __init__(self, packages: Sequence[str], runner: Optional[CommandRunner] = None):
        super().__init__(runner)
        self.packages = list(packages)

    def build_command(self, executable: str) -> List[str]:
        return ["sudo", executable, "install", "-y", *self.packages]


class AptRefresh(PackageManagerAction):
    """sudo apt update followed by sudo apt upgrade -y."""

    manager = "apt"

    def build_command(self, executable: str) -> List[str]:
        return ["sudo", executable, "update"]

    def install(self) -> InstallOutcome:
        executable = self.locate_manager()
        if executable is None:
            return InstallOutcome.failed("apt is not available")

        outcome = self.runner.run(self.build_command(executable))
        if not outcome.success:
            return outcome
        return self.runner.run(["sudo", executable, "upgrade", "-y"])

    def describe(self) -> str:
        return "sudo apt update && sudo apt upgrade -y"


class BrewInstall(PackageManagerAction):
    """brew install <formula>, using the Linuxbrew prefix when brew is not on PATH yet."""

    manager = "brew"

    def __init__(self, formula: str, runner: Optional[CommandRunner] = None):
        super().__init__(runner)
        self.formula = formula

    def locate_manager(self) -> Optional[str]:
        found = self.runner.which(self.manager)
        if found:
            return found
        if LINUXBREW_BREW.exists():
            return str(LINUXBREW_BREW)
        return None

    def build_command(self, executable: str) -> List[str]:
        return [executable, "install", self.formula]


class PipUserInstall(PackageManagerAction):
    """pip3 install --user <packages>."""

    manager = "pip3"

    def __init__(self, packages: Sequence[str], runner: Optional[CommandRunner] = None):
        super().__init__(runner)
        self.packages = list(packages)

    def build_command(self, executable: str) -> List[str]:
        return [executable, "install", "--user", *self.packages]


class NpmGlobalInstall(PackageManagerAction):
    """npm install -g <packages>."""

    manager = "npm"

    def __init__(self, packages: Sequence[str], runner: Optional[CommandRunner] = None):
        super().__init__(runner)
        self.packages = list(packages)

    def build_command(self, executable: str) -> List[str]:
        return [executable, "install", "-g", *self.packages]


class CargoInstall(PackageManagerAction):
    """cargo install <crates>."""

    manager = "cargo"

    def __init__(self, crates: Sequence[str], runner: Optional[CommandRunner] = None):
        super().__init__(runner)
        self.crates = list(crates)

    def build_command(self, executable: str) -> List[str]:
        return [executable, "install", *self.crates]


class HomebrewBootstrap(PackageManagerAction):
    """Run the official Homebrew installer and wire brew into ~/.bashrc."""

    manager = "curl"

    def __init__(self,
                 runner: Optional[CommandRunner] = None,
                 bashrc: Optional[Path] = None,
                 prefix: Path = LINUXBREW_PREFIX):
        super().__init__(runner)
        self.bashrc = bashrc or Path.home() / ".bashrc"
        self.prefix = prefix

    def build_command(self, executable: str) -> List[str]:
        return ["/bin/bash", "-c", f'/bin/bash -c "$({executable} -fsSL {HOMEBREW_INSTALL_URL})"']

    def install(self) -> InstallOutcome:
        outcome = super().install()
        if not outcome.success:
            return outcome

        brew = self.prefix / "bin" / "brew"
        if not brew.exists():
            return InstallOutcome.failed(
                f"Homebrew installer finished but {brew} was not found",
                command=outcome.command,
                return_code=outcome.return_code,
                duration_ms=outcome.duration_ms
            )

        self._add_shellenv(brew)
        return outcome

    def _add_shellenv(self, brew: Path) -> None:
        """Append brew shellenv to the bashrc and expose brew to later installs in this run."""
        shellenv = f'eval "$({brew} shellenv)"'
        existing = self.bashrc.read_text() if self.bashrc.exists() else ""
        if shellenv not in existing:
            with open(self.bashrc, "a") as f:
                f.write("# Set PATH, MANPATH, etc., for Homebrew.\n")
                f.write(shellenv + "\n")
            self.logger.info(f"Added Homebrew shellenv to {self.bashrc}")

        bin_dirs = [str(self.prefix / "bin"), str(self.prefix / "sbin")]
        path_entries = os.environ.get("PATH", "").split(os.pathsep)
        missing = [d for d in bin_dirs if d not in path_entries]
        if missing:
            os.environ["PATH"] = os.pathsep.join(missing + path_entries)

    def describe(self) -> str:
        return f"Homebrew installer ({HOMEBREW_INSTALL_URL})"


MANAGERS = {
    "winget": WingetInstall,
    "apt": lambda package, runner=None: AptInstall([package], runner=runner),
    "brew": BrewInstall,
    "pip": lambda package, runner=None: PipUserInstall([package], runner=runner),
    "npm": lambda package, runner=None: NpmGlobalInstall([package], runner=runner),
    "cargo": lambda package, runner=None: CargoInstall([package], runner=runner),
}


def action_for(manager: str, package: str, runner: Optional[CommandRunner] = None) -> InstallAction:
    """Build the install action for a single package through a named manager."""
    try:
        factory = MANAGERS[manager]
    except KeyError:
        raise ValueError(f"Unknown package manager: {manager}") from None
    return factory(package, runner=runner)
