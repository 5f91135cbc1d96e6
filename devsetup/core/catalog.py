"""
Tool catalogs for each supported host profile.

windows: language runtimes through winget, then WSL itself.
wsl:     apt essentials, Homebrew, brew formulae, then language-level extras.
"""

from typing import Dict, List, Optional, Sequence, Tuple, Union

from config.settings import ExtraTool, Settings
from ..errors import ConfigurationError
from ..integrations.command_runner import CommandRunner
from ..integrations.package_managers import (
    LINUXBREW_BREW,
    LINUXBREW_PREFIX,
    AptInstall,
    BrewInstall,
    CargoInstall,
    HomebrewBootstrap,
    NpmGlobalInstall,
    PipUserInstall,
    WingetInstall,
    WslInstall,
    action_for,
)
from ..models.tool import ToolSpec
from .probes import AnyProbe, CommandProbe, CommandSucceedsProbe, PathProbe

# (name, winget id, detect command, manual download page)
# A list is a query that must exit 0; the Store alias for python.exe is on PATH but fails.
WINGET_TOOLS: List[Tuple[str, str, Union[str, List[str]], str]] = [
    ("Git", "Git.Git", "git", "https://git-scm.com/download/win"),
    ("Node.js", "OpenJS.NodeJS.LTS", "node", "https://nodejs.org/"),
    ("Python", "Python.Python.3.12", ["python", "--version"], "https://www.python.org/downloads/windows/"),
    ("Go", "GoLang.Go", "go", "https://go.dev/dl/"),
    ("Rust", "Rustlang.Rustup", "rustup", "https://rustup.rs/"),
    ("Java", "EclipseAdoptium.Temurin.21.JDK", "java", "https://adoptium.net/"),
    (".NET", "Microsoft.DotNet.SDK.8", "dotnet", "https://dotnet.microsoft.com/download"),
]

# apt package -> executable that proves it is installed
APT_ESSENTIALS: Dict[str, Optional[str]] = {
    "build-essential": "gcc",
    "curl": "curl",
    "file": "file",
    "git": "git",
    "procps": "ps",
    "wget": "wget",
    "vim": "vim",
    "htop": "htop",
    "tree": "tree",
    "jq": "jq",
    "unzip": "unzip",
    "software-properties-common": "add-apt-repository",
    "apt-transport-https": None,
    "ca-certificates": None,
    "gnupg": "gpg",
    "lsb-release": "lsb_release",
}

# Detected under the Homebrew prefix, not on PATH, so apt-provided gcc or make do not count
BREW_FORMULAE: List[str] = [
    "gcc",
    "make",
    "cmake",
    "pkg-config",
    "node",
    "python@3.12",
    "go",
    "rust",
    "gh",
    "zsh",
    "tmux",
    "neovim",
    "ripgrep",
    "fd",
    "bat",
    "exa",
    "fzf",
]

PIP_TOOLS = ["pipenv", "poetry", "virtualenv"]
# npm package -> executable it provides
NPM_TOOLS: Dict[str, str] = {
    "yarn": "yarn",
    "pnpm": "pnpm",
    "@vue/cli": "vue",
    "create-react-app": "create-react-app",
}
CARGO_TOOLS = {"cargo-edit": "cargo-upgrade", "cargo-watch": "cargo-watch"}


def _command_probe(command: Union[str, Sequence[str]], runner: CommandRunner):
    if isinstance(command, str):
        return CommandProbe(command)
    return CommandSucceedsProbe(command, runner=runner, timeout=30)


def _dpkg_probe(package: str, runner: CommandRunner) -> CommandSucceedsProbe:
    return CommandSucceedsProbe(["dpkg", "-s", package], runner=runner, timeout=10)


def windows_catalog(settings: Settings, runner: Optional[CommandRunner] = None) -> List[ToolSpec]:
    """Runtimes through winget, followed by WSL."""
    runner = runner or CommandRunner()
    specs = [
        ToolSpec(
            name=name,
            detect=_command_probe(command, runner),
            install=WingetInstall(package_id, runner=runner),
            fallback_message=f"Install {name} manually from {url} or run: winget install --id {package_id} -e",
            description=f"{name} via winget ({package_id})"
        )
        for name, package_id, command, url in WINGET_TOOLS
    ]

    distro = settings.windows.wsl_distribution
    specs.append(ToolSpec(
        name="WSL",
        detect=CommandSucceedsProbe(["wsl", "--list", "--quiet"], runner=runner),
        install=WslInstall(distro, runner=runner),
        fallback_message=(
            f"Enable WSL manually: run 'wsl --install -d {distro}' in an elevated terminal, "
            "or see https://learn.microsoft.com/windows/wsl/install. A restart is required afterwards."
        ),
        description=f"Windows Subsystem for Linux ({distro})"
    ))
    return specs


def wsl_catalog(settings: Settings, runner: Optional[CommandRunner] = None) -> List[ToolSpec]:
    """apt essentials, Homebrew, brew formulae and language extras inside WSL."""
    runner = runner or CommandRunner()
    specs: List[ToolSpec] = []

    for package, command in APT_ESSENTIALS.items():
        detect = CommandProbe(command) if command else _dpkg_probe(package, runner)
        specs.append(ToolSpec(
            name=package,
            detect=detect,
            install=AptInstall([package], runner=runner),
            fallback_message=f"Install it manually with: sudo apt install -y {package}",
            description=f"{package} via apt"
        ))

    specs.append(ToolSpec(
        name="Homebrew",
        detect=AnyProbe(CommandProbe("brew"), PathProbe(LINUXBREW_BREW)),
        install=HomebrewBootstrap(runner=runner),
        fallback_message=(
            "Install Homebrew manually from https://brew.sh/ and add "
            f"'eval \"$({LINUXBREW_BREW} shellenv)\"' to ~/.bashrc."
        ),
        description="Homebrew package manager"
    ))

    for formula in BREW_FORMULAE:
        specs.append(ToolSpec(
            name=formula,
            detect=PathProbe(LINUXBREW_PREFIX / "opt" / formula),
            install=BrewInstall(formula, runner=runner),
            fallback_message=f"Install it later with: brew install {formula}",
            description=f"{formula} via Homebrew"
        ))

    for package in PIP_TOOLS:
        specs.append(ToolSpec(
            name=package,
            detect=CommandProbe(package),
            install=PipUserInstall([package], runner=runner),
            fallback_message=f"Install Python first, then run: pip3 install --user {package}",
            description=f"{package} via pip3"
        ))

    for package, command in NPM_TOOLS.items():
        specs.append(ToolSpec(
            name=package,
            detect=CommandProbe(command),
            install=NpmGlobalInstall([package], runner=runner),
            fallback_message=f"Install Node.js first, then run: npm install -g {package}",
            description=f"{package} via npm"
        ))

    for crate, command in CARGO_TOOLS.items():
        specs.append(ToolSpec(
            name=crate,
            detect=CommandProbe(command),
            install=CargoInstall([crate], runner=runner),
            fallback_message=f"Install Rust first, then run: cargo install {crate}",
            description=f"{crate} via cargo"
        ))

    return specs


CATALOGS = {
    "windows": windows_catalog,
    "wsl": wsl_catalog,
}


def extra_tool_spec(tool: ExtraTool, runner: Optional[CommandRunner] = None) -> ToolSpec:
    """Turn a configured extra tool into a ToolSpec."""
    try:
        install = action_for(tool.manager, tool.package, runner=runner)
    except ValueError as e:
        raise ConfigurationError(f"Extra tool '{tool.name}': {e}") from e

    return ToolSpec(
        name=tool.name,
        detect=CommandProbe(tool.command or tool.name),
        install=install,
        fallback_message=tool.fallback or f"Install {tool.name} manually ({tool.manager}: {tool.package}).",
        description=f"{tool.package} via {tool.manager}"
    )


def build_specs(profile: str, settings: Settings, runner: Optional[CommandRunner] = None) -> List[ToolSpec]:
    """
    Assemble the ordered ToolSpecs for a run.

    Args:
        profile: Catalog name (windows or wsl)
        settings: Supplies skipped and extra tools
        runner: Command runner shared by every install action

    Returns:
        Profile catalog minus skipped tools, followed by extra tools

    Raises:
        ConfigurationError: If the profile is unknown
    """
    try:
        catalog = CATALOGS[profile]
    except KeyError:
        raise ConfigurationError(f"Unknown profile: {profile}") from None

    runner = runner or CommandRunner()
    skipped = {name.lower() for name in settings.skip_tools}
    specs = [spec for spec in catalog(settings, runner) if spec.name.lower() not in skipped]
    specs.extend(
        extra_tool_spec(tool, runner)
        for tool in settings.extra_tools
        if tool.name.lower() not in skipped
    )
    return specs
