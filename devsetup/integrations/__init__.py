"""
Integrations with external package managers.
"""

from .command_runner import CommandRunner
from .package_managers import (
    AptInstall,
    AptRefresh,
    BrewInstall,
    CargoInstall,
    HomebrewBootstrap,
    NpmGlobalInstall,
    PipUserInstall,
    WingetInstall,
    WslInstall,
    action_for,
)

__all__ = [
    "CommandRunner",
    "AptInstall",
    "AptRefresh",
    "BrewInstall",
    "CargoInstall",
    "HomebrewBootstrap",
    "NpmGlobalInstall",
    "PipUserInstall",
    "WingetInstall",
    "WslInstall",
    "action_for"
]
