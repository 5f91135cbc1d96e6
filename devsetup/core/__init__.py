"""
Core modules for the development machine provisioner.
"""

from .provisioner import Provisioner
from .probes import AnyProbe, CommandProbe, CommandSucceedsProbe, PathProbe
from .catalog import build_specs
from .preconditions import verify_preconditions
from .git_defaults import configure_git

__all__ = [
    "Provisioner",
    "AnyProbe",
    "CommandProbe",
    "CommandSucceedsProbe",
    "PathProbe",
    "build_specs",
    "verify_preconditions",
    "configure_git"
]
