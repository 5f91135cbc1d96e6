"""
Utility modules for the development machine provisioner.
"""

from .logging import setup_root_logger
from .reporter import StatusReporter
from .prompt import confirm_install

__all__ = ["setup_root_logger", "StatusReporter", "confirm_install"]
