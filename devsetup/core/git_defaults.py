"""
Git configuration applied after the WSL tools are in place.
"""

import logging
from typing import Dict, Optional

from ..integrations.command_runner import CommandRunner
from ..utils.reporter import StatusReporter

GIT_DEFAULTS: Dict[str, str] = {
    "init.defaultBranch": "main",
    "core.autocrlf": "input",
    "pull.rebase": "false",
}

IDENTITY_HINTS: Dict[str, str] = {
    "user.name": "git config --global user.name 'Your Name'",
    "user.email": "git config --global user.email 'your.email@example.com'",
}


def configure_git(runner: Optional[CommandRunner] = None,
                  reporter: Optional[StatusReporter] = None) -> bool:
    """
    Warn about a missing Git identity and set sensible global defaults.

    Returns:
        True if every default was applied
    """
    logger = logging.getLogger(__name__)
    runner = runner or CommandRunner(capture_output=True)
    reporter = reporter or StatusReporter()

    reporter.step("Configuring Git...")
    git = runner.which("git")
    if git is None:
        reporter.warning("Git is not installed; skipping Git configuration.")
        return False

    for key, hint in IDENTITY_HINTS.items():
        if not runner.output_of([git, "config", "--global", key]):
            reporter.warning(f"Git {key} not configured. You can set it later with: {hint}")

    applied = True
    for key, value in GIT_DEFAULTS.items():
        if not runner.succeeds([git, "config", "--global", key, value]):
            logger.warning(f"Failed to set git {key}={value}")
            reporter.warning(f"Could not set git {key} to {value}.")
            applied = False

    if applied:
        reporter.info("Git configured with sensible defaults.")
    return applied
