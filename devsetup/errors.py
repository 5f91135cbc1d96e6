"""
Errors raised while bootstrapping a development machine.
"""

from typing import Optional


class DevSetupError(Exception):
    """Base error for this package."""


class PreconditionError(DevSetupError):
    """Raised when the host is not fit for provisioning (privileges, OS, environment)."""

    def __init__(self, message: str, remediation: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.remediation = remediation

    def __str__(self) -> str:
        if self.remediation:
            return f"{self.message} {self.remediation}"
        return self.message


class DetectionError(DevSetupError):
    """Raised when a detection probe fails unexpectedly."""


class InstallError(DevSetupError):
    """Raised when a package manager could not be invoked at all."""


class UserCancelled(DevSetupError):
    """Raised when the user declines the confirmation prompt."""


class ConfigurationError(DevSetupError):
    """Raised when a profile or tool definition is invalid."""
