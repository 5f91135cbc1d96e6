"""
Data models for the development machine provisioner.
"""

from .tool import DetectProbe, InstallAction, ToolSpec
from .installation import InstallOutcome, ProvisionResult, ProvisionStatus, RunSummary

__all__ = [
    "DetectProbe",
    "InstallAction",
    "ToolSpec",
    "InstallOutcome",
    "ProvisionResult",
    "ProvisionStatus",
    "RunSummary"
]
