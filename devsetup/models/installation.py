"""
Installation and provisioning result models.
"""

from enum import Enum
from typing import Optional, List
from datetime import datetime, timezone
from pydantic import BaseModel, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ProvisionStatus(str, Enum):
    """Terminal state of one tool within a run."""
    ALREADY_PRESENT = "already_present"
    INSTALLED = "installed"
    INSTALL_FAILED_FALLBACK_SHOWN = "install_failed_fallback_shown"
    CANCELLED = "cancelled"


class InstallOutcome(BaseModel):
    """Result of invoking a package manager."""
    success: bool = Field(..., description="Whether the install command succeeded")
    command: List[str] = Field(default_factory=list, description="Command that was run")
    return_code: Optional[int] = Field(None, description="Process exit code, if a process ran")
    output: str = Field(default="", description="Captured standard output")
    error: Optional[str] = Field(None, description="Error message if failed")
    duration_ms: int = Field(default=0, description="Time spent in the command")

    @classmethod
    def succeeded(cls, command: Optional[List[str]] = None, **kwargs) -> "InstallOutcome":
        """Create a success outcome."""
        return cls(success=True, command=command or [], **kwargs)

    @classmethod
    def failed(cls, error: str, command: Optional[List[str]] = None, **kwargs) -> "InstallOutcome":
        """Create a failure outcome."""
        return cls(success=False, error=error, command=command or [], **kwargs)


class ProvisionResult(BaseModel):
    """Outcome of provisioning a single tool."""
    tool_name: str = Field(..., description="Tool name")
    status: ProvisionStatus = Field(..., description="Terminal state for this tool")
    message: Optional[str] = Field(None, description="Fallback guidance or error text")
    outcome: Optional[InstallOutcome] = Field(None, description="Install outcome if an install ran")

    started_at: datetime = Field(default_factory=_utcnow)
    completed_at: Optional[datetime] = None
    duration_seconds: Optional[float] = None

    def complete(self) -> "ProvisionResult":
        """Stamp the completion time."""
        self.completed_at = _utcnow()
        self.duration_seconds = (self.completed_at - self.started_at).total_seconds()
        return self

    class Config:
        json_schema_extra = {
            "example": {
                "tool_name": "git",
                "status": "installed",
                "duration_seconds": 12.4
            }
        }


class RunSummary(BaseModel):
    """Aggregate counts for a provisioning run."""
    total: int = 0
    already_present: int = 0
    installed: int = 0
    failed: int = 0
    cancelled: int = 0
    duration_seconds: float = 0.0

    @classmethod
    def from_results(cls, results: List[ProvisionResult], duration_seconds: float = 0.0) -> "RunSummary":
        counts = {status: 0 for status in ProvisionStatus}
        for result in results:
            counts[result.status] += 1
        return cls(
            total=len(results),
            already_present=counts[ProvisionStatus.ALREADY_PRESENT],
            installed=counts[ProvisionStatus.INSTALLED],
            failed=counts[ProvisionStatus.INSTALL_FAILED_FALLBACK_SHOWN],
            cancelled=counts[ProvisionStatus.CANCELLED],
            duration_seconds=duration_seconds,
        )
