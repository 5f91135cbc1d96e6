"""
Tool-related data models.
"""

from abc import ABC, abstractmethod
from typing import Optional

from pydantic import BaseModel, Field

from .installation import InstallOutcome


class DetectProbe(ABC):
    """A side-effect-free query reporting whether a tool is already present."""

    @abstractmethod
    def is_present(self) -> bool:
        """Return True if the tool is installed on this machine."""

    def describe(self) -> str:
        return self.__class__.__name__

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self.describe()}>"


class InstallAction(ABC):
    """An idempotent operation installing a tool through an external package manager.

    Implementations should capture failures in the returned outcome rather
    than raise.
    """

    @abstractmethod
    def install(self) -> InstallOutcome:
        """Install the tool and report how it went."""

    def describe(self) -> str:
        return self.__class__.__name__

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self.describe()}>"


class ToolSpec(BaseModel):
    """Specification for a tool to be provisioned."""
    name: str = Field(..., description="Tool name")
    detect: DetectProbe = Field(..., description="Probe reporting whether the tool is present")
    install: InstallAction = Field(..., description="Action installing the tool")
    fallback_message: str = Field(..., description="Guidance shown when the install fails")
    description: Optional[str] = Field(None, description="Tool description")

    class Config:
        arbitrary_types_allowed = True
        frozen = True
