"""
Configuration settings for the development machine provisioner.
"""

import platform
from typing import List, Optional
from pathlib import Path
from pydantic import BaseModel, Field, validator
from pydantic_settings import BaseSettings

PROFILES = ("windows", "wsl")
EXTRA_TOOL_MANAGERS = ("winget", "apt", "brew", "pip", "npm", "cargo")


class ExtraTool(BaseModel):
    """A user-defined tool appended to the profile's catalog."""
    name: str = Field(..., description="Tool name")
    manager: str = Field(..., description="Package manager: winget, apt, brew, pip, npm or cargo")
    package: str = Field(..., description="Package, formula, crate or winget id to install")
    command: Optional[str] = Field(None, description="Executable used to detect the tool (default: name)")
    fallback: Optional[str] = Field(None, description="Guidance shown if the install fails")

    @validator('manager')
    def validate_manager(cls, v):
        if v not in EXTRA_TOOL_MANAGERS:
            raise ValueError(f"Unknown package manager '{v}', expected one of {', '.join(EXTRA_TOOL_MANAGERS)}")
        return v


class WindowsConfig(BaseModel):
    """Windows host configuration."""
    minimum_build: int = Field(default=19041, description="Oldest Windows build supporting 'wsl --install'")
    wsl_distribution: str = Field(default="Ubuntu", description="Distribution passed to 'wsl --install -d'")


class LoggingConfig(BaseModel):
    """Logging configuration."""
    level: str = Field(default="INFO", description="Logging level")
    file_path: Optional[Path] = Field(default=Path("logs/devsetup.log"))
    max_file_size_mb: int = Field(default=10, description="Maximum log file size in MB")
    backup_count: int = Field(default=5, description="Number of log backups to keep")


class Settings(BaseSettings):
    """Main application settings."""
    profile: Optional[str] = Field(None, description="Catalog to apply: windows or wsl (default: detected)")
    interactive: bool = Field(default=True, description="Ask for confirmation before installing")
    configure_git: bool = Field(default=True, description="Apply Git defaults after a wsl run")
    skip_tools: List[str] = Field(default_factory=list, description="Tool names to leave out")
    extra_tools: List[ExtraTool] = Field(default_factory=list, description="Additional tools to provision")

    windows: WindowsConfig = Field(default_factory=WindowsConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    class Config:
        env_prefix = "DEVSETUP_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        env_nested_delimiter = "__"
        extra = "ignore"  # Ignore extra fields from environment

    @validator('profile')
    def validate_profile(cls, v):
        if v is not None and v not in PROFILES:
            raise ValueError(f"Unknown profile '{v}', expected one of {', '.join(PROFILES)}")
        return v

    def resolved_profile(self, system: Optional[str] = None) -> str:
        """Return the configured profile, or pick one from the running OS."""
        if self.profile:
            return self.profile
        system = system or platform.system()
        return "windows" if system == "Windows" else "wsl"
