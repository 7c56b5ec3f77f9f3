"""Error types raised during project discovery and assembly."""

from __future__ import annotations

from pathlib import Path


class InputScopeError(Exception):
    """Base class for all `inputscope` errors."""


class ProjectNotFoundError(InputScopeError, FileNotFoundError):
    """The requested project root does not exist or is not a directory."""

    def __init__(self, path: str | Path) -> None:
        self.path: Path = Path(path)
        super().__init__(f"Project path not found: {self.path}")


class DescriptorParseError(InputScopeError, ValueError):
    """A descriptor file exists but does not contain valid structured data."""

    def __init__(self, path: str | Path, reason: str) -> None:
        self.path: Path = Path(path)
        self.reason: str = reason
        super().__init__(f"Could not parse {self.path}: {reason}")


class ConfigError(InputScopeError, ValueError):
    """An `inputscope` config file contains an invalid value."""
