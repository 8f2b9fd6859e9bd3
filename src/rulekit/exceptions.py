"""Custom exceptions for RuleKit."""

from pathlib import Path
from typing import Any


class RuleKitError(Exception):
    """Base exception for all RuleKit errors."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.details = details or {}


class ConfigurationError(RuleKitError):
    """Raised when a target, section, emitter or section config cannot be resolved."""


class ArtifactIOError(RuleKitError):
    """Raised when reading a source file or writing an output file fails."""

    def __init__(
        self,
        message: str,
        path: Path,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details={"path": str(path), **(details or {})})
        self.path = path
