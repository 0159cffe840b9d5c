"""Diagnostic records collected during a merge.

Diagnostics describe recoverable conditions (unresolved paths, incomplete
transform groups, unsupported extrapolation). They are collected, never
raised, so one bad channel does not stop the rest of the merge.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class DiagnosticLevel(str, Enum):
    """Severity level for diagnostics."""

    WARNING = "warning"
    INFO = "info"


class DiagnosticCode(str, Enum):
    """Machine-readable diagnostic codes."""

    PATH_NOT_FOUND = "path_not_found"
    PATH_AMBIGUOUS = "path_ambiguous"
    PATH_COLLISION = "path_collision"
    INCOMPLETE_POSITION = "incomplete_position"
    INCOMPLETE_ROTATION = "incomplete_rotation"
    NO_ROOT_CHANNELS = "no_root_channels"
    UNSUPPORTED_EXTRAPOLATION = "unsupported_extrapolation"
    EMPTY_STACK = "empty_stack"
    EMPTY_RESULT = "empty_result"


class Diagnostic(BaseModel):
    """Issue or note raised by one merge stage."""

    level: DiagnosticLevel = Field(default=DiagnosticLevel.WARNING, description="Severity level")
    code: DiagnosticCode = Field(description="Machine-readable code")
    message: str = Field(description="Human-readable message")
    channel: str | None = Field(default=None, description="Binding key of the channel, if any")

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        prefix = f"[{self.level.value}] {self.code.value}"
        if self.channel:
            prefix += f" ({self.channel})"
        return f"{prefix}: {self.message}"
