"""Merge result models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from clipmerge.core.channels.models import ChannelSet
from clipmerge.core.diagnostics import Diagnostic, DiagnosticCode


class MergeResult(BaseModel):
    """Merged channels plus the diagnostics collected by every stage."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    channels: ChannelSet = Field(description="Final merged channel set")
    diagnostics: list[Diagnostic] = Field(default_factory=list, description="Collected diagnostics")
    stack_count: int = Field(default=0, ge=0, description="Stacks merged (null stacks excluded)")
    corrected_paths: int = Field(default=0, ge=0, description="Channels whose path was rewritten")
    unresolved_paths: int = Field(
        default=0, ge=0, description="Channels whose path was not found or ambiguous"
    )

    @property
    def is_success(self) -> bool:
        """True when the merge produced at least one channel."""
        return not self.channels.is_empty

    def diagnostics_with(self, code: DiagnosticCode) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.code == code]
