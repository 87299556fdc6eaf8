"""Data models for tool dispatch."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class ToolCallRequest:
    """Represents a normalized incoming tool call."""

    name: str
    arguments: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_params(cls, name: str, arguments: Optional[Dict[str, Any]]) -> ToolCallRequest:
        """Builds a request from protocol parameters, where arguments may be absent."""
        return cls(name=name, arguments=dict(arguments or {}))
