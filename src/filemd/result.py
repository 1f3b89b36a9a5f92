"""Result value returned by every conversion entry point."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class ConversionResult:
    success: bool
    markdown: str
    error: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None

    @classmethod
    def ok(cls, markdown: str, metadata: Optional[Dict[str, Any]] = None) -> "ConversionResult":
        return cls(success=True, markdown=markdown, error=None, metadata=metadata)

    @classmethod
    def fail(cls, message: str, metadata: Optional[Dict[str, Any]] = None) -> "ConversionResult":
        # failed results never carry partial markdown
        return cls(success=False, markdown="", error=message, metadata=metadata)
