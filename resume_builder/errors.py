"""Error type raised at the editing/CLI seam."""

from __future__ import annotations

from typing import Any, Dict, Optional


class BuilderError(Exception):
    """Caller mistake with a stable code (unknown section, field, entry, stage...)."""

    def __init__(
        self,
        code: str,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": self.details,
            }
        }
