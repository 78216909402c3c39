from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class OperationResult:
    """Outcome of a mutating call.

    Mutations never raise on storage faults; a failed write comes back as
    ``success=False`` with a message the caller can show as-is.
    """

    success: bool
    message: str
    payload: Optional[Any] = None

    def to_dict(self) -> dict:
        out: dict = {"success": self.success, "message": self.message}
        if self.payload is not None:
            to_dict = getattr(self.payload, "to_dict", None)
            out["result"] = to_dict() if callable(to_dict) else self.payload
        return out
