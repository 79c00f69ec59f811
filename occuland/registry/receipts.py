"""Result values returned by state-mutating registry calls."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Receipt:
    """Outcome of a successful mutating call.

    Failed calls raise instead of returning a receipt, so ``success`` is
    always True on a receipt a caller actually holds. ``sequence`` is the
    registry's transaction counter and ``events`` lists what the call
    emitted, in order.
    """

    action: str
    caller: str
    sequence: int
    token_id: int | None = None
    success: bool = True
    events: list[dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "success": self.success,
            "action": self.action,
            "caller": self.caller,
            "sequence": self.sequence,
            "token_id": self.token_id,
            "events": [dict(e) for e in self.events],
        }

    def event_types(self) -> list[str]:
        """Names of the emitted events, in emission order."""
        return [e["event_type"] for e in self.events]
