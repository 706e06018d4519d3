from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class StopVerdict(Enum):
    """Verdict on a Stop event."""

    APPROVE = "approve"
    BLOCK = "block"


@dataclass
class StopDecision:
    """Result of evaluating one Stop event.

    ``reason`` is the continuation prompt shown to the agent when blocked.
    ``metadata`` records why the decision was reached, for logging and the
    status command; it is never part of the hook output.
    """

    verdict: StopVerdict
    reason: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def approve(cls, why: str, **metadata: Any) -> "StopDecision":
        """Factory method for APPROVE verdict."""
        return cls(verdict=StopVerdict.APPROVE, metadata={"why": why, **metadata})

    @classmethod
    def block(cls, reason: str, **metadata: Any) -> "StopDecision":
        """Factory method for BLOCK verdict."""
        return cls(verdict=StopVerdict.BLOCK, reason=reason, metadata={"why": "open_tasks", **metadata})

    @property
    def is_blocked(self) -> bool:
        return self.verdict is StopVerdict.BLOCK

    def to_json(self) -> dict[str, Any]:
        """Serialize to the Stop hook payload."""
        if self.verdict is StopVerdict.BLOCK:
            return {"decision": self.verdict.value, "reason": self.reason or ""}
        return {"decision": self.verdict.value}
