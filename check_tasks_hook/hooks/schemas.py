from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

# --- Input Schemas (Context) ---


class HookInput(BaseModel):
    """
    Stop event payload sent by Claude Code on stdin.

    Every field is optional: the hook must still decide when the host sends a
    partial payload. Unknown keys are kept in the model's extras.
    """

    model_config = ConfigDict(extra="allow")

    session_id: str | None = None
    transcript_path: str | None = Field(
        None, description="JSONL transcript of the session (source of the custom title)."
    )
    cwd: str | None = Field(None, description="Working directory of the session.")
    permission_mode: str | None = None
    hook_event_name: str | None = None
    stop_hook_active: bool = Field(
        default=False,
        description="True when the agent is already continuing because of a Stop hook.",
    )

    @classmethod
    def from_raw(cls, raw: Any) -> "HookInput | None":
        """Build from decoded stdin JSON; None unless it is a valid object."""
        if not isinstance(raw, dict):
            return None
        try:
            return cls.model_validate(raw)
        except ValueError:
            return None


# --- Claude Code Hook Schemas ---


class ClaudeStopHookOutput(BaseModel):
    """
    Output structure specifically for the Claude 'Stop' event.
    Unlike other events, 'Stop' uses top-level fields instead of hookSpecificOutput.
    """

    decision: Literal["approve", "block"]
    reason: str | None = None
