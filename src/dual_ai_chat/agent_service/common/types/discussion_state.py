from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from dual_ai_chat.agent_service.common.types.messages import (
    ChatMessage,
    DISCUSSION_PURPOSES,
    MessagePurpose,
    MessageSender,
    Notepad,
)

class DiscussionPhase(str, Enum):
    """
    Orchestrator states.
    Idle -> OpeningStatement -> Reply x (2 * turns) -> Synthesis -> Idle, or -> Failed -> Idle.
    """
    IDLE = "idle"
    OPENING_STATEMENT = "opening_statement"
    REPLY = "reply"
    SYNTHESIS = "synthesis"
    FAILED = "failed"

class TurnKind(str, Enum):
    OPENING = "opening"
    REPLY = "reply"
    SYNTHESIS = "synthesis"

class DiscussionTurn(BaseModel):
    """A single scheduled request/response cycle attributed to one agent."""
    model_config = ConfigDict(frozen=True)

    index: int
    kind: TurnKind
    speaker: MessageSender
    purpose: MessagePurpose

    @property
    def phase(self) -> DiscussionPhase:
        return {
            TurnKind.OPENING: DiscussionPhase.OPENING_STATEMENT,
            TurnKind.REPLY: DiscussionPhase.REPLY,
            TurnKind.SYNTHESIS: DiscussionPhase.SYNTHESIS,
        }[self.kind]

    @property
    def opponent(self) -> MessageSender:
        return MessageSender.MUSE if self.speaker == MessageSender.COGNITO else MessageSender.COGNITO

class DiscussionPlan(BaseModel):
    """
    The fixed turn schedule for one discussion.
    Cognito opens, Muse and Cognito alternate `turns_per_model` times, Cognito synthesizes.
    """
    model_config = ConfigDict(frozen=True)

    turns: tuple[DiscussionTurn, ...]

    @classmethod
    def build(cls, turns_per_model: int) -> "DiscussionPlan":
        if turns_per_model < 0:
            raise ValueError("turns_per_model must be >= 0")
        schedule: list[tuple[TurnKind, MessageSender, MessagePurpose]] = [
            (TurnKind.OPENING, MessageSender.COGNITO, MessagePurpose.COGNITO_TO_MUSE),
        ]
        for _ in range(turns_per_model):
            schedule.append((TurnKind.REPLY, MessageSender.MUSE, MessagePurpose.MUSE_TO_COGNITO))
            schedule.append((TurnKind.REPLY, MessageSender.COGNITO, MessagePurpose.COGNITO_TO_MUSE))
        schedule.append((TurnKind.SYNTHESIS, MessageSender.COGNITO, MessagePurpose.FINAL_RESPONSE))
        return cls(
            turns=tuple(
                DiscussionTurn(index=i, kind=kind, speaker=speaker, purpose=purpose)
                for i, (kind, speaker, purpose) in enumerate(schedule)
            )
        )

class DiscussionTranscript(BaseModel):
    """
    Ordered "{role}: {spokenText}" lines used only to build prompts.
    Derived from agent-to-agent messages, never stored on its own.
    """
    model_config = ConfigDict(frozen=True)

    lines: tuple[str, ...] = ()
    last_speaker: Optional[MessageSender] = None
    last_spoken_text: Optional[str] = None

    @classmethod
    def from_messages(cls, messages: list[ChatMessage]) -> "DiscussionTranscript":
        spoken = [msg for msg in messages if msg.purpose in DISCUSSION_PURPOSES]
        if not spoken:
            return cls()
        return cls(
            lines=tuple(f"{msg.sender.value}: {msg.text}" for msg in spoken),
            last_speaker=spoken[-1].sender,
            last_spoken_text=spoken[-1].text,
        )

    def render(self) -> str:
        return "\n".join(self.lines)

class SessionSnapshot(BaseModel):
    """Immutable view of the session handed to the presentation layer."""
    model_config = ConfigDict(frozen=True)

    messages: list[ChatMessage]
    notepad: Notepad
    credentials_valid: bool
    is_busy: bool
    phase: DiscussionPhase
    selected_model_api_name: str
    thinking_budget_enabled: bool
    last_query_duration_ms: Optional[float] = None

class DiscussionOutcome(BaseModel):
    """Result of one submitted query."""
    discussion_id: str
    completed: bool
    final_message: Optional[ChatMessage] = None
    error_message: Optional[ChatMessage] = None
    turns_completed: int = 0
    duration_ms: float = Field(default=0.0, description="Total wall-clock processing time of the query.")
