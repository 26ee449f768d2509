"""In-memory state for the single active chat session."""

from typing import Optional

from dual_ai_chat.agent_service.common.errors import ThinkingBudgetUnsupportedError, UnknownModelError
from dual_ai_chat.agent_service.common.system_prompts.discussion_prompts import DiscussionPrompts
from dual_ai_chat.agent_service.common.types.discussion_state import DiscussionPhase, SessionSnapshot
from dual_ai_chat.agent_service.common.types.messages import (
    ChatMessage,
    ImageAttachment,
    MessagePurpose,
    MessageSender,
    Notepad,
    SystemNotice,
)
from dual_ai_chat.common.services.llm_service.model_registry import AiModel, find_model, resolve_model
from dual_ai_chat.common.logging.logger import logger

class SessionState:
    """
    Messages, notepad, credentials flag, busy flag and model selection for one session.
    - Messages are append-only; the notepad is only ever overwritten through apply_notepad_update().
    - credentials_valid is sticky: once false it stays false until the process is reconfigured.
    """

    def __init__(
        self,
        credentials_valid: bool,
        model_api_name: Optional[str] = None,
        thinking_budget_enabled: bool = True,
    ) -> None:
        self.credentials_valid = credentials_valid
        self.selected_model: AiModel = resolve_model(model_api_name or "")
        self.thinking_budget_enabled = thinking_budget_enabled
        self.is_busy = False
        self.phase = DiscussionPhase.IDLE
        self.messages: list[ChatMessage] = []
        self.notepad = Notepad(content=DiscussionPrompts.initial_notepad_content)
        self.last_query_duration_ms: Optional[float] = None
        self.reset()

    def reset(self) -> None:
        """Drop all messages, restore the notepad template and post the session notice."""
        self.messages = []
        self.notepad = Notepad(content=DiscussionPrompts.initial_notepad_content)
        self.phase = DiscussionPhase.IDLE
        self.last_query_duration_ms = None
        if self.credentials_valid:
            self.add_system_message(
                DiscussionPrompts.welcome_notice.format(
                    cognito=MessageSender.COGNITO.value,
                    muse=MessageSender.MUSE.value,
                    model_name=self.selected_model.name,
                ),
                notice=SystemNotice.WELCOME,
            )
        else:
            self.add_system_message(DiscussionPrompts.missing_api_key_notice, notice=SystemNotice.CREDENTIALS)

    def add_message(
        self,
        text: str,
        sender: MessageSender,
        purpose: MessagePurpose,
        *,
        duration_ms: Optional[float] = None,
        image: Optional[ImageAttachment] = None,
        notice: Optional[SystemNotice] = None,
        discussion_id: Optional[str] = None,
    ) -> ChatMessage:
        message = ChatMessage(
            text=text,
            sender=sender,
            purpose=purpose,
            duration_ms=duration_ms,
            image=image,
            notice=notice,
            discussion_id=discussion_id,
        )
        self.messages.append(message)
        return message

    def add_system_message(
        self,
        text: str,
        notice: SystemNotice,
        *,
        discussion_id: Optional[str] = None,
        duration_ms: Optional[float] = None,
    ) -> ChatMessage:
        return self.add_message(
            text,
            MessageSender.SYSTEM,
            MessagePurpose.SYSTEM_NOTIFICATION,
            notice=notice,
            discussion_id=discussion_id,
            duration_ms=duration_ms,
        )

    def messages_for_discussion(self, discussion_id: str) -> list[ChatMessage]:
        return [msg for msg in self.messages if msg.discussion_id == discussion_id]

    def apply_notepad_update(self, candidate: Optional[str], role: MessageSender) -> bool:
        """
        Overwrite the notepad when `candidate` is present (an empty string counts as present).
        Returns whether the notepad was written.
        """
        if candidate is None:
            return False
        self.notepad = Notepad(content=candidate, last_updated_by=role)
        logger.info(f"Notepad overwritten by {role.value} ({len(candidate)} chars)")
        return True

    def mark_credentials_invalid(self) -> None:
        if self.credentials_valid:
            logger.warning("Credentials marked invalid, further submissions are blocked for this session")
        self.credentials_valid = False

    def select_model(self, api_name: str) -> AiModel:
        model = find_model(api_name)
        if model is None:
            raise UnknownModelError(f"Unknown model '{api_name}'")
        self.selected_model = model
        logger.info(f"Selected model: {model.name}")
        return model

    def set_thinking_budget_enabled(self, enabled: bool) -> None:
        if not self.selected_model.supports_thinking_budget:
            raise ThinkingBudgetUnsupportedError(
                f"{self.selected_model.name} does not support the thinking budget setting"
            )
        self.thinking_budget_enabled = enabled

    @property
    def disable_thinking(self) -> bool:
        """Whether calls should switch extended reasoning off."""
        return self.selected_model.supports_thinking_budget and not self.thinking_budget_enabled

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            messages=list(self.messages),
            notepad=self.notepad.model_copy(),
            credentials_valid=self.credentials_valid,
            is_busy=self.is_busy,
            phase=self.phase,
            selected_model_api_name=self.selected_model.api_name,
            thinking_budget_enabled=self.thinking_budget_enabled,
            last_query_duration_ms=self.last_query_duration_ms,
        )
