# discussion orchestrator, a.k.a. the entrypoint for all agent logic
# drives Cognito and Muse through the fixed turn schedule and owns all session writes

import time
from typing import Optional
from uuid import uuid4
from pydantic import BaseModel, ConfigDict

# session + types
from dual_ai_chat.agent_service.session.session_state import SessionState
from dual_ai_chat.agent_service.common.types.discussion_state import (
    DiscussionOutcome,
    DiscussionPhase,
    DiscussionPlan,
    DiscussionTranscript,
    DiscussionTurn,
    TurnKind,
)
from dual_ai_chat.agent_service.common.types.messages import ChatMessage, MessagePurpose, MessageSender, SystemNotice
from dual_ai_chat.agent_service.common.types.llm_outputs.invocation_outputs import InlineImage, InvocationErrorKind, InvocationResult
from dual_ai_chat.agent_service.common.errors import (
    CredentialsUnavailableError,
    EmptySubmissionError,
    ImageConversionError,
    ModelInvocationError,
    SessionBusyError,
)
# prompts + parsing
from dual_ai_chat.agent_service.common.system_prompts.discussion_prompts import DiscussionPrompts
from dual_ai_chat.agent_service.discussion.prompt_builder import build_turn_prompt, role_header
from dual_ai_chat.agent_service.discussion.response_parser import parse_agent_response
# clients
from dual_ai_chat.common.services.llm_service.llm_client import ModelInvokerClient
from dual_ai_chat.common.services.llm_service.model_registry import AiModel
from dual_ai_chat.common.services.media.image_inputs import ImageHandleStore, ImageUpload, to_inline_image
# logging
from dual_ai_chat.common.logging.logger import logger

_ADVISORIES = {
    TurnKind.OPENING: DiscussionPrompts.opening_advisory,
    TurnKind.REPLY: DiscussionPrompts.reply_advisory,
    TurnKind.SYNTHESIS: DiscussionPrompts.synthesis_advisory,
}

class DiscussionContext(BaseModel):
    """
    Per-query inputs fixed for the whole discussion.
    Model and thinking settings are captured at submission, later changes apply to the next query.
    """
    model_config = ConfigDict(frozen=True)

    discussion_id: str
    user_query: str
    image: Optional[InlineImage] = None
    model: AiModel
    disable_thinking: bool

    @property
    def has_image(self) -> bool:
        return self.image is not None

class DiscussionOrchestrator():
    """
    Runs one Cognito/Muse discussion per submitted query.
    - Turns run strictly one after another; every turn re-reads the notepad right before building its prompt.
    - Any invocation error aborts the remaining schedule; nothing is retried here.
    - The orchestrator is the only writer of the session while a discussion runs.
    NOTE: initialized during lifespan and reused in the service lifecycle.
    """
    def __init__(
        self,
        session: SessionState,
        invoker: Optional[ModelInvokerClient],
        image_store: Optional[ImageHandleStore] = None,
        turns_per_model: int = 2,
    ):
        self.session = session
        self.invoker = invoker
        self.image_store = image_store or ImageHandleStore()
        self.plan = DiscussionPlan.build(turns_per_model)

    def _ensure_can_submit(self, user_input: str, image: Optional[ImageUpload]) -> None:
        if not self.session.credentials_valid or self.invoker is None:
            raise CredentialsUnavailableError("API key is missing or invalid")
        if self.session.is_busy:
            raise SessionBusyError("A discussion is already in progress")
        if not user_input.strip() and image is None:
            raise EmptySubmissionError("Enter a question or attach an image")

    async def submit(self, user_input: str, image: Optional[ImageUpload] = None) -> DiscussionOutcome:
        """
        Main entrypoint: record the user's query, run the full discussion and return its outcome.
        Rejections (busy, missing credentials, empty input) raise before anything is recorded.
        """
        self._ensure_can_submit(user_input, image)

        discussion_id = uuid4().hex
        attachment = self.image_store.register(image) if image is not None else None
        self.session.add_message(
            user_input,
            MessageSender.USER,
            MessagePurpose.USER_INPUT,
            image=attachment,
            discussion_id=discussion_id,
        )
        self.session.is_busy = True
        started_at = time.perf_counter()
        logger.info(f"Discussion {discussion_id} started (model={self.session.selected_model.api_name}, image={image is not None})")

        try:
            outcome = await self._run_discussion(discussion_id, user_input, image)
        finally:
            duration_ms = (time.perf_counter() - started_at) * 1000
            self.session.last_query_duration_ms = duration_ms
            self.session.is_busy = False
            self.session.phase = DiscussionPhase.IDLE
            if attachment is not None:
                self.image_store.release(attachment.display_url)

        logger.info(
            f"Discussion {discussion_id} finished: completed={outcome.completed}, "
            f"turns={outcome.turns_completed}, duration={duration_ms:.0f} ms"
        )
        return outcome.model_copy(update={"duration_ms": duration_ms})

    async def _run_discussion(
        self,
        discussion_id: str,
        user_input: str,
        image: Optional[ImageUpload],
    ) -> DiscussionOutcome:
        # 1) convert media before any model call
        try:
            inline_image = to_inline_image(image) if image is not None else None
        except ImageConversionError as e:
            logger.error(f"Discussion {discussion_id}: image conversion failed: {e}")
            error_message = self.session.add_system_message(
                DiscussionPrompts.image_conversion_error,
                SystemNotice.ERROR,
                discussion_id=discussion_id,
                duration_ms=0,
            )
            return DiscussionOutcome(discussion_id=discussion_id, completed=False, error_message=error_message)

        context = DiscussionContext(
            discussion_id=discussion_id,
            user_query=user_input,
            image=inline_image,
            model=self.session.selected_model,
            disable_thinking=self.session.disable_thinking,
        )

        # 2) walk the fixed schedule, one transition per completed invocation
        turns_completed = 0
        final_message: Optional[ChatMessage] = None
        try:
            for turn in self.plan.turns:
                message = await self.run_turn(context, turn)
                turns_completed += 1
                if turn.kind == TurnKind.SYNTHESIS:
                    final_message = message
        except ModelInvocationError as e:
            self.session.phase = DiscussionPhase.FAILED
            error_message = self._report_invocation_failure(e.result, discussion_id)
            return DiscussionOutcome(
                discussion_id=discussion_id,
                completed=False,
                error_message=error_message,
                turns_completed=turns_completed,
            )

        return DiscussionOutcome(
            discussion_id=discussion_id,
            completed=True,
            final_message=final_message,
            turns_completed=turns_completed,
        )

    async def run_turn(self, context: DiscussionContext, turn: DiscussionTurn) -> ChatMessage:
        """
        Execute a single turn: advisory -> prompt -> invoke -> parse -> notepad -> message.
        Raises ModelInvocationError when the invoker reports an error; the session is left as it was before the call.
        """
        self.session.phase = turn.phase
        self.session.add_system_message(
            _ADVISORIES[turn.kind].format(
                speaker=turn.speaker.value,
                opponent=turn.opponent.value,
                model_name=context.model.name,
            ),
            SystemNotice.ADVISORY,
            discussion_id=context.discussion_id,
        )

        # re-read transcript and notepad now, the previous turn may have just rewritten the notepad
        transcript = DiscussionTranscript.from_messages(self.session.messages_for_discussion(context.discussion_id))
        prompt = build_turn_prompt(
            turn.kind,
            turn.speaker,
            context.user_query,
            context.has_image,
            transcript,
            self.session.notepad.content,
        )

        try:
            result = await self.invoker.ainvoke(
                prompt=prompt,
                model_name=context.model.api_name,
                system_header=role_header(turn.speaker),
                disable_thinking=context.disable_thinking,
                image=context.image,
            )
        except Exception as e:
            # invokers should report failures in the result; treat a raised error the same way
            result = InvocationResult(
                text=f"The model request failed: {e}",
                error=f"{type(e).__name__}: {e}",
                error_kind=InvocationErrorKind.REQUEST_FAILED,
            )
        if result.failed:
            logger.error(
                f"Discussion {context.discussion_id}: turn {turn.index} ({turn.kind.value}, {turn.speaker.value}) "
                f"failed with {result.error_kind.value if result.error_kind else 'unknown'}: {result.error}"
            )
            raise ModelInvocationError(result)

        parsed = parse_agent_response(result.text)
        self.session.apply_notepad_update(parsed.notepad_update, turn.speaker)
        message = self.session.add_message(
            parsed.spoken_text,
            turn.speaker,
            turn.purpose,
            duration_ms=result.elapsed_ms,
            discussion_id=context.discussion_id,
        )
        logger.info(
            f"Discussion {context.discussion_id}: turn {turn.index} ({turn.kind.value}, {turn.speaker.value}) "
            f"done in {result.elapsed_ms:.0f} ms, notepad_update={parsed.has_notepad_update}"
        )
        return message

    def _report_invocation_failure(self, result: InvocationResult, discussion_id: str) -> ChatMessage:
        """Append the single System error message for a failed discussion."""
        if result.credentials_invalid:
            self.session.mark_credentials_invalid()
            return self.session.add_system_message(
                DiscussionPrompts.invalid_credentials_error.format(error_text=result.text),
                SystemNotice.CREDENTIALS,
                discussion_id=discussion_id,
                duration_ms=0,
            )
        return self.session.add_system_message(
            DiscussionPrompts.invocation_error.format(error_text=result.text or result.error),
            SystemNotice.ERROR,
            discussion_id=discussion_id,
            duration_ms=0,
        )

    def clear_session(self) -> None:
        """Reset messages and notepad; rejected while a discussion is in flight."""
        if self.session.is_busy:
            raise SessionBusyError("Cannot clear the session while a discussion is in progress")
        self.session.reset()
        logger.info("Session cleared")
