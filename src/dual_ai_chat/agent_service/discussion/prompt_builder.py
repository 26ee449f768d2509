"""Prompt assembly for each discussion turn."""

from typing import Optional

from dual_ai_chat.agent_service.common.system_prompts.discussion_prompts import DiscussionPrompts
from dual_ai_chat.agent_service.common.types.discussion_state import DiscussionTranscript, TurnKind
from dual_ai_chat.agent_service.common.types.messages import MessageSender

ROLE_HEADERS: dict[MessageSender, str] = {
    MessageSender.COGNITO: DiscussionPrompts.cognito_system_header,
    MessageSender.MUSE: DiscussionPrompts.muse_system_header,
}

ROLE_DESCRIPTIONS: dict[MessageSender, str] = {
    MessageSender.COGNITO: "the logical AI",
    MessageSender.MUSE: "the creative AI",
}

def role_header(role: MessageSender) -> str:
    try:
        return ROLE_HEADERS[role]
    except KeyError:
        raise ValueError(f"{role.value} is not a discussion agent") from None

def _opponent(role: MessageSender) -> MessageSender:
    return MessageSender.MUSE if role == MessageSender.COGNITO else MessageSender.COGNITO

def build_notepad_block(notepad_content: str) -> str:
    """Notepad instructions with the literal current notepad content interpolated."""
    return DiscussionPrompts.notepad_instruction_template.format(notepad_content=notepad_content)

def build_image_note(has_image: bool) -> str:
    return DiscussionPrompts.image_note if has_image else ""

def build_opening_prompt(user_query: str, has_image: bool, notepad_content: str) -> str:
    """Cognito's first statement to Muse."""
    return DiscussionPrompts.opening_template.format(
        header=role_header(MessageSender.COGNITO),
        user_query=user_query,
        image_note=build_image_note(has_image),
        opponent=MessageSender.MUSE.value,
        notepad_block=build_notepad_block(notepad_content),
    )

def build_reply_prompt(
    role: MessageSender,
    user_query: str,
    has_image: bool,
    transcript: DiscussionTranscript,
    last_utterance: Optional[str],
    notepad_content: str,
) -> str:
    """A continuation turn for either agent, quoting the opponent's latest spoken text."""
    opponent = _opponent(role)
    return DiscussionPrompts.reply_template.format(
        header=role_header(role),
        user_query=user_query,
        image_note=build_image_note(has_image),
        transcript=transcript.render(),
        opponent=opponent.value,
        opponent_description=ROLE_DESCRIPTIONS[opponent],
        last_utterance=last_utterance or "",
        notepad_block=build_notepad_block(notepad_content),
    )

def build_synthesis_prompt(
    user_query: str,
    has_image: bool,
    transcript: DiscussionTranscript,
    notepad_content: str,
) -> str:
    """Cognito's final answer addressed to the user."""
    return DiscussionPrompts.synthesis_template.format(
        header=role_header(MessageSender.COGNITO),
        user_query=user_query,
        image_note=build_image_note(has_image),
        speaker=MessageSender.COGNITO.value,
        opponent=MessageSender.MUSE.value,
        transcript=transcript.render(),
        notepad_block=build_notepad_block(notepad_content),
    )

def build_turn_prompt(
    kind: TurnKind,
    role: MessageSender,
    user_query: str,
    has_image: bool,
    transcript: DiscussionTranscript,
    notepad_content: str,
) -> str:
    """
    Dispatch on the turn kind.
    Opening and synthesis turns always belong to Cognito.
    """
    if kind == TurnKind.OPENING:
        if role != MessageSender.COGNITO:
            raise ValueError("only Cognito opens the discussion")
        return build_opening_prompt(user_query, has_image, notepad_content)
    if kind == TurnKind.SYNTHESIS:
        if role != MessageSender.COGNITO:
            raise ValueError("only Cognito synthesizes the final answer")
        return build_synthesis_prompt(user_query, has_image, transcript, notepad_content)
    return build_reply_prompt(
        role,
        user_query,
        has_image,
        transcript,
        transcript.last_spoken_text,
        notepad_content,
    )
