"""Tests for per-turn prompt assembly."""

import pytest

from dual_ai_chat.agent_service.common.system_prompts.discussion_prompts import DiscussionPrompts
from dual_ai_chat.agent_service.common.types.discussion_state import DiscussionTranscript, TurnKind
from dual_ai_chat.agent_service.common.types.messages import ChatMessage, MessagePurpose, MessageSender, SystemNotice
from dual_ai_chat.agent_service.discussion.prompt_builder import (
    build_notepad_block,
    build_opening_prompt,
    build_reply_prompt,
    build_synthesis_prompt,
    build_turn_prompt,
    role_header,
)


def _transcript() -> DiscussionTranscript:
    messages = [
        ChatMessage(text="What is 2+2?", sender=MessageSender.USER, purpose=MessagePurpose.USER_INPUT),
        ChatMessage(text="Cognito is preparing...", sender=MessageSender.SYSTEM,
                    purpose=MessagePurpose.SYSTEM_NOTIFICATION, notice=SystemNotice.ADVISORY),
        ChatMessage(text="It is 4.", sender=MessageSender.COGNITO, purpose=MessagePurpose.COGNITO_TO_MUSE),
        ChatMessage(text="Or a window, if you squint.", sender=MessageSender.MUSE, purpose=MessagePurpose.MUSE_TO_COGNITO),
    ]
    return DiscussionTranscript.from_messages(messages)


class TestTranscript:
    def test_only_agent_messages_are_included(self):
        transcript = _transcript()
        assert transcript.lines == ("Cognito: It is 4.", "Muse: Or a window, if you squint.")
        assert transcript.last_speaker == MessageSender.MUSE
        assert transcript.last_spoken_text == "Or a window, if you squint."

    def test_empty_transcript(self):
        transcript = DiscussionTranscript.from_messages([])
        assert transcript.render() == ""
        assert transcript.last_spoken_text is None


class TestNotepadBlock:
    def test_embeds_literal_content_and_tag_syntax(self):
        block = build_notepad_block("draft {with braces}")
        assert "draft {with braces}" in block
        assert DiscussionPrompts.notepad_update_tag_start in block
        assert DiscussionPrompts.notepad_update_tag_end in block
        assert "leaves the notepad unchanged" in block


class TestPrompts:
    def test_opening_prompt(self):
        prompt = build_opening_prompt("What is 2+2?", has_image=False, notepad_content="NOTES-1")
        assert prompt.startswith(DiscussionPrompts.cognito_system_header)
        assert '"What is 2+2?"' in prompt
        assert "Muse" in prompt
        assert "NOTES-1" in prompt
        assert DiscussionPrompts.image_note not in prompt

    def test_image_note_only_when_image_present(self):
        prompt = build_opening_prompt("Describe this", has_image=True, notepad_content="")
        assert DiscussionPrompts.image_note in prompt

    def test_reply_prompt_quotes_opponent_and_transcript(self):
        transcript = _transcript()
        prompt = build_reply_prompt(
            MessageSender.COGNITO,
            "What is 2+2?",
            False,
            transcript,
            transcript.last_spoken_text,
            "NOTES-2",
        )
        assert prompt.startswith(DiscussionPrompts.cognito_system_header)
        assert "Cognito: It is 4.\nMuse: Or a window, if you squint." in prompt
        assert 'Muse (the creative AI) just said: "Or a window, if you squint."' in prompt
        assert "NOTES-2" in prompt
        assert "Cognito is preparing" not in prompt

    def test_muse_reply_uses_muse_header(self):
        prompt = build_reply_prompt(MessageSender.MUSE, "q", False, _transcript(), "It is 4.", "")
        assert prompt.startswith(DiscussionPrompts.muse_system_header)
        assert 'Cognito (the logical AI) just said: "It is 4."' in prompt

    def test_synthesis_prompt_addresses_user(self):
        prompt = build_synthesis_prompt("What is 2+2?", False, _transcript(), "FINAL-NOTES")
        assert prompt.startswith(DiscussionPrompts.cognito_system_header)
        assert "Reply directly to the user, not to Muse" in prompt
        assert "Cognito: It is 4." in prompt
        assert "FINAL-NOTES" in prompt

    def test_turn_dispatch_rejects_muse_opening(self):
        with pytest.raises(ValueError):
            build_turn_prompt(TurnKind.OPENING, MessageSender.MUSE, "q", False, DiscussionTranscript(), "")
        with pytest.raises(ValueError):
            build_turn_prompt(TurnKind.SYNTHESIS, MessageSender.MUSE, "q", False, DiscussionTranscript(), "")

    def test_turn_dispatch_reply_quotes_last_utterance(self):
        prompt = build_turn_prompt(TurnKind.REPLY, MessageSender.COGNITO, "q", False, _transcript(), "N")
        assert '"Or a window, if you squint."' in prompt

    def test_role_header_rejects_non_agents(self):
        with pytest.raises(ValueError):
            role_header(MessageSender.USER)
