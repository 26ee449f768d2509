"""Tests for the in-memory session: notepad writes, notices, model selection."""

import pytest

from dual_ai_chat.agent_service.common.errors import ThinkingBudgetUnsupportedError, UnknownModelError
from dual_ai_chat.agent_service.common.system_prompts.discussion_prompts import DiscussionPrompts
from dual_ai_chat.agent_service.common.types.discussion_state import DiscussionPhase
from dual_ai_chat.agent_service.common.types.messages import MessagePurpose, MessageSender, SystemNotice
from dual_ai_chat.agent_service.session.session_state import SessionState
from dual_ai_chat.common.services.llm_service.model_registry import GEMINI_FLASH_MODEL_ID, GEMINI_PRO_MODEL_ID


class TestSessionStart:
    def test_welcome_notice_when_credentials_valid(self, session):
        assert len(session.messages) == 1
        welcome = session.messages[0]
        assert welcome.purpose == MessagePurpose.SYSTEM_NOTIFICATION
        assert welcome.notice == SystemNotice.WELCOME
        assert "Gemini 2.5 Flash (05-20)" in welcome.text
        assert session.notepad.content == DiscussionPrompts.initial_notepad_content
        assert session.notepad.last_updated_by is None
        assert session.phase == DiscussionPhase.IDLE

    def test_missing_key_notice(self):
        state = SessionState(credentials_valid=False)
        assert [m.notice for m in state.messages] == [SystemNotice.CREDENTIALS]
        assert state.messages[0].text == DiscussionPrompts.missing_api_key_notice

    def test_unknown_default_model_falls_back_to_first(self):
        state = SessionState(credentials_valid=True, model_api_name="not-a-model")
        assert state.selected_model.api_name == GEMINI_FLASH_MODEL_ID


class TestNotepad:
    def test_absent_update_leaves_notepad(self, session):
        assert session.apply_notepad_update(None, MessageSender.MUSE) is False
        assert session.notepad.content == DiscussionPrompts.initial_notepad_content
        assert session.notepad.last_updated_by is None

    def test_empty_string_is_a_real_overwrite(self, session):
        assert session.apply_notepad_update("", MessageSender.MUSE) is True
        assert session.notepad.content == ""
        assert session.notepad.last_updated_by == MessageSender.MUSE

    def test_same_update_twice_is_idempotent(self, session):
        session.apply_notepad_update("plan", MessageSender.COGNITO)
        once = session.notepad.content
        session.apply_notepad_update("plan", MessageSender.MUSE)
        assert session.notepad.content == once == "plan"
        assert session.notepad.last_updated_by == MessageSender.MUSE

    def test_reset_restores_template(self, session):
        session.apply_notepad_update("scribbles", MessageSender.COGNITO)
        session.add_message("hi", MessageSender.USER, MessagePurpose.USER_INPUT)
        session.reset()
        assert session.notepad.content == DiscussionPrompts.initial_notepad_content
        assert session.notepad.last_updated_by is None
        assert [m.notice for m in session.messages] == [SystemNotice.WELCOME]


class TestModelSelection:
    def test_select_known_model(self, session):
        model = session.select_model(GEMINI_PRO_MODEL_ID)
        assert session.selected_model == model
        assert session.snapshot().selected_model_api_name == GEMINI_PRO_MODEL_ID

    def test_select_unknown_model(self, session):
        with pytest.raises(UnknownModelError):
            session.select_model("gpt-nope")

    def test_disable_thinking_only_for_supporting_models(self, session):
        assert session.disable_thinking is False
        session.set_thinking_budget_enabled(False)
        assert session.disable_thinking is True
        session.select_model(GEMINI_PRO_MODEL_ID)
        assert session.disable_thinking is False

    def test_toggle_rejected_for_unsupported_model(self, session):
        session.select_model(GEMINI_PRO_MODEL_ID)
        with pytest.raises(ThinkingBudgetUnsupportedError):
            session.set_thinking_budget_enabled(False)


class TestSnapshot:
    def test_snapshot_is_detached(self, session):
        snapshot = session.snapshot()
        session.add_message("later", MessageSender.USER, MessagePurpose.USER_INPUT)
        session.apply_notepad_update("new", MessageSender.MUSE)
        assert len(snapshot.messages) == 1
        assert snapshot.notepad.content == DiscussionPrompts.initial_notepad_content

    def test_message_ids_are_unique(self, session):
        for i in range(50):
            session.add_message(str(i), MessageSender.USER, MessagePurpose.USER_INPUT)
        ids = [m.id for m in session.messages]
        assert len(set(ids)) == len(ids)
