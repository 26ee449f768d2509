"""Tests for splitting agent replies into spoken text and notepad updates."""

from dual_ai_chat.agent_service.common.system_prompts.discussion_prompts import DiscussionPrompts
from dual_ai_chat.agent_service.discussion.response_parser import parse_agent_response

START = DiscussionPrompts.notepad_update_tag_start
END = DiscussionPrompts.notepad_update_tag_end


class TestParseAgentResponse:
    def test_plain_text_has_no_update(self):
        parsed = parse_agent_response("  Four, obviously.  \n")
        assert parsed.spoken_text == "Four, obviously."
        assert parsed.notepad_update is None
        assert not parsed.has_notepad_update

    def test_spoken_text_and_update(self):
        parsed = parse_agent_response(f"Let's note this.\n{START}\n- 2+2 = 4\n{END}\n")
        assert parsed.spoken_text == "Let's note this."
        assert parsed.notepad_update == "- 2+2 = 4"

    def test_last_marker_pair_wins(self):
        raw = (
            f"To update, write {START}...{END} as instructed. Here is mine:\n"
            f"{START}final notes{END}"
        )
        parsed = parse_agent_response(raw)
        assert parsed.notepad_update == "final notes"
        assert parsed.spoken_text.startswith("To update, write")

    def test_only_tags_is_a_silent_update(self):
        parsed = parse_agent_response(f"{START}X{END}")
        assert parsed.spoken_text == DiscussionPrompts.silent_notepad_update_placeholder
        assert parsed.notepad_update == "X"

    def test_tags_with_trailing_text_still_apply(self):
        parsed = parse_agent_response(f"{START}X{END} and more")
        assert parsed.spoken_text == DiscussionPrompts.silent_notepad_update_placeholder
        assert parsed.notepad_update == "X"

    def test_empty_tags_alone_are_malformed(self):
        parsed = parse_agent_response(f"{START}{END}")
        assert parsed.spoken_text == DiscussionPrompts.malformed_notepad_update_placeholder
        assert parsed.notepad_update is None

    def test_empty_tags_with_trailing_text_keep_text(self):
        parsed = parse_agent_response(f"{START}   {END} trailing words")
        assert parsed.spoken_text == "trailing words"
        assert parsed.notepad_update is None

    def test_spoken_text_with_empty_update_clears_notepad(self):
        parsed = parse_agent_response(f"Wiping the notepad. {START}{END}")
        assert parsed.spoken_text == "Wiping the notepad."
        assert parsed.notepad_update == ""
        assert parsed.has_notepad_update

    def test_end_before_start_is_ignored(self):
        raw = f"{END} odd {START}"
        parsed = parse_agent_response(raw)
        assert parsed.spoken_text == raw.strip()
        assert parsed.notepad_update is None

    def test_missing_end_marker_is_ignored(self):
        parsed = parse_agent_response(f"Thinking... {START} draft")
        assert parsed.notepad_update is None
        assert parsed.spoken_text == f"Thinking... {START} draft"
