"""Split a raw agent response into spoken text and an optional full notepad replacement."""

from typing import Optional
from pydantic import BaseModel, ConfigDict

from dual_ai_chat.agent_service.common.system_prompts.discussion_prompts import DiscussionPrompts

TAG_START = DiscussionPrompts.notepad_update_tag_start
TAG_END = DiscussionPrompts.notepad_update_tag_end

class ParsedAgentResponse(BaseModel):
    """
    - notepad_update is None when the agent left the notepad alone.
    - notepad_update == "" is a legitimate request to clear the notepad.
    """
    model_config = ConfigDict(frozen=True)

    spoken_text: str
    notepad_update: Optional[str] = None

    @property
    def has_notepad_update(self) -> bool:
        return self.notepad_update is not None

def parse_agent_response(raw_text: str) -> ParsedAgentResponse:
    """
    Extract the spoken part and the notepad replacement from `raw_text`.

    The LAST start and end markers are used, so an agent may quote the tag syntax earlier
    in its reply. The pair is only valid when the end marker comes strictly after the start marker.
    """
    start_index = raw_text.rfind(TAG_START)
    end_index = raw_text.rfind(TAG_END)

    if start_index == -1 or end_index == -1 or end_index <= start_index:
        return ParsedAgentResponse(spoken_text=raw_text.strip())

    candidate = raw_text[start_index + len(TAG_START):end_index].strip()
    spoken_text = raw_text[:start_index].strip()

    if not spoken_text and candidate and raw_text.strip() == f"{TAG_START}{candidate}{TAG_END}":
        return ParsedAgentResponse(
            spoken_text=DiscussionPrompts.silent_notepad_update_placeholder,
            notepad_update=candidate,
        )

    if not spoken_text and not candidate and TAG_START in raw_text:
        # empty tag pair with nothing around it: report it, never apply an empty overwrite
        stripped = raw_text.replace(TAG_START, "", 1).replace(TAG_END, "", 1).strip()
        return ParsedAgentResponse(
            spoken_text=stripped or DiscussionPrompts.malformed_notepad_update_placeholder,
        )

    return ParsedAgentResponse(
        spoken_text=spoken_text or DiscussionPrompts.silent_notepad_update_placeholder,
        notepad_update=candidate,
    )
