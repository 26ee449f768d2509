# canonical DTOs for chat messages and the shared notepad

import random
import string
import time
from datetime import datetime, timezone
from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

class MessageSender(str, Enum):
    """
    Who produced a message.
    - COGNITO is the logical agent, MUSE the creative agent.
    """
    USER = "User"
    COGNITO = "Cognito"
    MUSE = "Muse"
    SYSTEM = "System"

class MessagePurpose(str, Enum):
    USER_INPUT = "user_input"
    COGNITO_TO_MUSE = "cognito_to_muse" # forward
    MUSE_TO_COGNITO = "muse_to_cognito" # reverse
    FINAL_RESPONSE = "final_response"
    SYSTEM_NOTIFICATION = "system_notification"

# agent-to-agent purposes, the only ones that feed the discussion transcript
DISCUSSION_PURPOSES = frozenset({MessagePurpose.COGNITO_TO_MUSE, MessagePurpose.MUSE_TO_COGNITO})

class SystemNotice(str, Enum):
    """
    Category of a SYSTEM_NOTIFICATION message.
    Lets consumers filter status chatter without sniffing message text.
    """
    WELCOME = "welcome"
    ADVISORY = "advisory" # "X is about to speak", never part of a prompt
    ERROR = "error"
    CREDENTIALS = "credentials"

def generate_message_id() -> str:
    """Millisecond timestamp followed by a short random base36 suffix."""
    suffix = "".join(random.choices(string.ascii_lowercase + string.digits, k=9))
    return f"{int(time.time() * 1000)}{suffix}"

class ImageAttachment(BaseModel):
    """Display descriptor for an image the user attached."""
    model_config = ConfigDict(frozen=True)

    display_url: str = Field(description="Display handle for the presentation layer, released when the discussion ends.")
    name: str
    mime_type: str

class ChatMessage(BaseModel):
    """
    One immutable utterance in the session transcript.
    """
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=generate_message_id)
    text: str
    sender: MessageSender
    purpose: MessagePurpose
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    duration_ms: Optional[float] = None
    image: Optional[ImageAttachment] = None
    notice: Optional[SystemNotice] = None
    discussion_id: Optional[str] = None

class Notepad(BaseModel):
    """
    Shared scratch buffer, always holding the latest FULL replacement.
    Mutated only through SessionState.apply_notepad_update().
    """
    content: str
    last_updated_by: Optional[MessageSender] = None
