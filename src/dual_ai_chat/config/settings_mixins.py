# mixin settings for external services and the discussion protocol
from typing import Optional
from pydantic import BaseModel, Field

from dual_ai_chat.common.services.llm_service.model_registry import DEFAULT_MODEL_API_NAME

class GoogleGenAISettingsMixin(BaseModel):
    """
    Model for Google GenAI LLM Client settings.
    NOTE: the key is optional so the service can still boot and report missing credentials to the user.
    """
    GOOGLE_GENAI_API_KEY: Optional[str] = None
    # total attempts per call, only transient server errors are retried; 1 disables retries
    GOOGLE_GENAI_RETRY_ATTEMPTS: int = Field(default=1, ge=1, description="Total attempts per model call.")
    GOOGLE_GENAI_RETRY_WAIT: float = Field(default=0.5, ge=0.0, description="Seconds to wait between attempts.")

class DiscussionSettingsMixin(BaseModel):
    """
    Model for the Cognito/Muse discussion protocol settings.
    """
    MAX_DISCUSSION_TURNS_PER_MODEL: int = Field(default=2, ge=0, description="Alternating Muse/Cognito round-trips after the opening.")
    DEFAULT_MODEL_API_NAME: str = Field(default=DEFAULT_MODEL_API_NAME, description="Model selected when a session starts.")
    THINKING_BUDGET_ENABLED: bool = Field(default=True, description="Whether extended reasoning starts enabled.")
