# response models for the discussion routes

from pydantic import BaseModel

from dual_ai_chat.agent_service.common.types.discussion_state import DiscussionOutcome, SessionSnapshot
from dual_ai_chat.common.services.llm_service.model_registry import AiModel

class SubmitResponse(BaseModel):
    """
    Response model for a submitted query: the discussion outcome plus the session after it.
    """
    outcome: DiscussionOutcome
    session: SessionSnapshot

class ModelsResponse(BaseModel):
    """
    Response model listing the registry and the current selection.
    """
    models: list[AiModel]
    selected_model_api_name: str
    thinking_budget_enabled: bool
    thinking_budget_supported: bool

class HealthResponse(BaseModel):
    status: str
    credentials_valid: bool
    is_busy: bool
