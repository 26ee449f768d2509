# request bodies for the discussion routes
# NOTE: query submission is multipart form data (text + optional image), so it has no body model here

from pydantic import BaseModel

class SelectModelRequest(BaseModel):
    """
    Request body for switching the model used by the next discussion.
    """
    api_name: str

class ThinkingBudgetRequest(BaseModel):
    """
    Request body for toggling extended reasoning on models that support it.
    """
    enabled: bool
