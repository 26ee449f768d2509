# output types for a single model invocation

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field, model_validator

# free-text signature the Gemini API uses for a rejected key
CREDENTIALS_INVALID_SIGNATURE = "API key not valid"

class InvocationErrorKind(str, Enum):
    """
    Structured category of a failed invocation.
    The orchestrator branches on this, never on the error text.
    """
    CREDENTIALS_INVALID = "credentials_invalid"
    REQUEST_FAILED = "request_failed"
    EMPTY_RESPONSE = "empty_response"

def classify_error_message(error: str) -> InvocationErrorKind:
    """Best-effort classification for invokers that only report free text."""
    if CREDENTIALS_INVALID_SIGNATURE.lower() in error.lower() or "API_KEY_INVALID" in error:
        return InvocationErrorKind.CREDENTIALS_INVALID
    return InvocationErrorKind.REQUEST_FAILED

class InlineImage(BaseModel):
    """An image attached to the model request, base64-encoded."""
    mime_type: str
    data: str = Field(description="Base64-encoded image bytes.")

class InvocationResult(BaseModel):
    """
    Result of one model call.
    - When `error` is set, `text` holds a user-displayable description of the failure.
    - `error_kind` is always set alongside `error`; when the invoker omits it, it is classified from the error text.
    """
    text: str = ""
    elapsed_ms: float = 0.0
    error: Optional[str] = None
    error_kind: Optional[InvocationErrorKind] = None

    @model_validator(mode="after")
    def _classify_error(self) -> "InvocationResult":
        if self.error is not None and self.error_kind is None:
            self.error_kind = classify_error_message(self.error)
        return self

    @property
    def failed(self) -> bool:
        return self.error is not None

    @property
    def credentials_invalid(self) -> bool:
        return self.error_kind == InvocationErrorKind.CREDENTIALS_INVALID
