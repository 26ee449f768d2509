# protocols for model invokers

from typing import Optional, Protocol, runtime_checkable
from enum import Enum

from dual_ai_chat.agent_service.common.types.llm_outputs.invocation_outputs import InlineImage, InvocationResult

# Ensures that all model invokers implement this protocol
class ModelInvokerProtocol(Protocol):
    async def ainvoke(
        self,
        prompt: str,
        model_name: str,
        system_header: str,
        disable_thinking: bool = False,
        image: Optional[InlineImage] = None,
    ) -> InvocationResult: ...

class RateLimitProvider(str, Enum):
    """Enumeration of supported rate limit providers."""
    GOOGLE = "google"

@runtime_checkable
class ProvidesProviderInfo(Protocol):
    """Optional protocol for exposing provider/model metadata for reporting."""
    provider: RateLimitProvider
    model: str
