# dispatcher for model invokers, currently only Google Gemini AI, but scalable to other LLM providers
# NOTE: the orchestrator only depends on this wrapper, so tests can inject a stub invoker.

from enum import Enum, auto
from typing import Optional

from dual_ai_chat.agent_service.common.types.llm_outputs.invocation_outputs import InlineImage, InvocationResult
from .protocols import ModelInvokerProtocol

# NOTE: to be expanded with more services if desired
class LLMProvider(Enum):
    GOOGLE_GENAI = auto() # just need a unique identifier
    STUB = auto() # scripted invokers for tests and offline runs

class ModelInvokerClient:
    def __init__(self, provider: LLMProvider, client: ModelInvokerProtocol):
        self.provider = provider
        self.client = client

    async def ainvoke(
        self,
        prompt: str,
        model_name: str,
        system_header: str,
        disable_thinking: bool = False,
        image: Optional[InlineImage] = None,
    ) -> InvocationResult:
        return await self.client.ainvoke(
            prompt=prompt,
            model_name=model_name,
            system_header=system_header,
            disable_thinking=disable_thinking,
            image=image,
        )
