# model invoker clients

from dual_ai_chat.common.services.llm_service.llm_client.dispatcher import ModelInvokerClient, LLMProvider
from dual_ai_chat.common.services.llm_service.llm_client.protocols import ModelInvokerProtocol

# NOTE: only supports the generic wrappers here
__all__ = ["ModelInvokerClient", "LLMProvider", "ModelInvokerProtocol"]
