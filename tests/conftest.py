"""
Shared fixtures for the Dual AI Chat test suite.

Provides a scripted stub invoker so the orchestrator runs without network calls,
plus a fresh session and orchestrator per test.
"""

from dataclasses import dataclass, field
from typing import Optional

import pytest

from dual_ai_chat.agent_service.common.types.llm_outputs.invocation_outputs import InlineImage, InvocationResult
from dual_ai_chat.agent_service.orchestrator.discussion_orchestrator import DiscussionOrchestrator
from dual_ai_chat.agent_service.session.session_state import SessionState
from dual_ai_chat.common.services.llm_service.llm_client import LLMProvider, ModelInvokerClient
from dual_ai_chat.common.services.media.image_inputs import ImageHandleStore


@dataclass
class RecordedCall:
    prompt: str
    model_name: str
    system_header: str
    disable_thinking: bool
    image: Optional[InlineImage]


@dataclass
class StubInvoker:
    """
    Fake invoker returning canned results in order.
    Once the script is exhausted it answers with a generic reply numbered by call index.
    """

    script: list[InvocationResult] = field(default_factory=list)
    calls: list[RecordedCall] = field(default_factory=list)

    async def ainvoke(
        self,
        prompt: str,
        model_name: str,
        system_header: str,
        disable_thinking: bool = False,
        image: Optional[InlineImage] = None,
    ) -> InvocationResult:
        self.calls.append(RecordedCall(prompt, model_name, system_header, disable_thinking, image))
        index = len(self.calls) - 1
        if index < len(self.script):
            return self.script[index]
        return InvocationResult(text=f"reply {index}", elapsed_ms=10.0)


def ok(text: str) -> InvocationResult:
    """Successful canned result."""
    return InvocationResult(text=text, elapsed_ms=12.5)


@pytest.fixture
def stub_invoker():
    return StubInvoker()


@pytest.fixture
def session():
    return SessionState(credentials_valid=True)


@pytest.fixture
def image_store():
    return ImageHandleStore()


@pytest.fixture
def orchestrator(session, stub_invoker, image_store):
    return DiscussionOrchestrator(
        session=session,
        invoker=ModelInvokerClient(provider=LLMProvider.STUB, client=stub_invoker),
        image_store=image_store,
        turns_per_model=2,
    )
