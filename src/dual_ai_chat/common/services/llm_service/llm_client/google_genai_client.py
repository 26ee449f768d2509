# The core async set up for Google's GenAI model invoker
# NOTE: Can be swapped for different LLM providers if necessary

import base64
import time
from typing import Optional

# use tenacity to retry when desired
from tenacity import AsyncRetrying, stop_after_attempt, wait_fixed, retry_if_exception_type

from google import genai # officially recommended import path
from google.genai import types
from google.genai import errors as genai_errors

from dual_ai_chat.agent_service.common.types.llm_outputs.invocation_outputs import (
    CREDENTIALS_INVALID_SIGNATURE,
    InlineImage,
    InvocationErrorKind,
    InvocationResult,
)
from .protocols import ModelInvokerProtocol, ProvidesProviderInfo, RateLimitProvider

from dual_ai_chat.common.logging.logger import logger

# NOTE: this uses the public Gemini API with an API key, not Vertex AI.
# Set up this client with API key during app initialization
class AsyncGenAIModelInvoker(ModelInvokerProtocol, ProvidesProviderInfo):
    """
    Plain-text Gemini invoker for discussion turns.
    Never raises to the caller: every failure is reported through InvocationResult.error.
    """
    def __init__(
        self,
        model_name: str = "gemini-2.5-flash-preview-05-20", # reporting default, each call names its own model
        *,
        api_key: str | None = None,
        retry_attempts: int = 1, # 1 means a single attempt, the discussion itself never retries
        retry_wait: float = 0.5,
        retry_on: type[Exception] = genai_errors.ServerError, # only transient 5xx errors are worth another attempt
    ):
        # Create shared client in __init__ for FastAPI (ASGI)
        # FastAPI runs in a single event loop, so sharing the client is safe and efficient
        self.client = genai.Client(api_key=api_key)
        # Provider metadata for reporting
        self.provider = RateLimitProvider.GOOGLE
        self.model = model_name
        self.retryer = AsyncRetrying(
            stop=stop_after_attempt(retry_attempts),
            wait=wait_fixed(retry_wait),
            retry=retry_if_exception_type(retry_on),
            reraise=True,
        )

    @staticmethod
    def _build_contents(prompt: str, image: Optional[InlineImage]) -> list[types.Content]:
        """Wrap the prompt (and optional inline image) into a single user turn."""
        parts = [types.Part(text=prompt)]
        if image is not None:
            parts.append(
                types.Part.from_bytes(data=base64.b64decode(image.data), mime_type=image.mime_type)
            )
        return [types.Content(role="user", parts=parts)]

    @staticmethod
    def _build_config(system_header: str, disable_thinking: bool) -> types.GenerateContentConfig:
        # thinking budget 0 switches extended reasoning off for models that support it
        thinking_config = types.ThinkingConfig(thinking_budget=0) if disable_thinking else None
        return types.GenerateContentConfig(
            system_instruction=system_header,
            thinking_config=thinking_config,
        )

    @staticmethod
    def classify_api_error(exc: genai_errors.APIError) -> InvocationErrorKind:
        """Map a Gemini API error onto the structured error kinds the orchestrator understands."""
        message = str(exc)
        if exc.code in (401, 403):
            return InvocationErrorKind.CREDENTIALS_INVALID
        if "API_KEY_INVALID" in message or CREDENTIALS_INVALID_SIGNATURE in message:
            return InvocationErrorKind.CREDENTIALS_INVALID
        return InvocationErrorKind.REQUEST_FAILED

    async def ainvoke(
        self,
        prompt: str,
        model_name: str,
        system_header: str,
        disable_thinking: bool = False,
        image: Optional[InlineImage] = None,
    ) -> InvocationResult:
        """
        Send one discussion turn to Gemini and return the generated text with wall-clock timing.
        """
        contents = self._build_contents(prompt, image)
        config = self._build_config(system_header, disable_thinking)

        start = time.perf_counter()
        try:
            async for attempt in self.retryer:
                with attempt: # let tenacity see context of each attempt instead of swallowing until the last
                    resp = await self.client.aio.models.generate_content(
                        model=model_name,
                        contents=contents, # type: ignore
                        config=config,
                    )
        except genai_errors.APIError as e:
            elapsed_ms = (time.perf_counter() - start) * 1000
            kind = self.classify_api_error(e)
            logger.warning(f"Gemini call failed ({kind.value}, code={e.code}) for model '{model_name}': {e}")
            if kind == InvocationErrorKind.CREDENTIALS_INVALID:
                text = "The API key is invalid or not authorized. Check the GOOGLE_GENAI_API_KEY configuration."
            else:
                text = f"The model request failed: {e}"
            return InvocationResult(text=text, elapsed_ms=elapsed_ms, error=str(e), error_kind=kind)
        except Exception as e:
            elapsed_ms = (time.perf_counter() - start) * 1000
            logger.warning(f"Unexpected error calling model '{model_name}': {type(e).__name__}: {e}")
            return InvocationResult(
                text=f"The model request failed: {e}",
                elapsed_ms=elapsed_ms,
                error=f"{type(e).__name__}: {e}",
                error_kind=InvocationErrorKind.REQUEST_FAILED,
            )

        elapsed_ms = (time.perf_counter() - start) * 1000
        text = resp.text or ""
        if not text.strip():
            logger.warning(f"Model '{model_name}' returned an empty response after {elapsed_ms:.0f} ms")
            return InvocationResult(
                text="The model returned an empty response.",
                elapsed_ms=elapsed_ms,
                error="empty response",
                error_kind=InvocationErrorKind.EMPTY_RESPONSE,
            )
        return InvocationResult(text=text, elapsed_ms=elapsed_ms)
