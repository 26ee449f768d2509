from contextlib import asynccontextmanager, AsyncExitStack
from fastapi import FastAPI
from dual_ai_chat.config.app_config import get_service_settings
from dual_ai_chat.common.logging.logger import logger
from dual_ai_chat.common.services.llm_service.llm_client import ModelInvokerClient, LLMProvider
from dual_ai_chat.common.services.llm_service.llm_client.google_genai_client import AsyncGenAIModelInvoker
from dual_ai_chat.common.services.media.image_inputs import ImageHandleStore
from dual_ai_chat.agent_service.session.session_state import SessionState
from dual_ai_chat.agent_service.orchestrator.discussion_orchestrator import DiscussionOrchestrator

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manages the service's startup and shutdown events.
    Uses the AsyncExitStack to clean up resources.
    Register resources to the app state to be used as dependencies.

    NOTE:
    - Use stack.enter_async_context when the resource has __aenter__ and __aexit__ support
    - Use stack.push_async_callback to register the clean up method only
    """
    # default start up message
    logger.info("Starting Dual AI Chat service!")

    # initialize resources during start up
    logger.info("Initializing service resources...")
    settings = get_service_settings()

    async with AsyncExitStack() as stack:

        # LLM client, only built when a key is configured
        # NOTE: a missing key is not fatal, the session starts with credentials marked invalid
        invoker_client = None
        if settings.has_api_key:
            google_invoker = AsyncGenAIModelInvoker(
                model_name=settings.DEFAULT_MODEL_API_NAME,
                api_key=settings.GOOGLE_GENAI_API_KEY,
                retry_attempts=settings.GOOGLE_GENAI_RETRY_ATTEMPTS,
                retry_wait=settings.GOOGLE_GENAI_RETRY_WAIT,
            )
            invoker_client = ModelInvokerClient(provider=LLMProvider.GOOGLE_GENAI, client=google_invoker)
            aclose = getattr(google_invoker.client.aio, "aclose", None)
            if aclose is not None:
                stack.push_async_callback(aclose)
            logger.info("LLM client (GOOGLE GENAI) initialized.")
        else:
            logger.warning("GOOGLE_GENAI_API_KEY is not set, submissions will be rejected.")

        # single in-memory session + orchestrator
        session = SessionState(
            credentials_valid=invoker_client is not None,
            model_api_name=settings.DEFAULT_MODEL_API_NAME,
            thinking_budget_enabled=settings.THINKING_BUDGET_ENABLED,
        )
        image_store = ImageHandleStore()
        app.state.session = session
        app.state.orchestrator = DiscussionOrchestrator(
            session=session,
            invoker=invoker_client,
            image_store=image_store,
            turns_per_model=settings.MAX_DISCUSSION_TURNS_PER_MODEL,
        )
        logger.info(f"Discussion orchestrator initialized ({settings.MAX_DISCUSSION_TURNS_PER_MODEL} turns per model).")

        try:
            # lets FastAPI process requests during yield
            yield
        finally:
            logger.info("Shutting down service resources...")

        # The AsyncExitStack will automatically call the registered cleanup
        # methods for all resources pushed to it, in reverse order.
        logger.info("All global resources have been gracefully closed.")
