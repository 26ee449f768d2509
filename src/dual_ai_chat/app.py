from typing import Any
from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dual_ai_chat.common.logging.logger import logger
from dual_ai_chat.config.app_config import get_service_settings
from dual_ai_chat.core.lifespan import lifespan
from dual_ai_chat.core.dependencies import get_session_state
from dual_ai_chat.agent_service.session.session_state import SessionState
from dual_ai_chat.api.response_models.discussion import HealthResponse
from dual_ai_chat.api.routes.discussion_route import router as discussion_router

# disable FastAPI docs for production/deployment
is_local = get_service_settings().INCLUDE_DOCS
logger.info(f"is_local (include FastAPI docs?): {is_local}")

docs_config: dict[str, Any] = {
    "docs_url": "/docs" if is_local else None,
    "redoc_url": "/redoc" if is_local else None,
    "openapi_url": "/openapi.json" if is_local else None,
}

# main app, asgi entrypoint
app = FastAPI(
    title="Dual AI Chat Service",
    description="Cognito (logical) and Muse (creative) discuss each query over a shared notepad before answering",
    version="0.1.0",
    lifespan=lifespan,
    **docs_config,
)

# add CORS middleware
# TODO: restrict origins once the frontend host is fixed
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.get("/")
async def root():
    return {"message": "Dual AI Chat is running"}

# health endpoint
@app.get("/health", response_model=HealthResponse)
async def health(session: SessionState = Depends(get_session_state)):
    status = "ok" if session.credentials_valid else "degraded"
    return HealthResponse(status=status, credentials_valid=session.credentials_valid, is_busy=session.is_busy)

app.include_router(discussion_router)
