# routes for the user-facing discussion actions: submit, clear, select model, toggle thinking budget

from typing import Optional
from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status
from dual_ai_chat.common.logging.logger import logger
# dependencies
from dual_ai_chat.core.dependencies import get_orchestrator, get_session_state
# services
from dual_ai_chat.agent_service.orchestrator.discussion_orchestrator import DiscussionOrchestrator
from dual_ai_chat.agent_service.session.session_state import SessionState
from dual_ai_chat.agent_service.common.errors import (
    CredentialsUnavailableError,
    EmptySubmissionError,
    SessionBusyError,
    ThinkingBudgetUnsupportedError,
    UnknownModelError,
)
from dual_ai_chat.agent_service.common.types.discussion_state import SessionSnapshot
from dual_ai_chat.common.services.llm_service.model_registry import MODELS
from dual_ai_chat.common.services.media.image_inputs import ImageUpload

# response models
from dual_ai_chat.api.response_models.discussion import ModelsResponse, SubmitResponse
# request body models
from dual_ai_chat.api.request_models.discussion import SelectModelRequest, ThinkingBudgetRequest

router = APIRouter(tags=["Discussion"])

def _models_response(session: SessionState) -> ModelsResponse:
    return ModelsResponse(
        models=list(MODELS),
        selected_model_api_name=session.selected_model.api_name,
        thinking_budget_enabled=session.thinking_budget_enabled,
        thinking_budget_supported=session.selected_model.supports_thinking_budget,
    )

@router.get("/models", response_model=ModelsResponse)
async def list_models(session: SessionState = Depends(get_session_state)):
    return _models_response(session)

@router.get("/discussion/state", response_model=SessionSnapshot)
async def get_state(session: SessionState = Depends(get_session_state)):
    # read-only, stays responsive while a discussion awaits the model
    return session.snapshot()

@router.post("/discussion/messages", response_model=SubmitResponse)
async def submit_message(
    text: str = Form(default=""),
    image: Optional[UploadFile] = File(default=None),
    orchestrator: DiscussionOrchestrator = Depends(get_orchestrator),
):
    upload: Optional[ImageUpload] = None
    if image is not None and image.filename:
        upload = ImageUpload(
            filename=image.filename,
            mime_type=image.content_type or "",
            data=await image.read(),
        )
    logger.info(f"Submission received: {len(text)} chars, image={upload is not None}")

    try:
        outcome = await orchestrator.submit(text, upload)
    except CredentialsUnavailableError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    except SessionBusyError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except EmptySubmissionError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))

    return SubmitResponse(outcome=outcome, session=orchestrator.session.snapshot())

@router.post("/discussion/clear", response_model=SessionSnapshot)
async def clear_discussion(orchestrator: DiscussionOrchestrator = Depends(get_orchestrator)):
    try:
        orchestrator.clear_session()
    except SessionBusyError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    return orchestrator.session.snapshot()

@router.put("/discussion/model", response_model=ModelsResponse)
async def select_model(request: SelectModelRequest, session: SessionState = Depends(get_session_state)):
    try:
        session.select_model(request.api_name)
    except UnknownModelError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return _models_response(session)

@router.put("/discussion/thinking-budget", response_model=ModelsResponse)
async def set_thinking_budget(request: ThinkingBudgetRequest, session: SessionState = Depends(get_session_state)):
    try:
        session.set_thinking_budget_enabled(request.enabled)
    except ThinkingBudgetUnsupportedError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return _models_response(session)
