from fastapi import Request
from dual_ai_chat.agent_service.orchestrator.discussion_orchestrator import DiscussionOrchestrator
from dual_ai_chat.agent_service.session.session_state import SessionState

# This is the location to conveniently return any app lifetime dependencies to be used in routes
def get_orchestrator(request: Request) -> DiscussionOrchestrator:
    """
    FastAPI dependency to get the shared discussion orchestrator from the application state.
    """
    return request.app.state.orchestrator

def get_session_state(request: Request) -> SessionState:
    """
    FastAPI dependency to get the single in-memory session from the application state.
    """
    return request.app.state.orchestrator.session
