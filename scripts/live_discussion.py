"""
Manual script to run one full Cognito/Muse discussion against the live Gemini API.

Usage:
    APP_ENV=dev python scripts/live_discussion.py "What is 2+2?"
"""

import asyncio
import os
import sys
from pathlib import Path
from dotenv import load_dotenv

from dual_ai_chat.agent_service.orchestrator.discussion_orchestrator import DiscussionOrchestrator
from dual_ai_chat.agent_service.session.session_state import SessionState
from dual_ai_chat.common.services.llm_service.llm_client import ModelInvokerClient, LLMProvider
from dual_ai_chat.common.services.llm_service.llm_client.google_genai_client import AsyncGenAIModelInvoker

# Usual set up to parse env vars
APP_ENV = os.getenv("APP_ENV", "dev")

# This file is in scripts/, so we go up one level to project root
SERVICE_ROOT = Path(__file__).resolve().parents[1]
env_file_path = SERVICE_ROOT / f".env.{APP_ENV}"

# Load the .env file manually
print(f"Loading env file from: {env_file_path}")
load_dotenv(dotenv_path=env_file_path)

google_api_key = os.getenv("GOOGLE_GENAI_API_KEY")
assert google_api_key, "GOOGLE_GENAI_API_KEY is not set"

async def main(query: str) -> None:
    invoker = ModelInvokerClient(
        provider=LLMProvider.GOOGLE_GENAI,
        client=AsyncGenAIModelInvoker(api_key=google_api_key),
    )
    session = SessionState(credentials_valid=True)
    orchestrator = DiscussionOrchestrator(session=session, invoker=invoker)

    outcome = await orchestrator.submit(query)

    for message in session.messages:
        print(f"[{message.sender.value} / {message.purpose.value}] {message.text}\n")
    print("=" * 60)
    print(f"Notepad (last updated by {session.notepad.last_updated_by}):\n{session.notepad.content}")
    print("=" * 60)
    print(f"completed={outcome.completed} turns={outcome.turns_completed} duration={outcome.duration_ms / 1000:.2f}s")

if __name__ == "__main__":
    asyncio.run(main(" ".join(sys.argv[1:]) or "What is 2+2?"))
