"""Profile, chat and retrieval API routes."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status
from slowapi.util import get_remote_address

from smartkharcha.api.deps import get_knowledge_base, get_orchestrator
from smartkharcha.api.limiter import limiter
from smartkharcha.core.config import settings
from smartkharcha.core.logging import mask_pii
from smartkharcha.core.schemas import (
    AdviceResponse,
    ChatRequest,
    Profile,
    ProfileCreateRequest,
    RetrievalResult,
    RetrieveRequest,
)
from smartkharcha.generation.advisor import AdviceOrchestrator
from smartkharcha.knowledge.retriever import retrieve_documents
from smartkharcha.knowledge.store import KnowledgeBase

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/profile", response_model=Profile, status_code=status.HTTP_201_CREATED)
async def create_profile(request: ProfileCreateRequest):
    """Create a session profile from the profile form."""
    profile = Profile.from_request(request)
    logger.info(f"Created profile {profile.user_id} (goal={profile.goal.value})")
    return profile


@router.post("/chat", response_model=AdviceResponse)
@limiter.limit(settings.rate_limit)
def chat(
    request: Request,
    body: ChatRequest,
    orchestrator: AdviceOrchestrator = Depends(get_orchestrator),
):
    """Chat endpoint for profile-aware financial advice."""
    try:
        # Log query (mask PII)
        client_ip = get_remote_address(request)
        logger.info(f"Chat request from {client_ip}: {mask_pii(body.question)}")

        response = orchestrator.get_advice(
            question=body.question,
            profile=body.profile,
            document_context=body.document_context,
        )

        logger.info(f"Chat response: confidence={response.confidence}, sources={len(response.sources)}")
        return response

    except Exception as e:
        logger.error(f"Error in chat endpoint: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error",
        )


@router.post("/retrieve", response_model=list[RetrievalResult])
async def retrieve(
    body: RetrieveRequest,
    knowledge_base: KnowledgeBase = Depends(get_knowledge_base),
):
    """Return matching knowledge base documents for a question."""
    return retrieve_documents(body.question, knowledge_base)
