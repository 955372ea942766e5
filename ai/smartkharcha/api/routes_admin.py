"""Admin API routes."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from smartkharcha.api.deps import get_knowledge_base
from smartkharcha.core.config import settings
from smartkharcha.core.schemas import AdminStats
from smartkharcha.core.security import verify_api_key
from smartkharcha.knowledge.store import KnowledgeBase

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/stats", response_model=AdminStats, dependencies=[Depends(verify_api_key)])
async def get_stats(knowledge_base: KnowledgeBase = Depends(get_knowledge_base)):
    """Get knowledge base and provider statistics."""
    try:
        scores = [doc.trust_score for doc in knowledge_base]
        return AdminStats(
            kb_path=knowledge_base.source,
            total_documents=len(knowledge_base),
            average_trust_score=round(sum(scores) / len(scores), 3) if scores else 0.0,
            llm_provider=settings.llm_provider,
            chat_model=settings.ollama_model if settings.is_local_llm else settings.openai_chat_model,
        )

    except Exception as e:
        logger.error(f"Error getting stats: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error",
        )
