"""FastAPI dependencies."""

import logging
from functools import lru_cache
from typing import Optional

from fastapi import Depends

from smartkharcha.core.config import settings
from smartkharcha.generation.advisor import AdviceOrchestrator
from smartkharcha.generation.llm import LLMProvider, get_llm_provider
from smartkharcha.knowledge.store import KnowledgeBase, load_knowledge_base

logger = logging.getLogger(__name__)


@lru_cache
def get_knowledge_base() -> KnowledgeBase:
    """Knowledge base, loaded once per process."""
    return load_knowledge_base(settings.kb_path)


@lru_cache
def get_llm() -> Optional[LLMProvider]:
    """Configured LLM provider, or None when it cannot be built."""
    try:
        return get_llm_provider()
    except ValueError as e:
        logger.warning(f"LLM provider unavailable, deterministic fallbacks will be used: {e}")
        return None


def get_orchestrator(
    knowledge_base: KnowledgeBase = Depends(get_knowledge_base),
    llm_provider: Optional[LLMProvider] = Depends(get_llm),
) -> AdviceOrchestrator:
    return AdviceOrchestrator(knowledge_base, llm_provider)
