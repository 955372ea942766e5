"""Advice orchestration: facts, retrieval, prompting and fallback."""

import logging
from dataclasses import dataclass
from typing import Optional, Union

from pydantic import ValidationError

from smartkharcha.core.config import settings
from smartkharcha.core.constants import FALLBACK_CONFIDENCE, FALLBACK_REPLY
from smartkharcha.core.prompts import ADVISOR_SYSTEM_PROMPT, build_advice_prompt
from smartkharcha.core.schemas import (
    AdviceRequest,
    AdviceResponse,
    DocumentAnalysis,
    Profile,
    ProviderAdvice,
    RetrievedDoc,
    Source,
)
from smartkharcha.core.utils import parse_json_object
from smartkharcha.generation.facts import compute_facts
from smartkharcha.generation.llm import LLMProvider
from smartkharcha.knowledge.retriever import retrieve_with_content
from smartkharcha.knowledge.store import KnowledgeBase

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProviderOk:
    """Provider returned a payload that passed schema validation."""

    advice: ProviderAdvice


@dataclass(frozen=True)
class ProviderFailed:
    """Provider raised, timed out, or returned an unusable payload."""

    reason: str


ProviderOutcome = Union[ProviderOk, ProviderFailed]


def call_provider(llm_provider: Optional[LLMProvider], prompt: str) -> ProviderOutcome:
    """Make exactly one provider attempt and classify the result."""
    if llm_provider is None:
        return ProviderFailed("LLM provider not configured")

    try:
        text = llm_provider.generate(
            prompt=prompt,
            system_prompt=ADVISOR_SYSTEM_PROMPT,
            json_mode=True,
        )
    except Exception as e:
        return ProviderFailed(f"{type(e).__name__}: {e}")

    try:
        advice = ProviderAdvice.model_validate(parse_json_object(text))
    except (ValueError, ValidationError) as e:
        return ProviderFailed(f"Invalid provider payload: {e}")

    return ProviderOk(advice)


def map_sources(indices: list[int], docs: list[RetrievedDoc]) -> list[Source]:
    """Map cited indices back to documents, dropping out-of-range and repeated ones."""
    sources = []
    seen: set[int] = set()
    for index in indices:
        if index in seen or not 0 <= index < len(docs):
            continue
        seen.add(index)
        doc = docs[index]
        sources.append(
            Source(doc_id=doc.doc_id, title=doc.title, url=doc.source_url, similarity=doc.similarity)
        )
    return sources


def fallback_response(docs: list[RetrievedDoc]) -> AdviceResponse:
    """Canned reply citing every supplied document at its trust score."""
    return AdviceResponse(
        reply=FALLBACK_REPLY,
        confidence=FALLBACK_CONFIDENCE,
        sources=[
            Source(doc_id=doc.doc_id, title=doc.title, url=doc.source_url, similarity=doc.trust_score)
            for doc in docs
        ],
    )


def resolve_advice(request: AdviceRequest, outcome: ProviderOutcome) -> AdviceResponse:
    """Turn a provider outcome into the final response."""
    if isinstance(outcome, ProviderOk):
        return AdviceResponse(
            reply=outcome.advice.reply,
            confidence=outcome.advice.confidence,
            sources=map_sources(outcome.advice.source_indices, request.retrieved_docs),
        )
    return fallback_response(request.retrieved_docs)


class AdviceOrchestrator:
    """Answers profile-aware financial questions from the knowledge base."""

    def __init__(
        self,
        knowledge_base: KnowledgeBase,
        llm_provider: Optional[LLMProvider] = None,
        max_prompt_docs: Optional[int] = None,
    ):
        self.knowledge_base = knowledge_base
        self.llm_provider = llm_provider
        self.max_prompt_docs = settings.max_prompt_docs if max_prompt_docs is None else max_prompt_docs

    def build_request(
        self,
        question: str,
        profile: Profile,
        document_context: Optional[DocumentAnalysis] = None,
    ) -> AdviceRequest:
        """Compute facts and retrieve the documents the provider will see."""
        facts = compute_facts(profile, document_context)
        docs = retrieve_with_content(question, self.knowledge_base)[: self.max_prompt_docs]
        if not docs:
            logger.info("No knowledge base documents matched; proceeding without sources")
        return AdviceRequest(
            question=question,
            profile=profile,
            computed_facts=facts,
            retrieved_docs=docs,
        )

    def get_advice(
        self,
        question: str,
        profile: Profile,
        document_context: Optional[DocumentAnalysis] = None,
    ) -> AdviceResponse:
        """Answer a question; provider failures resolve to the fallback reply."""
        request = self.build_request(question, profile, document_context)
        logger.info("[ADVICE] user=%s docs=%d", profile.user_id, len(request.retrieved_docs))

        prompt = build_advice_prompt(
            request.question, request.profile, request.computed_facts, request.retrieved_docs
        )
        outcome = call_provider(self.llm_provider, prompt)

        if isinstance(outcome, ProviderFailed):
            logger.warning("[ADVICE] provider failed, using fallback: %s", outcome.reason)
        else:
            logger.info("[ADVICE] provider succeeded, confidence=%.2f", outcome.advice.confidence)

        return resolve_advice(request, outcome)
