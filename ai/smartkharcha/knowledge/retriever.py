"""Keyword-overlap retrieval over the knowledge base."""

import logging

from smartkharcha.core.schemas import KnowledgeDoc, RetrievalResult, RetrievedDoc
from smartkharcha.knowledge.store import KnowledgeBase

logger = logging.getLogger(__name__)


def tokenize(question: str) -> list[str]:
    """Lowercase, whitespace-delimited query terms (duplicates kept)."""
    return question.lower().split()


def keyword_similarity(terms: list[str], doc: KnowledgeDoc) -> float:
    """Fraction of query terms that occur as substrings of the document content."""
    if not terms:
        return 0.0
    content = doc.content.lower()
    matches = sum(1 for term in terms if term in content)
    return matches / len(terms)


def score_documents(question: str, kb: KnowledgeBase) -> list[tuple[KnowledgeDoc, float]]:
    """Score every document and keep the ones with any overlap.

    Sorted by similarity descending; ``sorted`` is stable so ties keep
    knowledge base order.
    """
    terms = tokenize(question)
    scored = []
    for doc in kb:
        similarity = keyword_similarity(terms, doc)
        if similarity > 0:
            scored.append((doc, similarity))

    scored = sorted(scored, key=lambda item: item[1], reverse=True)
    logger.debug(f"Retrieved {len(scored)} of {len(kb)} documents for {len(terms)} terms")
    return scored


def retrieve_documents(question: str, kb: KnowledgeBase) -> list[RetrievalResult]:
    """Retrieve document headers with their similarity."""
    return [
        RetrievalResult(doc_id=doc.doc_id, title=doc.title, url=doc.source_url, similarity=similarity)
        for doc, similarity in score_documents(question, kb)
    ]


def retrieve_with_content(question: str, kb: KnowledgeBase) -> list[RetrievedDoc]:
    """Retrieve full documents with their similarity, ready for prompting."""
    return [
        RetrievedDoc(**doc.model_dump(), similarity=similarity)
        for doc, similarity in score_documents(question, kb)
    ]
