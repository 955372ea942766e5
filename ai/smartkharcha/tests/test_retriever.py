"""Tests for keyword-overlap retrieval."""

import pytest

from smartkharcha.knowledge.retriever import (
    keyword_similarity,
    retrieve_documents,
    retrieve_with_content,
    tokenize,
)
from smartkharcha.knowledge.store import KnowledgeBase


def make_doc(doc_id, content, trust_score=0.8):
    return {
        "doc_id": doc_id,
        "title": f"Title {doc_id}",
        "content": content,
        "source_url": f"https://example.in/{doc_id}",
        "trust_score": trust_score,
    }


@pytest.fixture
def kb():
    return KnowledgeBase.from_records(
        [
            make_doc("unrelated", "Mutual funds pool money from many investors."),
            make_doc("full", "Term insurance gives a large cover for a small premium."),
            make_doc("partial", "A fixed term deposit earns interest."),
        ]
    )


def test_tokenize_lowercases_and_splits_on_whitespace():
    assert tokenize("  Term\tInsurance \n COVER ") == ["term", "insurance", "cover"]


def test_full_match_has_similarity_one(kb):
    results = retrieve_documents("term insurance cover", kb)

    assert results[0].doc_id == "full"
    assert results[0].similarity == 1.0


def test_document_without_terms_is_excluded(kb):
    results = retrieve_documents("term insurance cover", kb)

    assert "unrelated" not in [r.doc_id for r in results]


def test_partial_match_fraction(kb):
    results = {r.doc_id: r.similarity for r in retrieve_documents("term insurance cover", kb)}

    assert results["partial"] == pytest.approx(1 / 3)


def test_results_sorted_descending(kb):
    results = retrieve_documents("term insurance cover", kb)

    assert [r.doc_id for r in results] == ["full", "partial"]


def test_ties_keep_corpus_order():
    kb = KnowledgeBase.from_records(
        [
            make_doc("b", "tax slab details"),
            make_doc("a", "tax saving ideas"),
            make_doc("c", "tax tax tax"),
        ]
    )

    results = retrieve_documents("tax", kb)

    assert [r.doc_id for r in results] == ["b", "a", "c"]


def test_terms_match_as_substrings():
    kb = KnowledgeBase.from_records([make_doc("d", "Coverage for insured persons")])

    results = retrieve_documents("cover insure", kb)

    assert results[0].similarity == 1.0


def test_matching_is_case_insensitive():
    kb = KnowledgeBase.from_records([make_doc("d", "SECTION 80C LIMIT")])

    assert retrieve_documents("section 80c", kb)[0].similarity == 1.0


def test_repeated_terms_count_each_time():
    kb = KnowledgeBase.from_records([make_doc("d", "premium")])

    results = retrieve_documents("premium premium cover", kb)

    assert results[0].similarity == pytest.approx(2 / 3)


def test_empty_question_returns_nothing(kb):
    assert retrieve_documents("   ", kb) == []


def test_keyword_similarity_no_terms(kb):
    assert keyword_similarity([], kb.documents[0]) == 0.0


def test_retrieve_with_content_hydrates_documents(kb):
    docs = retrieve_with_content("term insurance cover", kb)

    assert docs[0].content == kb.get("full").content
    assert docs[0].trust_score == 0.8
    assert docs[0].similarity == 1.0


def test_result_urls_come_from_source_url(kb):
    results = retrieve_documents("term", kb)

    assert results[0].url == "https://example.in/full"
