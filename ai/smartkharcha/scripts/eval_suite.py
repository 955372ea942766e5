"""Evaluation suite of advisory questions."""

import json
import logging
import time
from pathlib import Path

import typer

from smartkharcha.core.config import settings
from smartkharcha.core.constants import FALLBACK_REPLY
from smartkharcha.core.logging import setup_logging
from smartkharcha.core.schemas import Goal, Profile
from smartkharcha.generation.advisor import AdviceOrchestrator
from smartkharcha.generation.llm import get_llm_provider
from smartkharcha.knowledge.store import load_knowledge_base

setup_logging()
logger = logging.getLogger(__name__)

app = typer.Typer()

EVAL_PROFILE = Profile(
    user_id="eval_user",
    name="Eval User",
    age=32,
    monthly_income=100_000,
    annual_income=1_200_000,
    dependents=2,
    goal=Goal.INSURANCE,
)

EVAL_QUERIES = [
    {
        "query": "How much term insurance cover do I need?",
        "expected_behavior": "Should cite the computed cover and the term insurance document",
    },
    {
        "query": "What is the deduction limit under section 80c?",
        "expected_behavior": "Should give the 1,50,000 limit with a citation",
    },
    {
        "query": "Can I claim health insurance premium for my parents?",
        "expected_behavior": "Should explain Section 80D for senior citizen parents",
    },
    {
        "query": "Which tax regime has a rebate up to 7 lakh?",
        "expected_behavior": "Should point to the new regime rebate",
    },
    {
        "query": "How is HRA exemption calculated?",
        "expected_behavior": "Should explain the least-of rule",
    },
    {
        "query": "How big should my emergency fund be?",
        "expected_behavior": "Should suggest six months of expenses",
    },
    {
        "query": "Is NPS withdrawal tax free at retirement?",
        "expected_behavior": "Should explain the 60/40 rule",
    },
    {
        "query": "What is the price of bitcoin today?",
        "expected_behavior": "Should refuse with the no-verified-source sentence",
    },
]


@app.command()
def main(
    output: str = typer.Option("eval_results.json", help="Output file for results"),
    kb_path: Path = typer.Option(settings.kb_path, help="Knowledge base JSON file"),
):
    """Run the evaluation questions through the advice orchestrator."""
    kb = load_knowledge_base(kb_path)
    try:
        llm_provider = get_llm_provider()
    except ValueError as e:
        logger.warning(f"No LLM provider, every answer will be the fallback: {e}")
        llm_provider = None

    orchestrator = AdviceOrchestrator(kb, llm_provider)

    results = []
    for i, item in enumerate(EVAL_QUERIES, 1):
        logger.info(f"[{i}/{len(EVAL_QUERIES)}] {item['query']}")
        start = time.time()
        response = orchestrator.get_advice(item["query"], EVAL_PROFILE)
        elapsed = time.time() - start

        results.append(
            {
                "query": item["query"],
                "expected_behavior": item["expected_behavior"],
                "reply": response.reply,
                "confidence": response.confidence,
                "sources": [source.model_dump() for source in response.sources],
                "fallback": response.reply == FALLBACK_REPLY,
                "latency_seconds": round(elapsed, 3),
            }
        )

    fallbacks = sum(1 for r in results if r["fallback"])
    summary = {
        "total": len(results),
        "fallbacks": fallbacks,
        "average_confidence": round(sum(r["confidence"] for r in results) / len(results), 3),
        "average_sources": round(sum(len(r["sources"]) for r in results) / len(results), 2),
    }

    with open(output, "w") as f:
        json.dump({"summary": summary, "results": results}, f, indent=2, ensure_ascii=False)

    logger.info(f"Wrote {len(results)} results to {output} ({fallbacks} fallbacks)")


if __name__ == "__main__":
    app()
