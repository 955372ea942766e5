"""Regime recommendation backed by the LLM, with a rule-based fallback."""

import logging
from typing import Optional

from smartkharcha.core.prompts import TAX_ADVISOR_SYSTEM_PROMPT, build_tax_advice_prompt
from smartkharcha.core.schemas import TaxAdvice, TaxComparison
from smartkharcha.core.utils import format_inr, parse_json_object
from smartkharcha.generation.llm import LLMProvider

logger = logging.getLogger(__name__)


def deterministic_tax_advice(comparison: TaxComparison) -> TaxAdvice:
    """Recommendation derived purely from the computed comparison."""
    if comparison.savings == 0:
        text = (
            f"Both regimes result in the same tax of ₹{format_inr(comparison.new_regime_tax)}, "
            "so the New Regime is simpler to choose."
        )
    else:
        regime = "New" if comparison.recommended_regime == "new" else "Old"
        text = (
            f"The {regime} Regime is more beneficial for you, saving "
            f"₹{format_inr(comparison.savings)} in tax."
        )
    return TaxAdvice(recommendation=text, ai_generated=False)


def get_tax_advice(
    llm_provider: Optional[LLMProvider],
    income: float,
    deductions: float,
    comparison: TaxComparison,
) -> TaxAdvice:
    """Ask the provider for a one-sentence recommendation; never raises."""
    if llm_provider is None:
        logger.warning("No LLM provider configured, using rule-based tax advice")
        return deterministic_tax_advice(comparison)

    try:
        text = llm_provider.generate(
            prompt=build_tax_advice_prompt(
                income, deductions, comparison.old_regime_tax, comparison.new_regime_tax
            ),
            system_prompt=TAX_ADVISOR_SYSTEM_PROMPT,
            json_mode=True,
            max_tokens=150,
        )
        recommendation = parse_json_object(text).get("recommendation")
        if not isinstance(recommendation, str) or not recommendation.strip():
            raise ValueError("Missing 'recommendation' in response")
        return TaxAdvice(recommendation=recommendation.strip(), ai_generated=True)
    except Exception as e:
        logger.warning(f"Tax advice generation failed, using rule-based advice: {e}")
        return deterministic_tax_advice(comparison)
