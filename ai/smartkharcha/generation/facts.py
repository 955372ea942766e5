"""Deterministic, rule-based facts derived from the user profile."""

from typing import Any, Optional

from smartkharcha.core.config import settings
from smartkharcha.core.constants import (
    FACT_PREMIUM_ESTIMATE,
    FACT_RECOMMENDED_COVER,
    PREMIUM_PER_DEPENDENT,
)
from smartkharcha.core.schemas import DocumentAnalysis, Profile
from smartkharcha.core.utils import format_inr, round_half_up


def recommended_cover(profile: Profile, multiplier: Optional[int] = None) -> float:
    return profile.annual_income * (multiplier or settings.cover_multiplier)


def premium_estimate(cover: float, age: int, dependents: int) -> int:
    """Illustrative annual term premium: cover/1000 scaled by age decade, plus a per-dependent loading."""
    return round_half_up((cover / 1000) * (age / 10) + dependents * PREMIUM_PER_DEPENDENT)


def compute_facts(profile: Profile, document: Optional[DocumentAnalysis] = None) -> dict[str, Any]:
    """Facts handed to the model as ground truth."""
    cover = recommended_cover(profile)
    facts: dict[str, Any] = {
        FACT_RECOMMENDED_COVER: format_inr(cover),
        FACT_PREMIUM_ESTIMATE: format_inr(premium_estimate(cover, profile.age, profile.dependents)),
    }

    if document is not None:
        facts["Uploaded Document Type"] = document.document_type
        facts["Uploaded Document Summary"] = document.summary
        facts["Uploaded Document Data"] = document.extracted_data

    return facts
