"""Tax calculator API routes."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends

from smartkharcha.api.deps import get_llm
from smartkharcha.core.schemas import TaxAdviceResponse, TaxComparison, TaxRequest
from smartkharcha.generation.llm import LLMProvider
from smartkharcha.tax.advisor import get_tax_advice
from smartkharcha.tax.engine import compute_tax

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/calculate", response_model=TaxComparison)
async def calculate(body: TaxRequest):
    """Compare tax payable under the old and new regimes."""
    comparison = compute_tax(body.income, body.deductions, body.hra_exemption)
    logger.info(
        f"Tax calculated: old={comparison.old_regime_tax}, new={comparison.new_regime_tax}, "
        f"recommended={comparison.recommended_regime}"
    )
    return comparison


@router.post("/advice", response_model=TaxAdviceResponse)
def advice(
    body: TaxRequest,
    llm_provider: Optional[LLMProvider] = Depends(get_llm),
):
    """Compare both regimes and add a one-sentence recommendation."""
    comparison = compute_tax(body.income, body.deductions, body.hra_exemption)
    tax_advice = get_tax_advice(llm_provider, body.income, body.deductions, comparison)
    return TaxAdviceResponse(comparison=comparison, advice=tax_advice)
