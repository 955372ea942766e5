"""Dual-regime Indian income tax calculator."""

import math
from typing import Optional

from smartkharcha.core.constants import (
    CESS_RATE,
    NEW_REGIME_REBATE_LIMIT,
    NEW_REGIME_SLABS,
    OLD_REGIME_SLABS,
    STANDARD_DEDUCTION,
)
from smartkharcha.core.schemas import TaxComparison
from smartkharcha.core.utils import round_half_up


def slab_tax(taxable: float, slabs: list[tuple[Optional[int], float]]) -> float:
    """Apply marginal slab rates to a taxable amount (before cess)."""
    tax = 0.0
    lower = 0
    for upper, rate in slabs:
        if taxable <= lower:
            break
        band_top = taxable if upper is None else min(taxable, upper)
        tax += (band_top - lower) * rate
        if upper is None:
            break
        lower = upper
    return tax


def old_regime_taxable(income: float, deductions: float = 0, hra_exemption: float = 0) -> float:
    return max(0.0, income - deductions - hra_exemption - STANDARD_DEDUCTION)


def new_regime_taxable(income: float) -> float:
    return max(0.0, income - STANDARD_DEDUCTION)


def old_regime_tax(income: float, deductions: float = 0, hra_exemption: float = 0) -> int:
    """Tax under the old regime, including 4% cess."""
    taxable = old_regime_taxable(income, deductions, hra_exemption)
    return round_half_up(slab_tax(taxable, OLD_REGIME_SLABS) * (1 + CESS_RATE))


def new_regime_tax(income: float) -> int:
    """Tax under the new regime.

    Deductions and HRA do not apply. Taxable income up to the rebate limit
    pays nothing; above it, 4% cess is added.
    """
    taxable = new_regime_taxable(income)
    if taxable <= NEW_REGIME_REBATE_LIMIT:
        return 0
    return round_half_up(slab_tax(taxable, NEW_REGIME_SLABS) * (1 + CESS_RATE))


def compute_tax(income: float, deductions: float = 0, hra_exemption: float = 0) -> TaxComparison:
    """Compute tax under both regimes and recommend the cheaper one."""
    if not all(math.isfinite(v) for v in (income, deductions, hra_exemption)):
        raise ValueError("Income, deductions and HRA exemption must be finite")
    if income < 0:
        raise ValueError("Income cannot be negative")
    if deductions < 0 or hra_exemption < 0:
        raise ValueError("Deductions and HRA exemption cannot be negative")

    old_tax = old_regime_tax(income, deductions, hra_exemption)
    new_tax = new_regime_tax(income)

    return TaxComparison(
        old_regime_tax=old_tax,
        new_regime_tax=new_tax,
        old_taxable_income=round_half_up(old_regime_taxable(income, deductions, hra_exemption)),
        new_taxable_income=round_half_up(new_regime_taxable(income)),
        recommended_regime="new" if new_tax <= old_tax else "old",
        savings=abs(old_tax - new_tax),
    )
