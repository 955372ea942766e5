"""Application constants."""

# Guardrail messages
NO_SOURCE_MSG = "I'm sorry, but I don't have a verified source of information to answer that question."

FALLBACK_REPLY = (
    "I am sorry, the AI service is currently unavailable. Based on your profile and available "
    "information, here's a deterministic recommendation: Consider a term insurance plan with "
    "coverage of 10x your annual income. "
    "(This is a deterministic fallback answer, not AI-generated)."
)
FALLBACK_CONFIDENCE = 0.5

# Income tax (values in rupees)
STANDARD_DEDUCTION = 50_000
CESS_RATE = 0.04
NEW_REGIME_REBATE_LIMIT = 700_000

# (upper bound of slab, marginal rate); None means unbounded
OLD_REGIME_SLABS = [
    (250_000, 0.0),
    (500_000, 0.05),
    (1_000_000, 0.20),
    (None, 0.30),
]

NEW_REGIME_SLABS = [
    (300_000, 0.0),
    (600_000, 0.05),
    (900_000, 0.10),
    (1_200_000, 0.15),
    (1_500_000, 0.20),
    (None, 0.30),
]

# Illustrative premium rule
PREMIUM_PER_DEPENDENT = 200

# Fact labels passed to the model as ground truth
FACT_RECOMMENDED_COVER = "Recommended Term Insurance Cover (₹)"
FACT_PREMIUM_ESTIMATE = "Illustrative Annual Premium (₹)"

# Document analysis
SUPPORTED_IMAGE_MIME_PREFIX = "image/"
