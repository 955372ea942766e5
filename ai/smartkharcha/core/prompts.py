"""Prompt templates for advice generation."""

from typing import Any

import orjson

from smartkharcha.core.constants import NO_SOURCE_MSG
from smartkharcha.core.schemas import Profile, RetrievedDoc

ADVISOR_SYSTEM_PROMPT = (
    "You are a conservative, professional Indian financial advisor. "
    "Use ONLY the provided facts and documents. Do NOT invent policy wording, "
    "financial figures, or legal sections. Respond ONLY with a JSON object."
)

TAX_ADVISOR_SYSTEM_PROMPT = "You are a helpful Indian income-tax assistant. Respond ONLY with a JSON object."

DOCUMENT_ANALYST_SYSTEM_PROMPT = (
    "You are an expert financial document analyst. Respond ONLY with a JSON object."
)


def format_documents(docs: list[RetrievedDoc]) -> str:
    """Render retrieved documents tagged with their zero-based index."""
    if not docs:
        return "(no documents matched this question)"
    blocks = []
    for i, doc in enumerate(docs):
        blocks.append(
            f"[{i}] Title: {doc.title}\n"
            f"Content: {doc.content}\n"
            f"Source URL: {doc.source_url}\n"
            f"Trust Score: {doc.trust_score}"
        )
    return "\n\n".join(blocks)


def build_advice_prompt(
    question: str,
    profile: Profile,
    computed_facts: dict[str, Any],
    docs: list[RetrievedDoc],
) -> str:
    """Build the advice prompt with profile, facts and indexed documents."""
    facts_json = orjson.dumps(computed_facts, option=orjson.OPT_INDENT_2).decode("utf-8")

    return f"""USER PROFILE:
- Age: {profile.age}
- Annual income: {profile.annual_income:.0f}
- Dependents: {profile.dependents}
- Goal: {profile.goal.value}

COMPUTED FACTS (ground truth, including any data extracted from user documents):
{facts_json}

RETRIEVED DOCUMENTS:
{format_documents(docs)}

USER QUESTION:
{question}

INSTRUCTIONS:
1. Answer only from the computed facts and retrieved documents above.
2. Cite every document you use by its bracket index, like [0], at the end of the statement that uses it.
3. Use the computed facts as ground truth for cover and premium figures.
4. If document data is present in the computed facts, prioritize it.
5. If the facts and documents do not support an answer, reply exactly: "{NO_SOURCE_MSG}"
6. Present the answer in concise GitHub-Flavored Markdown.

Return a JSON object with exactly these keys:
- "reply": string, the answer in Markdown
- "confidence": number between 0.0 and 1.0
- "source_indices": list of integer indices of the documents you cited
"""


def build_tax_advice_prompt(income: float, deductions: float, old_tax: int, new_tax: int) -> str:
    """Build the regime recommendation prompt."""
    return f"""Based on the following tax calculation, provide a concise, one-sentence recommendation about which regime is more beneficial and by how much.

- Gross Income: {income:.0f}
- Total Deductions: {deductions:.0f}
- Tax under Old Regime: {old_tax}
- Tax under New Regime: {new_tax}

Return a JSON object with a single key "recommendation".
"""


def build_document_analysis_prompt() -> str:
    """Build the instructions sent alongside a document image."""
    return """Analyze the attached image of a financial document and extract structured information.

- For an invoice or bill, extract fields like 'Invoice Number', 'Vendor Name', 'Total Amount', 'Due Date', and a list of line items.
- For a salary slip, extract 'Employee Name', 'Gross Salary', 'Net Salary', 'Deductions', and a breakdown of earnings.
- For a generic receipt, extract 'Store Name', 'Total Amount', 'Date', and items purchased.

Return a JSON object with keys:
- "document_type": string such as "Invoice", "Salary Slip" or "Receipt"
- "extracted_data": object of the extracted key-value pairs
- "summary": one-sentence summary of the document
"""
