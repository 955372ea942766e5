"""Pydantic schemas for API requests, responses and domain records."""

import re
import time
import uuid
from enum import Enum
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from smartkharcha.core.constants import SUPPORTED_IMAGE_MIME_PREFIX

_DATA_URI_RE = re.compile(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+);base64,(?P<payload>[A-Za-z0-9+/=\s]+)$")


class Goal(str, Enum):
    """Primary financial goal selected on the profile form."""

    INSURANCE = "insurance"
    TAX_SAVING = "tax_saving"
    RETIREMENT = "retirement"
    INVESTMENT = "investment"
    EMERGENCY_FUND = "emergency_fund"
    DEBT_MANAGEMENT = "debt_management"


class ProfileCreateRequest(BaseModel):
    """Profile form submission."""

    name: str = Field(..., min_length=2, max_length=100, description="Display name")
    age: int = Field(..., ge=18, le=100)
    monthly_income: float = Field(..., ge=0, allow_inf_nan=False, description="Monthly income in rupees")
    dependents: int = Field(..., ge=0)
    goal: Goal


class Profile(BaseModel):
    """User profile; immutable once created."""

    model_config = ConfigDict(frozen=True)

    user_id: str = Field(default_factory=lambda: f"user_{uuid.uuid4().hex[:12]}")
    name: str = ""
    age: int = Field(..., ge=18, le=100)
    monthly_income: float = Field(0.0, ge=0, allow_inf_nan=False)
    annual_income: float = Field(..., ge=0, allow_inf_nan=False)
    dependents: int = Field(..., ge=0)
    goal: Goal
    created_at: int = Field(default_factory=lambda: int(time.time() * 1000))

    @classmethod
    def from_request(cls, request: ProfileCreateRequest) -> "Profile":
        """Build a profile from the form, annualising monthly income."""
        return cls(
            name=request.name,
            age=request.age,
            monthly_income=request.monthly_income,
            annual_income=request.monthly_income * 12,
            dependents=request.dependents,
            goal=request.goal,
        )


class KnowledgeDoc(BaseModel):
    """Knowledge base record."""

    model_config = ConfigDict(frozen=True)

    doc_id: str = Field(..., min_length=1)
    title: str
    content: str
    source_url: str
    trust_score: float = Field(..., ge=0.0, le=1.0)


class RetrievalResult(BaseModel):
    """Document header returned by keyword retrieval."""

    doc_id: str
    title: str
    url: str
    similarity: float = Field(..., ge=0.0, le=1.0)


class RetrievedDoc(KnowledgeDoc):
    """Full knowledge base record plus its retrieval similarity."""

    similarity: float = Field(..., ge=0.0, le=1.0)


class Source(BaseModel):
    """Source citation schema."""

    doc_id: str
    title: str
    url: str
    similarity: float = Field(..., ge=0.0, le=1.0)


class AdviceRequest(BaseModel):
    """Everything the orchestrator hands to the provider for one question."""

    question: str
    profile: Profile
    computed_facts: dict[str, Any] = Field(default_factory=dict)
    retrieved_docs: list[RetrievedDoc] = Field(default_factory=list)


class AdviceResponse(BaseModel):
    """Advice returned to the caller."""

    reply: str
    confidence: float = Field(..., ge=0.0, le=1.0)
    sources: list[Source] = Field(default_factory=list)


class ProviderAdvice(BaseModel):
    """Strict shape expected back from the text-generation provider."""

    model_config = ConfigDict(extra="ignore", strict=True)

    reply: str = Field(..., min_length=1)
    confidence: float = Field(..., ge=0.0, le=1.0)
    source_indices: list[int]

    @field_validator("reply")
    @classmethod
    def reply_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("reply must not be blank")
        return v


class DocumentAnalysis(BaseModel):
    """Structured data extracted from a financial document image."""

    document_type: str = Field(..., description="e.g. 'Invoice', 'Salary Slip', 'Receipt'")
    extracted_data: dict[str, Any] = Field(default_factory=dict)
    summary: str


class DocumentAnalysisRequest(BaseModel):
    """Document image submitted as a base64 data URI."""

    document_image: str = Field(..., description="data:<mimetype>;base64,<encoded_data>")

    @field_validator("document_image")
    @classmethod
    def validate_data_uri(cls, v: str) -> str:
        match = _DATA_URI_RE.match(v.strip())
        if not match:
            raise ValueError("must be a base64 data URI: data:<mimetype>;base64,<data>")
        if not match.group("mime").startswith(SUPPORTED_IMAGE_MIME_PREFIX):
            raise ValueError("only image documents are supported")
        return v.strip()


class ChatRequest(BaseModel):
    """Chat request schema."""

    question: str = Field(..., description="User question", min_length=1, max_length=2000)
    profile: Profile
    document_context: Optional[DocumentAnalysis] = Field(
        None, description="Optional analysis of a user-uploaded document"
    )


class RetrieveRequest(BaseModel):
    """Knowledge base lookup request."""

    question: str = Field(..., min_length=1, max_length=2000)


class TaxRequest(BaseModel):
    """Tax calculator input."""

    income: float = Field(..., ge=0, allow_inf_nan=False, description="Gross annual income")
    deductions: float = Field(0, ge=0, allow_inf_nan=False, description="Total Chapter VI-A deductions")
    hra_exemption: float = Field(0, ge=0, allow_inf_nan=False, description="HRA exemption claimed")


class TaxComparison(BaseModel):
    """Tax payable under both regimes."""

    old_regime_tax: int
    new_regime_tax: int
    old_taxable_income: int
    new_taxable_income: int
    recommended_regime: Literal["old", "new"]
    savings: int


class TaxAdvice(BaseModel):
    """One-sentence regime recommendation."""

    recommendation: str
    ai_generated: bool = True


class TaxAdviceResponse(BaseModel):
    """Tax comparison together with the recommendation."""

    comparison: TaxComparison
    advice: TaxAdvice


class FieldError(BaseModel):
    """Single field-level validation error."""

    field: str
    message: str


class ValidationErrorResponse(BaseModel):
    """Validation failure payload."""

    detail: str = "Validation failed"
    errors: list[FieldError]


class AdminStats(BaseModel):
    """Admin statistics response."""

    kb_path: str
    total_documents: int
    average_trust_score: float
    llm_provider: str
    chat_model: str
