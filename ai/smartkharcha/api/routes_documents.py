"""Document analysis API routes."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status

from smartkharcha.api.deps import get_llm
from smartkharcha.core.schemas import DocumentAnalysis, DocumentAnalysisRequest
from smartkharcha.generation.documents import DocumentAnalysisError, analyze_document
from smartkharcha.generation.llm import LLMProvider

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/analyze", response_model=DocumentAnalysis)
def analyze(
    body: DocumentAnalysisRequest,
    llm_provider: Optional[LLMProvider] = Depends(get_llm),
):
    """Extract structured data from an uploaded document image."""
    if llm_provider is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Document analysis is not configured",
        )

    try:
        return analyze_document(llm_provider, body.document_image)
    except DocumentAnalysisError as e:
        logger.error(f"Document analysis failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Document analysis is currently unavailable",
        )
