"""Financial document analysis from images."""

import logging

from pydantic import ValidationError

from smartkharcha.core.prompts import DOCUMENT_ANALYST_SYSTEM_PROMPT, build_document_analysis_prompt
from smartkharcha.core.schemas import DocumentAnalysis
from smartkharcha.core.utils import parse_json_object
from smartkharcha.generation.llm import LLMProvider

logger = logging.getLogger(__name__)


class DocumentAnalysisError(Exception):
    """Raised when a document could not be analysed."""


def analyze_document(llm_provider: LLMProvider, document_image: str) -> DocumentAnalysis:
    """Extract document type, key-value data and a summary from an image data URI."""
    try:
        text = llm_provider.generate(
            prompt=build_document_analysis_prompt(),
            system_prompt=DOCUMENT_ANALYST_SYSTEM_PROMPT,
            json_mode=True,
            images=[document_image],
        )
    except Exception as e:
        raise DocumentAnalysisError(f"Document analysis request failed: {e}") from e

    try:
        analysis = DocumentAnalysis.model_validate(parse_json_object(text))
    except (ValueError, ValidationError) as e:
        raise DocumentAnalysisError(f"Invalid document analysis payload: {e}") from e

    logger.info(f"Analyzed document: type={analysis.document_type}, fields={len(analysis.extracted_data)}")
    return analysis
