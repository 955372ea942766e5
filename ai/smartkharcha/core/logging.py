"""Logging configuration."""

import logging
import re
import sys

from smartkharcha.core.config import settings

_PAN_RE = re.compile(r"\b[A-Z]{5}\d{4}[A-Z]\b")
_AADHAAR_RE = re.compile(r"\b\d{4}\s?\d{4}\s?\d{4}\b")
_PHONE_RE = re.compile(r"(?<!\d)(?:\+91[\s-]?)?[6-9]\d{9}\b")


def setup_logging() -> None:
    """Configure application logging."""
    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
    )

    # Set third-party loggers to WARNING
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("openai").setLevel(logging.WARNING)


def mask_pii(text: str) -> str:
    """Mask potentially sensitive information in logs."""
    # PAN: ABCDE1234F
    text = _PAN_RE.sub("XXXXX0000X", text)
    # Aadhaar: 1234 5678 9012
    text = _AADHAAR_RE.sub("XXXX XXXX XXXX", text)
    # Mobile numbers
    text = _PHONE_RE.sub("XXXXXXXXXX", text)
    return text
