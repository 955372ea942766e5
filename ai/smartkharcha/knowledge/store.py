"""Read-only knowledge base loaded from a JSON file."""

import logging
from collections.abc import Iterator
from pathlib import Path
from typing import Optional, Union

import orjson
from pydantic import ValidationError

from smartkharcha.core.schemas import KnowledgeDoc

logger = logging.getLogger(__name__)


class KnowledgeBaseError(Exception):
    """Raised when the knowledge base file cannot be loaded."""


class KnowledgeBase:
    """Immutable, ordered collection of knowledge base documents."""

    def __init__(self, documents: list[KnowledgeDoc], source: str = "<memory>"):
        seen: set[str] = set()
        for doc in documents:
            if doc.doc_id in seen:
                raise KnowledgeBaseError(f"Duplicate doc_id in knowledge base: {doc.doc_id}")
            seen.add(doc.doc_id)

        self._documents = tuple(documents)
        self._by_id = {doc.doc_id: doc for doc in self._documents}
        self.source = source

    @property
    def documents(self) -> tuple[KnowledgeDoc, ...]:
        return self._documents

    def get(self, doc_id: str) -> Optional[KnowledgeDoc]:
        return self._by_id.get(doc_id)

    def __len__(self) -> int:
        return len(self._documents)

    def __iter__(self) -> Iterator[KnowledgeDoc]:
        return iter(self._documents)

    @classmethod
    def from_records(cls, records: list[dict], source: str = "<memory>") -> "KnowledgeBase":
        """Validate raw records and build a knowledge base."""
        if not isinstance(records, list):
            raise KnowledgeBaseError(f"Knowledge base must be a JSON array: {source}")
        try:
            documents = [KnowledgeDoc.model_validate(record) for record in records]
        except ValidationError as e:
            raise KnowledgeBaseError(f"Invalid knowledge base record in {source}: {e}") from e
        return cls(documents, source=source)


def load_knowledge_base(path: Union[str, Path]) -> KnowledgeBase:
    """Load and validate the knowledge base JSON file."""
    path = Path(path)
    try:
        raw = path.read_bytes()
    except OSError as e:
        raise KnowledgeBaseError(f"Cannot read knowledge base {path}: {e}") from e

    try:
        records = orjson.loads(raw)
    except orjson.JSONDecodeError as e:
        raise KnowledgeBaseError(f"Knowledge base {path} is not valid JSON: {e}") from e

    kb = KnowledgeBase.from_records(records, source=str(path))
    logger.info(f"Loaded {len(kb)} documents from {path}")
    return kb
