"""Knowledge base validation report CLI script."""

import logging
from pathlib import Path

import typer

from smartkharcha.core.config import settings
from smartkharcha.core.logging import setup_logging
from smartkharcha.core.utils import truncate_text
from smartkharcha.knowledge.retriever import retrieve_documents
from smartkharcha.knowledge.store import KnowledgeBaseError, load_knowledge_base

setup_logging()
logger = logging.getLogger(__name__)

app = typer.Typer()


@app.command()
def main(
    kb_path: Path = typer.Option(settings.kb_path, help="Knowledge base JSON file"),
    query: str = typer.Option("", help="Optional question to test retrieval against"),
):
    """Validate the knowledge base and print a summary."""
    try:
        kb = load_knowledge_base(kb_path)
    except KnowledgeBaseError as e:
        logger.error(str(e))
        raise typer.Exit(code=1)

    typer.echo(f"{len(kb)} documents in {kb.source}")
    for doc in kb:
        typer.echo(f"  {doc.doc_id:<32} trust={doc.trust_score:.2f}  {truncate_text(doc.title, 50)}")

    if query:
        results = retrieve_documents(query, kb)
        typer.echo(f"\nRetrieval for: {query!r} ({len(results)} matches)")
        for result in results:
            typer.echo(f"  {result.similarity:.3f}  {result.doc_id}  {result.url}")


if __name__ == "__main__":
    app()
