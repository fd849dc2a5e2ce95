"""Command-line interface for the CitizenAIR service."""

import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Optional

import typer
from typing_extensions import Annotated

from citizenair.config.settings import settings
from citizenair.core.vocabulary import VocabularyError, get_vocabulary, load_vocabulary
from citizenair.core.word_frequency import WordFrequencyExtractor
from citizenair.utils.logging_utils import setup_logging

app = typer.Typer(help="CitizenAIR - crowdsourced air-quality ideas and district word clouds")

logger = logging.getLogger(__name__)


def read_ideas(path: Optional[Path]) -> list[str]:
    """
    Reads one idea per line from ``path`` (stdin when None). Blank lines are skipped.
    """
    if path is None:
        lines = sys.stdin.read().splitlines()
    else:
        lines = path.read_text(encoding="utf-8").splitlines()
    return [line.strip() for line in lines if line.strip()]


@app.command()
def wordcloud(
    ideas_file: Annotated[Optional[Path], typer.Argument(help="Text file with one idea per line (default: stdin)")] = None,
    vocabulary: Annotated[Optional[Path], typer.Option("--vocabulary", "-v", help="YAML vocabulary file (keyword groups and stopwords)")] = None,
    top: Annotated[int, typer.Option("--top", "-n", min=1, help="Maximum number of terms")] = settings.WORDCLOUD_MAX_TERMS,
    dedupe: Annotated[bool, typer.Option("--dedupe/--no-dedupe", help="Count a keyword group at most once per idea")] = settings.WORDCLOUD_DEDUPE_VARIANT_MATCHES,
    output: Annotated[Optional[Path], typer.Option("--output", "-o", help="Write JSON here instead of stdout")] = None,
    loglevel: Annotated[str, typer.Option("--loglevel", "-l", help="Logging level")] = "WARNING",
) -> None:
    """
    Print the word cloud of a set of ideas as JSON.
    """
    setup_logging(level=loglevel)

    try:
        vocab = load_vocabulary(vocabulary) if vocabulary else get_vocabulary(settings.WORDCLOUD_VOCABULARY_PATH)
    except VocabularyError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    if ideas_file is not None and not ideas_file.is_file():
        typer.echo(f"Error: ideas file not found: {ideas_file}", err=True)
        raise typer.Exit(code=1)

    ideas = read_ideas(ideas_file)
    extractor = WordFrequencyExtractor(vocabulary=vocab, max_terms=top, dedupe_variant_matches=dedupe)
    word_cloud = extractor.extract(ideas)
    logger.info(f"Built word cloud with {len(word_cloud)} terms from {len(ideas)} ideas")

    output_text = json.dumps([entry.model_dump() for entry in word_cloud], ensure_ascii=False, indent=2)
    if output:
        output.write_text(output_text + "\n", encoding="utf-8")
        typer.echo(f"Word cloud written to {output}")
    else:
        typer.echo(output_text)


@app.command("init-db")
def init_db(
    loglevel: Annotated[str, typer.Option("--loglevel", "-l", help="Logging level")] = "INFO",
) -> None:
    """
    Create the database tables if they do not exist.
    """
    from sqlalchemy.exc import SQLAlchemyError

    from citizenair.utils.db_session import init_models

    setup_logging(level=loglevel)
    try:
        asyncio.run(init_models())
    except (SQLAlchemyError, OSError) as e:
        logger.error(f"Failed to create tables: {e}")
        typer.echo(f"Error: could not initialise database: {e}", err=True)
        raise typer.Exit(code=1)
    typer.echo("Database tables are ready.")


@app.command()
def serve(
    host: Annotated[str, typer.Option("--host", help="Bind address")] = settings.API_HOST,
    port: Annotated[int, typer.Option("--port", "-p", help="Port")] = settings.API_PORT,
    reload: Annotated[bool, typer.Option("--reload", help="Reload on code changes")] = False,
    loglevel: Annotated[str, typer.Option("--loglevel", "-l", help="Logging level")] = "INFO",
) -> None:
    """
    Run the HTTP API.
    """
    import uvicorn

    setup_logging(level=loglevel)
    logger.info(f"Starting {settings.APP_NAME} on {host}:{port}")
    uvicorn.run("citizenair.api.main:app", host=host, port=port, reload=reload, log_config=None)


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
