"""Command-line interface for the word trainer."""

import asyncio
import logging
import click
import structlog
from pathlib import Path

from .config import DIRECTION, LOGIN, PASSWORD, STUDENT_ID, TRAIN_COUNT
from .console import TerminalConsole
from .errors import StorePersistenceError
from .models import Credentials, Direction, OutcomeStatus, SessionConfig, SourceSelection
from .trainer import run_session


def configure_logging(verbose: bool):
    """Render JSON logs at warning level, or readable console logs with ``verbose``."""
    logging.basicConfig(level=logging.INFO if verbose else logging.WARNING, format="%(message)s")
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.dev.ConsoleRenderer() if verbose else structlog.processors.JSONRenderer()
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


log = structlog.get_logger()


@click.command()
@click.option(
    "-c", "--count",
    type=click.IntRange(min=1),
    default=TRAIN_COUNT,
    help="Number of words to be trained"
)
@click.option(
    "-o", "--offline",
    is_flag=True,
    help="Offline mode, skip synonyms and example sentences"
)
@click.option(
    "--use-cache/--no-cache",
    default=True,
    help="Train from the stored words instead of harvesting again"
)
@click.option(
    "-d", "--pages",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Directory with saved lesson pages"
)
@click.option(
    "-e", "--dictionary",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="The path to the external dictionary file"
)
@click.option("-l", "--login", default=LOGIN, help="Login for the vocabulary account")
@click.option("-p", "--password", default=PASSWORD, help="Password for the vocabulary account")
@click.option("-s", "--student", default=STUDENT_ID, help="Student id")
@click.option(
    "--direction",
    type=click.Choice([d.value for d in Direction]),
    default=DIRECTION,
    help="Which side of each word is asked for"
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Enable verbose logging"
)
def main(count: int, offline: bool, use_cache: bool, pages: Path, dictionary: Path,
         login: str, password: str, student: str, direction: str, verbose: bool):
    """Vocabulary training application."""
    configure_logging(verbose)

    credentials = None
    if login or password or student:
        if not (login and password and student):
            raise click.UsageError("--login, --password and --student must be given together")
        credentials = Credentials(login=login, password=password, student_id=student)

    config = SessionConfig(
        count=count,
        offline=offline,
        use_cache=use_cache,
        sources=SourceSelection(pages_dir=pages, credentials=credentials, dictionary_path=dictionary),
        direction=Direction(direction),
    )

    log.info("Starting word trainer",
             count=count,
             offline=offline,
             use_cache=use_cache,
             pages=str(pages) if pages else None,
             dictionary=str(dictionary) if dictionary else None,
             api=credentials is not None,
             direction=direction)

    console = TerminalConsole()
    try:
        outcome = asyncio.run(run_session(config, console))
    except StorePersistenceError as e:
        raise click.ClickException(str(e))

    if outcome.status is OutcomeStatus.EMPTY:
        console.write_line("The list of words is empty.")


if __name__ == "__main__":
    main()
