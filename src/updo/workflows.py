"""Shared workflow layer between the CLI and the functional core.

read -> parse -> sort -> (rotate) -> render -> write/commit
"""

import logging
import sys
from pathlib import Path

from .adapters.git_cli import GitRepository
from .adapters.markdown_parser import MarkdownItParser
from .config import DEFAULT_TITLE, Config
from .core import TaskState, count_tasks, render, sort_tasks, start_next_day
from .ports import DocumentParser, Repository

logger = logging.getLogger(__name__)

STDIN = "-"


def update_document(
    text: str,
    next_day: bool = False,
    title: str = DEFAULT_TITLE,
    parser: DocumentParser | None = None,
) -> str:
    """Sort a todo document, optionally start a new day, and return the new text."""
    parser = parser or MarkdownItParser()
    document = parser.parse(text)

    counts = count_tasks(document)
    logger.debug(
        f"Parsed {len(document)} top-level node(s): "
        f"{counts[TaskState.UNFINISHED]} unfinished, {counts[TaskState.FINISHED]} finished"
    )

    sort_tasks(document)

    if next_day:
        start_next_day(document, title)

    return render(document)


def read_input(source: str | None) -> str:
    """Read a file, or stdin for ``-``/None."""
    if source is None or source == STDIN:
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def write_output(path: Path | str, text: str) -> None:
    """Overwrite a file with the rendered document."""
    Path(path).write_text(text, encoding="utf-8")


def commit_file(path: Path | str, config: Config, repository: Repository | None = None) -> bool:
    """Commit a rewritten file to the git repository that contains it."""
    repository = repository or GitRepository.discover(path, git=config.git_binary)
    relative = repository.relative_path(Path(path))
    message = config.commit_message.replace("{path}", str(relative))
    return repository.commit(Path(path), message)
