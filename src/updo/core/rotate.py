"""Day rotation - start a fresh section holding yesterday's unfinished work."""

import logging

from .document import (
    Container,
    Document,
    Heading,
    List,
    Node,
    TaskState,
    Text,
    is_list,
    is_unfinished_task,
)

logger = logging.getLogger(__name__)


class InvalidTitleError(ValueError):
    """Raised when a title cannot be used as heading text."""

    pass


def validate_title(title: str) -> str:
    """Return the title unchanged, or raise if it cannot sit on a heading line."""
    if not title or not title.strip():
        raise InvalidTitleError("Title must not be empty")
    if "\n" in title or "\r" in title:
        raise InvalidTitleError(f"Title must fit on a single line: {title!r}")
    return title


def _unfinished_prefix(items: list[Node]) -> int:
    """Length of the leading run of unfinished tasks."""
    count = 0
    for item in items:
        if is_unfinished_task(item) is not TaskState.UNFINISHED:
            break
        count += 1
    return count


def start_next_day(document: Document, title: str) -> None:
    """
    Rotate the document into a new day, in place.

    Every top-level list gives up its leading unfinished items; they are
    gathered, in document order, into one list placed under a new level-1
    heading at the very top. What remains of each list stays where it was,
    and lists left with no items are dropped. Nested lists are not touched,
    so an unfinished item carries its whole subtree along.

    Expects the document to be sorted already; an unsorted list only gives
    up the unfinished items that happen to lead it.
    """
    validate_title(title)

    carried: list[Node] = []
    template: List | None = None
    remaining: Document = []

    for node in document:
        if is_list(node):
            split = _unfinished_prefix(node.children)
            if split:
                carried.extend(node.children[:split])
                del node.children[:split]
                template = template or node.tag
            if not node.children:
                continue
        remaining.append(node)

    logger.debug(f"Carrying {len(carried)} unfinished item(s) into {title!r}")

    today: Document = [Container(Heading(1), [Text(title)])]
    if carried:
        today.append(Container(template, carried))

    document[:] = today + remaining
