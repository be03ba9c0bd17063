"""Document tree for markdown todo lists - pure data, no I/O.

A document is a plain list of nodes. Containers own their children outright;
there are no parent pointers, so every transform is a rewrite of some
container's ``children`` list.
"""

from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Union


# Tags


@dataclass(frozen=True)
class Heading:
    level: int = 1


@dataclass(frozen=True)
class Paragraph:
    pass


@dataclass(frozen=True)
class List:
    """A bullet list (``start is None``) or an ordered list starting at ``start``.

    ``marker`` is the bullet character (``-``, ``*``, ``+``) or the ordered
    delimiter (``.``, ``)``) seen in the source; None means the default.
    """

    start: int | None = None
    marker: str | None = None
    tight: bool = True

    @property
    def ordered(self) -> bool:
        return self.start is not None


@dataclass(frozen=True)
class Item:
    pass


@dataclass(frozen=True)
class Fenced:
    language: str = ""


@dataclass(frozen=True)
class Indented:
    pass


@dataclass(frozen=True)
class CodeBlock:
    kind: Fenced | Indented = field(default_factory=Indented)


@dataclass(frozen=True)
class BlockQuote:
    pass


@dataclass(frozen=True)
class Emphasis:
    marker: str = "*"


@dataclass(frozen=True)
class Strong:
    marker: str = "**"


@dataclass(frozen=True)
class Strikethrough:
    pass


@dataclass(frozen=True)
class Link:
    url: str
    title: str = ""


@dataclass(frozen=True)
class Image:
    url: str
    title: str = ""


@dataclass(frozen=True)
class OtherTag:
    """A structure the parser produced but nothing here understands."""

    name: str


Tag = Union[
    Heading,
    Paragraph,
    List,
    Item,
    CodeBlock,
    BlockQuote,
    Emphasis,
    Strong,
    Strikethrough,
    Link,
    Image,
    OtherTag,
]


# Nodes


@dataclass
class Container:
    tag: Tag
    children: list["Node"] = field(default_factory=list)


@dataclass(frozen=True)
class Text:
    content: str


@dataclass(frozen=True)
class Code:
    content: str


@dataclass(frozen=True)
class Html:
    """Raw HTML. Block-level HTML keeps its trailing newline, inline HTML has none."""

    content: str


@dataclass(frozen=True)
class FootnoteReference:
    label: str


@dataclass(frozen=True)
class Escape:
    """A backslash escape or entity: the character it stands for and how the source spelled it."""

    content: str
    markup: str


@dataclass(frozen=True)
class SoftBreak:
    pass


@dataclass(frozen=True)
class HardBreak:
    pass


@dataclass(frozen=True)
class Rule:
    pass


@dataclass(frozen=True)
class TaskListMarker:
    checked: bool = False


Node = Union[
    Container,
    Text,
    Code,
    Html,
    FootnoteReference,
    Escape,
    SoftBreak,
    HardBreak,
    Rule,
    TaskListMarker,
]

Document = list[Node]


class TaskState(Enum):
    """Checklist classification of a node."""

    UNFINISHED = "unfinished"
    FINISHED = "finished"
    NOT_A_TASK = "not_a_task"


def is_unfinished_task(node: Node) -> TaskState:
    """Classify a node as an unfinished task, a finished task, or neither.

    A marker classifies by its own flag. An item classifies by the first
    marker among its immediate children; markers deeper in the tree belong to
    nested items and do not count.
    """
    match node:
        case TaskListMarker(checked=checked):
            return TaskState.FINISHED if checked else TaskState.UNFINISHED
        case Container(tag=Item(), children=kids):
            for child in kids:
                if isinstance(child, TaskListMarker):
                    return is_unfinished_task(child)
    return TaskState.NOT_A_TASK


def children(node: Node) -> list[Node] | tuple[()]:
    """Return the children of a container (the live list) or () for a leaf."""
    if isinstance(node, Container):
        return node.children
    return ()


def is_list(node: Node) -> bool:
    return isinstance(node, Container) and isinstance(node.tag, List)


def walk(document: Document) -> Iterator[Node]:
    """Yield every node in the tree, depth-first, parents before children."""
    for node in document:
        yield node
        yield from walk(children(node))


def count_tasks(document: Document) -> Counter:
    """Count list items by checklist state across the whole tree."""
    return Counter(
        is_unfinished_task(node)
        for node in walk(document)
        if isinstance(node, Container) and isinstance(node.tag, Item)
    )


def text_of(nodes: list[Node]) -> str:
    """Concatenate the literal content of a run of leaves."""
    parts = []
    for node in walk(nodes):
        match node:
            case Text(content=content) | Code(content=content) | Html(content=content) | Escape(content=content):
                parts.append(content)
            case SoftBreak() | HardBreak():
                parts.append("\n")
    return "".join(parts)
