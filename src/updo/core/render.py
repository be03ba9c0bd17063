"""Markdown renderer - serialize a document tree back to todo-list markup.

List style is not stored on the nodes beyond a list's start number and bullet
marker, so the renderer re-derives bullets, numbering and indentation while it
walks. That state lives on the Renderer and is scoped: entering a container
swaps in new values and leaving it restores the caller's.
"""

import io
import re
from contextlib import contextmanager
from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterator, TextIO

from .document import (
    BlockQuote,
    Code,
    CodeBlock,
    Container,
    Document,
    Emphasis,
    Escape,
    Fenced,
    FootnoteReference,
    HardBreak,
    Heading,
    Html,
    Image,
    Indented,
    Item,
    Link,
    List,
    Node,
    Paragraph,
    Rule,
    SoftBreak,
    Strikethrough,
    Strong,
    TaskListMarker,
    Text,
    text_of,
)

INDENTED_CODE_MARGIN = "    "
QUOTE_MARGIN = "> "


class RenderError(Exception):
    """Raised when the output sink cannot be written."""

    pass


class Separator(Enum):
    """How consecutive siblings are laid out."""

    JOIN = "join"  # inline content, no break
    NEWLINE = "newline"  # each block on its own line
    BLANK_LINE = "blank_line"  # blocks separated by an empty line


@dataclass
class CharBullet:
    char: str = "*"

    def token(self) -> str:
        return f"{self.char} "


@dataclass
class NumberBullet:
    next: int = 1
    delimiter: str = "."

    def token(self) -> str:
        token = f"{self.next}{self.delimiter} "
        self.next += 1
        return token


Bullet = CharBullet | NumberBullet


def bullet_for(tag: List) -> Bullet:
    """Fresh bullet state for a list."""
    if tag.start is None:
        return CharBullet(tag.marker if tag.marker in ("-", "*", "+") else "*")
    return NumberBullet(tag.start, tag.marker if tag.marker in (".", ")") else ".")


def _distinct_list(tag: List, previous: List) -> List:
    """Pick a marker for ``tag`` that sets it apart from the list just before it."""
    if tag.ordered != previous.ordered:
        return tag
    if tag.ordered:
        delimiters = (".", ")")
        mine, theirs = bullet_for(tag).delimiter, bullet_for(previous).delimiter
    else:
        delimiters = ("-", "*", "+")
        mine, theirs = bullet_for(tag).char, bullet_for(previous).char
    if mine != theirs:
        return tag
    return replace(tag, marker=delimiters[(delimiters.index(mine) + 1) % len(delimiters)])


def _is_block(node: Node) -> bool:
    match node:
        case Container(tag=Heading() | Paragraph() | List() | Item() | CodeBlock() | BlockQuote()):
            return True
        case Rule():
            return True
        case Html(content=content):
            return content.endswith("\n")
    return False


def _longest_run(text: str, char: str) -> int:
    runs = re.findall(f"{re.escape(char)}+", text)
    return max((len(run) for run in runs), default=0)


def _code_span(content: str) -> str:
    ticks = "`" * (_longest_run(content, "`") + 1)
    if content.startswith("`") or content.endswith("`"):
        content = f" {content} "
    return f"{ticks}{content}{ticks}"


def _fence_for(content: str) -> str:
    return "`" * max(3, _longest_run(content, "`") + 1)


class Renderer:
    """
    Stateful document walker writing markup to a text sink.

    State carried down the tree:
        separator: layout between siblings of the current container
        bullet: bullet or counter of the innermost list
        indent: margin written at the start of each output line
    """

    def __init__(self, output: TextIO):
        self.output = output
        self.separator = Separator.BLANK_LINE
        self.bullet: Bullet = CharBullet()
        self.indent = ""
        self._at_line_start = True
        # Cursor sits right after a bullet or checkbox; a block may start here.
        self._after_bullet = False

    def render_document(self, document: Document) -> None:
        self._render_children(document)
        if not self._at_line_start:
            self._newline()

    @contextmanager
    def _scope(self, **state) -> Iterator[None]:
        saved = {name: getattr(self, name) for name in state}
        for name, value in state.items():
            setattr(self, name, value)
        try:
            yield
        finally:
            for name, value in saved.items():
                setattr(self, name, value)

    # Output primitives

    def _emit(self, text: str) -> None:
        try:
            self.output.write(text)
        except OSError as e:
            raise RenderError(f"Failed to write output: {e}") from e

    def _write(self, text: str) -> None:
        """Write text, starting every new line at the current margin."""
        for i, line in enumerate(text.split("\n")):
            if i:
                self._newline()
            if line:
                if self._at_line_start:
                    self._emit(self.indent)
                    self._at_line_start = False
                self._emit(line)
                self._after_bullet = False

    def _newline(self) -> None:
        if self._at_line_start:
            # Blank line: no trailing spaces, but a quote keeps its ">".
            self._emit(self.indent.rstrip())
        self._emit("\n")
        self._at_line_start = True
        self._after_bullet = False

    def _end_line(self) -> None:
        if not self._at_line_start:
            self._newline()

    def _start_block(self) -> None:
        if not self._at_line_start and not self._after_bullet:
            self._newline()

    # Tree walk

    def _render_children(self, nodes: list[Node]) -> None:
        previous = None
        list_tag = None
        for node in nodes:
            if previous is not None:
                self._separate(previous, node)
            if isinstance(node, Container) and isinstance(node.tag, List):
                # Back-to-back lists with the same marker would read back as one list.
                list_tag = _distinct_list(node.tag, list_tag) if list_tag else node.tag
                self._render_container(list_tag, node.children)
            else:
                self._render_node(node)
                list_tag = None
            previous = node

    def _separate(self, previous: Node, node: Node) -> None:
        if self.separator is Separator.JOIN:
            return
        if _is_block(node) and not self._at_line_start and not self._after_bullet:
            self._newline()
        if self.separator is Separator.BLANK_LINE and _is_block(previous) and self._at_line_start:
            self._newline()

    def _render_node(self, node: Node) -> None:
        match node:
            case Container(tag=tag, children=kids):
                self._render_container(tag, kids)
            case Text(content=content) | Html(content=content):
                self._write(content)
            case Code(content=content):
                self._write(_code_span(content))
            case Escape(markup=markup):
                self._write(markup)
            case FootnoteReference(label=label):
                self._write(f"[^{label}]")
            case SoftBreak():
                self._newline()
            case HardBreak():
                self._write("  ")
                self._newline()
            case Rule():
                self._start_block()
                self._write("---")
                self._newline()
            case TaskListMarker(checked=checked):
                self._write("[x] " if checked else "[ ] ")
                self._after_bullet = True

    def _render_container(self, tag, kids: list[Node]) -> None:
        match tag:
            case Heading(level=level):
                self._start_block()
                self._write("#" * max(level, 1) + " ")
                with self._scope(separator=Separator.JOIN):
                    self._render_children(kids)
                self._newline()

            case Paragraph():
                with self._scope(separator=Separator.JOIN):
                    self._render_children(kids)
                self._end_line()

            case List(tight=tight):
                separator = Separator.NEWLINE if tight else Separator.BLANK_LINE
                with self._scope(bullet=bullet_for(tag), separator=separator):
                    self._render_children(kids)

            case Item():
                token = self.bullet.token()
                self._write(token if kids else token.rstrip())
                self._after_bullet = True
                with self._scope(indent=self.indent + " " * len(token)):
                    self._render_children(kids)
                self._end_line()

            case CodeBlock(kind=Fenced(language=language)):
                self._start_block()
                content = text_of(kids)
                fence = _fence_for(content)
                self._write(f"{fence}{language}")
                self._newline()
                self._write(content)
                self._end_line()
                self._write(fence)
                self._newline()

            case CodeBlock(kind=Indented()):
                self._end_line()
                with self._scope(indent=self.indent + INDENTED_CODE_MARGIN):
                    self._write(text_of(kids))
                    self._end_line()

            case BlockQuote():
                with self._scope(indent=self.indent + QUOTE_MARGIN, separator=Separator.BLANK_LINE):
                    self._start_block()
                    if self._after_bullet:
                        self._emit(QUOTE_MARGIN)
                    self._render_children(kids)
                self._end_line()

            case Emphasis(marker=marker) | Strong(marker=marker):
                self._wrap(marker, kids, marker)

            case Strikethrough():
                self._wrap("~~", kids, "~~")

            case Link(url=url, title=title):
                self._wrap("[", kids, f"]({_destination(url, title)})")

            case Image(url=url, title=title):
                self._wrap("![", kids, f"]({_destination(url, title)})")

            case _:
                # Unknown structure: keep the content, drop the markup.
                self._render_children(kids)

    def _wrap(self, opening: str, kids: list[Node], closing: str) -> None:
        self._write(opening)
        with self._scope(separator=Separator.JOIN):
            self._render_children(kids)
        self._write(closing)


def _destination(url: str, title: str) -> str:
    if " " in url:
        url = f"<{url}>"
    if title:
        escaped = title.replace('"', '\\"')
        return f'{url} "{escaped}"'
    return url


def render_to(document: Document, output: TextIO) -> None:
    """Render a document into a writable text sink."""
    Renderer(output).render_document(document)


def render(document: Document) -> str:
    """Render a document to a string."""
    buf = io.StringIO()
    render_to(document, buf)
    return buf.getvalue()
