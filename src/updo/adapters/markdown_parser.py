"""markdown-it-py adapter - parse todo-list markup into a document tree."""

import logging
import re

from markdown_it import MarkdownIt
from markdown_it.tree import SyntaxTreeNode

from updo.core.document import (
    BlockQuote,
    Code,
    CodeBlock,
    Container,
    Document,
    Emphasis,
    Escape,
    Fenced,
    HardBreak,
    Heading,
    Html,
    Image,
    Indented,
    Item,
    Link,
    List,
    Node,
    OtherTag,
    Paragraph,
    Rule,
    SoftBreak,
    Strikethrough,
    Strong,
    TaskListMarker,
    Text,
)

logger = logging.getLogger(__name__)

TASK_MARKER = re.compile(r"\[([ xX])\][ \t]+")


def default_markdown() -> MarkdownIt:
    """CommonMark plus GFM strikethrough.

    ``text_join`` is off so escapes and entities stay separate tokens that
    remember how they were written.
    """
    return MarkdownIt("commonmark").enable("strikethrough").disable("text_join")


class MarkdownItParser:
    """
    Parser backed by markdown-it-py.

    Implements DocumentParser protocol. Paragraphs of tight lists are
    unwrapped so their inline content sits directly in the item, and a
    leading ``[ ]``/``[x]`` in an item becomes a TaskListMarker.
    """

    def __init__(self, md: MarkdownIt | None = None):
        self.md = md or default_markdown()

    def parse(self, text: str) -> Document:
        root = SyntaxTreeNode(self.md.parse(text))
        return self._convert_all(root.children)

    def _convert_all(self, nodes: list[SyntaxTreeNode]) -> list[Node]:
        out: list[Node] = []
        for node in nodes:
            out.extend(self._convert(node))
        return out

    def _convert(self, node: SyntaxTreeNode) -> list[Node]:
        match node.type:
            case "heading":
                level = int(node.tag[1:])
                return [Container(Heading(level), self._convert_all(node.children))]
            case "paragraph":
                inline = self._convert_all(node.children)
                if node.hidden:
                    return inline
                return [Container(Paragraph(), inline)]
            case "inline":
                return self._convert_all(node.children)
            case "bullet_list":
                tag = List(start=None, marker=node.markup or None, tight=_is_tight(node))
                return [Container(tag, self._convert_all(node.children))]
            case "ordered_list":
                start = int(node.attrs.get("start", 1))
                tag = List(start=start, marker=node.markup or None, tight=_is_tight(node))
                return [Container(tag, self._convert_all(node.children))]
            case "list_item":
                return [Container(Item(), _with_task_marker(self._convert_all(node.children)))]
            case "fence":
                return [Container(CodeBlock(Fenced(node.info.strip())), [Text(node.content)])]
            case "code_block":
                return [Container(CodeBlock(Indented()), [Text(node.content)])]
            case "blockquote":
                return [Container(BlockQuote(), self._convert_all(node.children))]
            case "hr":
                return [Rule()]
            case "html_block" | "html_inline":
                return [Html(node.content)]
            case "text":
                return [Text(node.content)]
            case "text_special":
                return [Escape(node.content, node.markup)]
            case "softbreak":
                return [SoftBreak()]
            case "hardbreak":
                return [HardBreak()]
            case "code_inline":
                return [Code(node.content)]
            case "em":
                return [Container(Emphasis(node.markup), self._convert_all(node.children))]
            case "strong":
                return [Container(Strong(node.markup), self._convert_all(node.children))]
            case "s":
                return [Container(Strikethrough(), self._convert_all(node.children))]
            case "link":
                if node.markup == "autolink":
                    label = "".join(child.content for child in node.children)
                    return [Text(f"<{label}>")]
                tag = Link(str(node.attrs.get("href", "")), str(node.attrs.get("title", "")))
                return [Container(tag, self._convert_all(node.children))]
            case "image":
                tag = Image(str(node.attrs.get("src", "")), str(node.attrs.get("title", "")))
                return [Container(tag, self._convert_all(node.children))]
            case _:
                logger.debug(f"Passing through unknown markdown node: {node.type}")
                return [Container(OtherTag(node.type), self._convert_all(node.children))]


def _is_tight(list_node: SyntaxTreeNode) -> bool:
    """A list is tight unless one of its items holds a visible paragraph."""
    for item in list_node.children:
        for child in item.children:
            if child.type == "paragraph" and not child.hidden:
                return False
    return True


def _with_task_marker(kids: list[Node]) -> list[Node]:
    """Split a leading checkbox off an item's text into a TaskListMarker."""
    if not kids:
        return kids

    first = kids[0]
    inline = first.children if isinstance(first, Container) and isinstance(first.tag, Paragraph) else kids
    if not inline or not isinstance(inline[0], Text):
        return kids

    match = TASK_MARKER.match(inline[0].content)
    if not match:
        return kids

    rest = inline[0].content[match.end() :]
    inline[0:1] = [Text(rest)] if rest else []
    return [TaskListMarker(match.group(1) in "xX"), *kids]
