import logging
from dataclasses import dataclass, field

from markuptree.entities import unescape
from markuptree.node import Comment, Element, Node, Text
from markuptree.state_machine import ParserState, TagScanner
from markuptree.tokenizer import MarkupSyntaxError, TagTokenizer


logger = logging.getLogger(__name__)


def print_tree(node: Node, indent: int = 0) -> None:
    print(" " * indent, node)
    if isinstance(node, Element):
        for child in node.children:
            print_tree(child, indent + 2)


@dataclass
class MarkupParser:
    body: str = ""
    unfinished: list[Element] = field(default_factory=list)
    result: list[Node] = field(default_factory=list)
    scanner: TagScanner | None = None

    @property
    def state(self) -> ParserState:
        if self.scanner is None:
            return ParserState.SCANNING
        return self.scanner.state

    def parse(self) -> list[Node]:
        self.scanner = TagScanner(markup=self.body)
        try:
            for kind, value in self.scanner.tokens():
                if kind == "text":
                    self.add_text(value)
                elif kind == "trailing_text":
                    self.add_trailing_text(value)
                elif kind == "comment":
                    self.add_comment(value)
                elif kind == "tag":
                    self.add_tag(value)
        except MarkupSyntaxError:
            self.scanner.state = ParserState.FAILED
            raise

        return self.result

    def append(self, node: Node) -> None:
        if self.unfinished:
            self.unfinished[-1].children.append(node)
        else:
            self.result.append(node)

    def add_text(self, text: str) -> None:
        value = unescape(text)
        if value:
            self.append(Text(value=value))

    def add_trailing_text(self, text: str) -> None:
        # the last run always lands at the top level, even under an open element
        value = unescape(text)
        if value:
            self.result.append(Text(value=value))

    def add_comment(self, text: str) -> None:
        self.append(Comment(value=text))

    def add_tag(self, tag: str) -> None:
        if tag.startswith('/'):
            if not self.unfinished:
                logger.debug("ignoring stray closing tag <%s>", tag)
                return
            self.unfinished.pop()
            return

        tokenizer = TagTokenizer(text=tag)
        name, properties = tokenizer.properties()
        node = Element(name=name, properties=properties)
        self.append(node)

        if not tokenizer.is_self_closing and name not in Element.VOID_TAGS:
            self.unfinished.append(node)


def parse(markup: str) -> list[Node]:
    """
    Parse markup into a list of top-level nodes.

    Closing tags pop whatever element is open, without checking names.
    Unterminated tags and comments end the parse early; the nodes built
    so far are returned. Only a malformed "{...}" attribute value raises
    (MarkupSyntaxError).
    """
    return MarkupParser(body=markup).parse()
