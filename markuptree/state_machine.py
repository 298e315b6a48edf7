import logging
from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
from typing import Literal


logger = logging.getLogger(__name__)


class ParserState(Enum):
    SCANNING = 1
    IN_COMMENT = 2
    DONE = 3
    FAILED = 4


TokenKind = Literal['text', 'trailing_text', 'tag', 'comment']


@dataclass
class TagScanner:
    """
    Splits markup into raw text runs, tag bodies and comment interiors.

    The scanner only moves forward. It stops quietly when a tag or comment
    has no terminator, leaving the rest of the input unread.
    """
    markup: str = ""
    cursor: int = 0
    state: ParserState = ParserState.SCANNING

    def find_tag_start(self, cursor: int) -> int:
        return self.markup.find('<', cursor)

    def find_tag_end(self, tag_start: int) -> int:
        # '>' between double quotes belongs to an attribute value, unless
        # the quotes never balance; then the first '>' ends the tag
        in_quote = False
        for i in range(tag_start, len(self.markup)):
            c = self.markup[i]
            if c == '"':
                in_quote = not in_quote
            elif c == '>' and not in_quote:
                return i
        return self.markup.find('>', tag_start)

    def find_comment_end(self, tag_start: int) -> int:
        return self.markup.find('-->', tag_start)

    def truncate(self, offset: int, reason: str) -> None:
        logger.debug(
            "%s at offset %d, dropping %d trailing characters",
            reason, offset, len(self.markup) - offset
        )
        self.state = ParserState.DONE

    def tokens(self) -> Iterator[tuple[TokenKind, str]]:
        markup = self.markup
        while self.state == ParserState.SCANNING and self.cursor < len(markup):
            tag_start = self.find_tag_start(self.cursor)
            if tag_start == -1:
                text = markup[self.cursor:]
                self.cursor = len(markup)
                yield ("trailing_text", text)
                break

            if tag_start > self.cursor:
                yield ("text", markup[self.cursor:tag_start])

            tag_end = self.find_tag_end(tag_start)
            if tag_end == -1:
                self.truncate(tag_start, "unterminated tag")
                return

            body = markup[tag_start + 1:tag_end].strip()
            if body.startswith('!--'):
                self.state = ParserState.IN_COMMENT
                comment_end = self.find_comment_end(tag_start)
                if comment_end == -1:
                    self.truncate(tag_start, "unterminated comment")
                    return
                yield ("comment", markup[tag_start + 4:comment_end])
                self.cursor = comment_end + 3
                self.state = ParserState.SCANNING
            else:
                yield ("tag", body)
                self.cursor = tag_end + 1

        if self.state == ParserState.SCANNING:
            self.state = ParserState.DONE

    def process_string(self) -> list[tuple[TokenKind, str]]:
        """Collect every token at once. Used by tests and the debug CLI."""
        return list(self.tokens())
