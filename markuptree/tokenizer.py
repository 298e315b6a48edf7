import json
import re
from dataclasses import dataclass

from markuptree.node import JSONValue, Property


TAG_RE = re.compile(r"([\w-]+)\s*(.+)?", re.DOTALL | re.ASCII)
ATTRIBUTE_RE = re.compile(r"""[\w-]+=(?:"[^"]*"|'[^']*')""", re.ASCII)
ATTRIBUTE_SPLIT_RE = re.compile(r"([\w-]+)\s*=\s*(.+)?", re.DOTALL | re.ASCII)


class MarkupSyntaxError(ValueError):
    """Raised when a "{...}" attribute value is not valid JSON."""

    def __init__(self, attribute: str, payload: str, reason: str) -> None:
        super().__init__(
            f"Invalid structured value for attribute {attribute!r}: {reason}"
        )
        self.attribute = attribute
        self.payload = payload


def split_attribute(token: str) -> Property:
    """
    Split a raw ``name="value"`` token.

    The value keeps its surrounding quotes. A double-quoted value shaped
    like ``"{...}"`` is decoded as JSON instead.
    """
    match = ATTRIBUTE_SPLIT_RE.match(token)
    if match is None:
        return Property(name=token, value="")

    name, value = match.group(1), match.group(2) or ""
    if value.startswith('"{') and value.endswith('}"'):
        payload = value[1:-1]
        try:
            structured: JSONValue = json.loads(payload)
        except json.JSONDecodeError as e:
            raise MarkupSyntaxError(name, payload, e.msg) from e
        return Property(name=name, value=structured)

    return Property(name=name, value=value)


@dataclass
class TagTokenizer:
    text: str = ""

    def parse(self) -> tuple[str, list[str]]:
        match = TAG_RE.search(self.text)
        if match is None:
            return ("", [])

        name, rest = match.group(1), match.group(2) or ""
        return (name.lower(), ATTRIBUTE_RE.findall(rest))

    def properties(self) -> tuple[str, list[Property]]:
        name, attributes = self.parse()
        return (name, [split_attribute(attr) for attr in attributes])

    @property
    def is_self_closing(self) -> bool:
        return self.text.endswith('/')


def tokenize(body: str) -> tuple[str, list[str]]:
    return TagTokenizer(text=body).parse()
