from dataclasses import dataclass, field
from typing import Any, ClassVar, Literal, TypeAlias


JSONValue: TypeAlias = (
    None | bool | int | float | str | list['JSONValue'] | dict[str, 'JSONValue']
)


@dataclass
class Property:
    name: str
    value: str | JSONValue = ""

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "value": self.value}


@dataclass
class Node:
    name: str = ""

    def to_dict(self) -> dict[str, Any]:
        raise NotImplementedError()


@dataclass
class Text(Node):
    name: Literal['text'] = field(default='text', init=False)
    value: str = ""

    def __repr__(self) -> str:
        return repr(self.value)

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "value": self.value}


@dataclass
class Comment(Node):
    name: Literal['comment'] = field(default='comment', init=False)
    value: str = ""

    def __repr__(self) -> str:
        return f"<!--{self.value}-->"

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "value": self.value}


@dataclass
class Element(Node):
    VOID_TAGS: ClassVar[tuple[str, ...]] = ('br',)

    properties: list[Property] = field(default_factory=list)
    children: list[Node] = field(default_factory=list)

    def __repr__(self) -> str:
        if self.properties:
            return f"<{self.name} {self.property_str}>"
        return f"<{self.name}>"

    @property
    def property_str(self) -> str:
        props: list[str] = []
        for prop in self.properties:
            if isinstance(prop.value, str):
                props.append(f"{prop.name}={prop.value}")
            else:
                props.append(f"{prop.name}={prop.value!r}")
        return " ".join(props)

    def get(self, name: str) -> str | JSONValue:
        """Return the value of the first property called ``name``, or None."""
        for prop in self.properties:
            if prop.name == name:
                return prop.value
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "properties": [prop.to_dict() for prop in self.properties],
            "children": [child.to_dict() for child in self.children],
        }


def to_json_ready(nodes: list[Node]) -> list[dict[str, Any]]:
    return [node.to_dict() for node in nodes]
